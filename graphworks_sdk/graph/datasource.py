# graphworks_sdk/graph/datasource.py
# SPDX-License-Identifier: Apache-2.0
"""
GraphWorks data source.

Queries the GraphWorks knowledge-graph service and returns node-graph
frames:

    settings = DataSourceSettings(url="http://graphworks:8080", uid="gw", name="GraphWorks")
    datasource = WorksDataSource(settings)

    frames = await datasource.execute_graph_query(WorksQuery(dataset="gdelt"))
    nodes, edges = frames

The data source holds no mutable state; every operation issues exactly
one request and may be called concurrently. Failures propagate to the
caller with debugging context attached (see core.error_context); no
partial frames are ever returned.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from graphworks_sdk.core.error_context import attach_context
from graphworks_sdk.core.operation_context import OperationContext
from graphworks_sdk.graph.frames import DataFrame, GraphFrames
from graphworks_sdk.graph.graph_base import (
    DATASETS_PATH,
    NETWORK_PATH,
    PING_PATH,
    BadRequest,
    DataSourceSettings,
    Dataset,
    MalformedResponse,
    MetricsSink,
    NoopMetrics,
    QueryRequest,
    WorksAdapterError,
    WorksDataSourceProtocol,
    WorksQuery,
    dataset_from_wire,
    graph_records_from_wire,
)
from graphworks_sdk.graph.links import make_links
from graphworks_sdk.graph.transform import FIELD_ID, parse_graph_response
from graphworks_sdk.graph.transport import FetchRequest, HttpxTransport, Transport

LOG = logging.getLogger(__name__)

ERROR_ORIGIN = "graphworks"

# Resolved by the UI against the hovered node row.
NODE_QUERY_TEMPLATE = 'node(name: "${__data.fields.title}", type: "${__data.fields.subTitle}")'


@dataclass
class QueryResponse:
    """Frames produced for a query request."""
    data: List[DataFrame] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"data": [frame.to_dict() for frame in self.data]}


class WorksDataSource(WorksDataSourceProtocol):
    """
    Client for the GraphWorks service.

    Responsibilities:
        - Compose requests (URL, body, credentials) from DataSourceSettings.
        - Validate and normalize response payloads.
        - Transform graph payloads into node/edge frames with node links.
        - SIEM-safe metrics and error context.

    Not responsible for caching, retries, timeouts or multi-query batches.
    """

    _component = "graphworks"

    def __init__(
        self,
        settings: DataSourceSettings,
        *,
        transport: Optional[Transport] = None,
        metrics: Optional[MetricsSink] = None,
    ) -> None:
        self._settings = settings
        self._transport: Transport = transport or HttpxTransport()
        self._metrics: MetricsSink = metrics or NoopMetrics()

    @property
    def settings(self) -> DataSourceSettings:
        return self._settings

    # ---- internal helpers ---------------------------------------------------

    def _record(self, op: str, t0: float, ok: bool, *, code: str = "OK", **extra: Any) -> None:
        try:
            self._metrics.observe(
                component=self._component,
                op=op,
                ms=(time.monotonic() - t0) * 1000.0,
                ok=ok,
                code=code,
                extra=extra or None,
            )
        except Exception:
            # never let metrics break caller
            pass

    def _request(self, path: str, method: str = "GET", data: Optional[Mapping[str, Any]] = None) -> FetchRequest:
        """Compose a request, assigning credentials when configured."""
        headers: Dict[str, str] = {}
        with_credentials = self._settings.sends_credentials
        if self._settings.basic_auth:
            headers["Authorization"] = self._settings.basic_auth
        return FetchRequest(
            url=f"{self._settings.url}{path}",
            method=method,
            headers=headers,
            data=dict(data) if data is not None else None,
            with_credentials=with_credentials,
        )

    async def _run(
        self,
        *,
        op: str,
        ctx: Optional[OperationContext],
        call: Callable[[OperationContext], Awaitable[Any]],
        context: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Run one operation:
        - assigns a request id
        - records metrics
        - attaches error context on failure and re-raises unchanged
        """
        ctx = (ctx or OperationContext()).ensure_request_id()
        t0 = time.monotonic()
        try:
            result = await call(ctx)
            self._record(op, t0, True)
            return result
        except WorksAdapterError as e:
            self._record(op, t0, False, code=e.code or type(e).__name__)
            attach_context(e, ERROR_ORIGIN, operation=op, request_id=ctx.request_id, **dict(context or {}))
            LOG.debug("%s failed [request_id=%s]: %s", op, ctx.request_id, e)
            raise
        except Exception as e:
            self._record(op, t0, False, code="UnhandledException")
            attach_context(e, ERROR_ORIGIN, operation=op, request_id=ctx.request_id, **dict(context or {}))
            raise

    # --- public API ----------------------------------------------------------

    async def query(
        self,
        request: QueryRequest,
        *,
        ctx: Optional[OperationContext] = None,
    ) -> QueryResponse:
        """
        Execute a batched query request.

        Multiple queries are not supported: only the first target is
        executed and the rest are ignored.
        """
        if not request.targets:
            raise BadRequest("query request has no targets")
        ignored = len(request.targets) - 1
        if ignored:
            LOG.debug("ignoring %d additional query target(s)", ignored)
            try:
                self._metrics.counter(
                    component=self._component,
                    name="ignored_targets",
                    value=ignored,
                    extra={"op": "query"},
                )
            except Exception:
                pass

        if ctx is None and request.request_id:
            ctx = OperationContext(request_id=request.request_id)

        frames = await self.execute_graph_query(request.targets[0], ctx=ctx)
        return QueryResponse(data=list(frames))

    async def execute_graph_query(
        self,
        query: WorksQuery,
        *,
        ctx: Optional[OperationContext] = None,
    ) -> GraphFrames:
        """
        POST the query to /network and transform the response.

        The response is an object with two entries, `nodes` and `edges`.
        The node frame's id field carries the context-menu links.
        """
        async def _call(ctx: OperationContext) -> GraphFrames:
            if not isinstance(query.dataset, str) or not query.dataset:
                raise BadRequest("query.dataset must be a non-empty string")

            LOG.debug("querying dataset %r [request_id=%s]", query.dataset, ctx.request_id)
            body = await self._transport.fetch(
                self._request(NETWORK_PATH, "POST", query.to_wire())
            )
            nodes, edges = graph_records_from_wire(body)
            frames = parse_graph_response(nodes, edges)
            frames.nodes.get_field(FIELD_ID).config["links"] = make_links(
                NODE_QUERY_TEMPLATE, self._settings
            )
            return frames

        return await self._run(
            op="query",
            ctx=ctx,
            call=_call,
            context={"dataset": query.dataset},
        )

    async def get_datasets(self, *, ctx: Optional[OperationContext] = None) -> List[Dataset]:
        """
        The service provides a set of network graphs addressed by name.
        Returns them sorted by label, ready to be used as select options.
        """
        async def _call(ctx: OperationContext) -> List[Dataset]:
            body = await self._transport.fetch(self._request(DATASETS_PATH))
            if not isinstance(body, list):
                raise MalformedResponse(
                    f"datasets response must be an array, got {type(body).__name__}"
                )
            datasets = [dataset_from_wire(raw, i) for i, raw in enumerate(body)]
            return sorted(datasets, key=lambda d: d.label)

        return await self._run(op="datasets", ctx=ctx, call=_call)

    async def test_datasource(self, *, ctx: Optional[OperationContext] = None) -> Dict[str, Any]:
        """
        Connection test: pings the service and passes its status and
        message through.
        """
        async def _call(ctx: OperationContext) -> Dict[str, Any]:
            body = await self._transport.fetch(self._request(PING_PATH))
            if not isinstance(body, Mapping):
                raise MalformedResponse(
                    f"ping response must be an object, got {type(body).__name__}"
                )
            return {"status": body.get("status"), "message": body.get("message")}

        return await self._run(op="ping", ctx=ctx, call=_call)


__all__ = [
    "NODE_QUERY_TEMPLATE",
    "QueryResponse",
    "WorksDataSource",
]
