# graphworks_sdk/graph/graph_base.py
# SPDX-License-Identifier: Apache-2.0
"""
GraphWorks Data Source: Core Types

Purpose
-------
Shared contract for the GraphWorks knowledge-graph data source:

- Typed records for the remote service payloads (nodes, edges, datasets)
- Query request types (single target and batched request)
- Connection settings (instance settings, env-based configuration)
- Structured, normalized error taxonomy (SIEM-safe, machine-actionable)
- Explicit wire → record mapping functions
- Metrics sink protocol

Design Philosophy
-----------------
- The remote payload is trusted but type-normalized: every record type has
  one exhaustive mapping function; unknown keys are dropped.
- Malformed top-level shapes fail before any frame is built.
- No caching, retries or timeouts live here; callers layer them on.

Wire Contract
-------------
Relative to the configured base URL:

    POST /network    {dataset, query, type}  ->  {nodes: [...], edges: [...]}
    GET  /datasets                           ->  [{index, label, value}, ...]
    GET  /ping                               ->  {status, message}

Raw node:  {id, title, subTitle, mainStat, ...}
Raw edge:  {id, src, dst, name, ...}
"""

from __future__ import annotations

import base64
import enum
import logging
import os
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

LOG = logging.getLogger(__name__)

GRAPHWORKS_PROTOCOL_VERSION = "1.0.0"

NETWORK_PATH = "/network"
DATASETS_PATH = "/datasets"
PING_PATH = "/ping"

MainStat = Union[int, float, str, None]

# =============================================================================
# Normalized Errors
# =============================================================================


class WorksAdapterError(Exception):
    """
    Base exception for GraphWorks data source errors.

    Attributes:
        message: Human-readable description.
        code: Machine-readable, UPPER_SNAKE_CASE error code.
        details: Additional, SIEM-safe machine context (no credentials).
    """
    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = dict(details or {})

    def __str__(self) -> str:
        base = self.message or self.__class__.__name__
        if self.code:
            base += f" [code={self.code}]"
        if self.details:
            base += f" details={self.details}"
        return base


class BadRequest(WorksAdapterError):
    """Client error: missing query target or dataset."""
    def __init__(self, message: str, **kw: Any):
        kw.setdefault("code", "BAD_REQUEST")
        super().__init__(message, **kw)


class TransportError(WorksAdapterError):
    """Network/connection failure or non-2xx HTTP status. Never retried here."""
    def __init__(self, message: str, *, status_code: Optional[int] = None, **kw: Any):
        kw.setdefault("code", "TRANSPORT_ERROR")
        if status_code is not None:
            kw["details"] = {**dict(kw.get("details") or {}), "status_code": status_code}
        super().__init__(message, **kw)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """
    Transport failure caused by missing/invalid credentials (401/403).

    Subclasses TransportError so callers handling transport failures
    generically still catch it.
    """
    def __init__(self, message: str, **kw: Any):
        kw.setdefault("code", "AUTH_ERROR")
        super().__init__(message, **kw)


class MalformedResponse(WorksAdapterError):
    """Response body missing required keys or of the wrong shape."""
    def __init__(self, message: str, **kw: Any):
        kw.setdefault("code", "MALFORMED_RESPONSE")
        super().__init__(message, **kw)


# =============================================================================
# Metrics
# =============================================================================


class MetricsSink(Protocol):
    """
    Metrics collection protocol (low-cardinality; SIEM-safe).
    """
    def observe(
        self,
        *,
        component: str,
        op: str,
        ms: float,
        ok: bool,
        code: str = "OK",
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None:
        ...

    def counter(
        self,
        *,
        component: str,
        name: str,
        value: int = 1,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None:
        ...


class NoopMetrics:
    def observe(self, **_: Any) -> None:
        ...
    def counter(self, **_: Any) -> None:
        ...


# =============================================================================
# Records
# =============================================================================


class Category(str, enum.Enum):
    """Closed set of node categories derived from a node's subTitle."""
    DEFAULT = "default"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"


class QueryType(str, enum.Enum):
    """Query types understood by the GraphWorks backend."""
    GET_EVENTS = "getEvents"
    GET_MENTIONS = "getMentions"


@dataclass(frozen=True)
class Node:
    """
    Graph node as returned by the service, after normalization.

    Attributes:
        id: Unique within one response; referenced by Edge.src / Edge.dst.
        title: Display name.
        sub_title: Category tag (see Category).
        main_stat: Score shown inside the node (number or string).
    """
    id: str
    title: str = ""
    sub_title: Optional[str] = ""
    main_stat: MainStat = None


@dataclass(frozen=True)
class Edge:
    """
    Directed graph edge, after normalization.

    Attributes:
        id: Edge identifier.
        src: Source node id.
        dst: Target node id.
        main_stat: Edge label shown on hover.
    """
    id: str
    src: str
    dst: str
    main_stat: str = ""


@dataclass(frozen=True)
class Dataset:
    """A named graph exposed by the service; doubles as a select option."""
    index: Any
    label: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "label": self.label, "value": self.value}


@dataclass(frozen=True)
class WorksQuery:
    """
    A single query target.

    Attributes:
        dataset: Name of the graph to query.
        query: Optional free-text query understood by the backend.
        query_type: Optional query type (see QueryType).
    """
    dataset: str
    query: Optional[str] = None
    query_type: Optional[str] = None

    def to_wire(self) -> Dict[str, str]:
        """Request body for POST /network."""
        return {
            "dataset": self.dataset,
            "query": self.query or "",
            "type": getattr(self.query_type, "value", self.query_type) or "",
        }


@dataclass(frozen=True)
class QueryRequest:
    """
    A batched query request. Only the first target is executed.
    """
    targets: Sequence[WorksQuery]
    request_id: Optional[str] = None


# =============================================================================
# Connection settings
# =============================================================================

_TRUTHY = {"1", "true", "yes", "on"}


def basic_auth_header(user: str, password: str) -> str:
    """Build the value of a basic-auth `Authorization` header."""
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


@dataclass(frozen=True)
class DataSourceSettings:
    """
    Connection identity and credentials policy.

    Attributes:
        url: Base URL of the GraphWorks service (no trailing slash).
        uid: Data source uid, copied into context-menu links.
        name: Data source name, copied into context-menu links.
        with_credentials: Send credentials with cross-origin requests.
        basic_auth: Preconfigured `Authorization` header value, if any.
    """
    url: str
    uid: str = ""
    name: str = ""
    with_credentials: bool = False
    basic_auth: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.url, str) or not self.url.strip():
            raise BadRequest("settings.url must be a non-empty string")
        object.__setattr__(self, "url", self.url.strip().rstrip("/"))

    @property
    def sends_credentials(self) -> bool:
        return bool(self.with_credentials or self.basic_auth)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DataSourceSettings":
        """Build settings from the instance-settings JSON shape."""
        return cls(
            url=data.get("url") or "",
            uid=data.get("uid") or "",
            name=data.get("name") or "",
            with_credentials=bool(data.get("withCredentials")),
            basic_auth=data.get("basicAuth") or None,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DataSourceSettings":
        """
        Build settings from GRAPHWORKS_* environment variables.

        GRAPHWORKS_URL is required; GRAPHWORKS_UID, GRAPHWORKS_NAME,
        GRAPHWORKS_WITH_CREDENTIALS and GRAPHWORKS_BASIC_AUTH are optional.
        """
        env = os.environ if environ is None else environ
        return cls(
            url=env.get("GRAPHWORKS_URL", ""),
            uid=env.get("GRAPHWORKS_UID", ""),
            name=env.get("GRAPHWORKS_NAME", ""),
            with_credentials=env.get("GRAPHWORKS_WITH_CREDENTIALS", "").strip().lower() in _TRUTHY,
            basic_auth=env.get("GRAPHWORKS_BASIC_AUTH") or None,
        )


# =============================================================================
# Wire -> record mapping
# =============================================================================


def _require_mapping(raw: Any, what: str, index: int) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedResponse(
            f"{what}[{index}] must be an object, got {type(raw).__name__}",
            details={"index": index},
        )
    return raw


def _require_id(raw: Mapping[str, Any], key: str, what: str, index: int) -> str:
    value = raw.get(key)
    if value is None or value == "":
        raise MalformedResponse(
            f"{what}[{index}].{key} is required",
            details={"index": index, "field": key},
        )
    return str(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def node_from_wire(raw: Any, index: int = 0) -> Node:
    """Map one raw node object to a Node. Unknown keys are dropped."""
    raw = _require_mapping(raw, "nodes", index)
    return Node(
        id=_require_id(raw, "id", "nodes", index),
        title=_text(raw.get("title")),
        sub_title=_text(raw.get("subTitle")),
        main_stat=raw.get("mainStat"),
    )


def edge_from_wire(raw: Any, index: int = 0) -> Edge:
    """
    Map one raw edge object to an Edge.

    The service reports the edge label as `name`; `mainStat` is accepted
    when `name` is absent.
    """
    raw = _require_mapping(raw, "edges", index)
    label = raw.get("name")
    if label is None:
        label = raw.get("mainStat")
    return Edge(
        id=_require_id(raw, "id", "edges", index),
        src=_require_id(raw, "src", "edges", index),
        dst=_require_id(raw, "dst", "edges", index),
        main_stat=_text(label),
    )


def dataset_from_wire(raw: Any, index: int = 0) -> Dataset:
    raw = _require_mapping(raw, "datasets", index)
    return Dataset(
        index=raw.get("index"),
        label=_text(raw.get("label")),
        value=_text(raw.get("value")),
    )


def graph_records_from_wire(body: Any) -> Tuple[List[Node], List[Edge]]:
    """
    Validate the POST /network body and map it into records.

    All-or-nothing: any shape violation raises MalformedResponse before a
    single record is returned.
    """
    if not isinstance(body, Mapping):
        raise MalformedResponse(
            f"network response must be an object, got {type(body).__name__}"
        )
    raw_nodes = body.get("nodes")
    raw_edges = body.get("edges")
    for key, value in (("nodes", raw_nodes), ("edges", raw_edges)):
        if not isinstance(value, list):
            raise MalformedResponse(
                f"network response '{key}' must be an array",
                details={"field": key, "type": type(value).__name__},
            )
    nodes = [node_from_wire(n, i) for i, n in enumerate(raw_nodes)]
    edges = [edge_from_wire(e, i) for i, e in enumerate(raw_edges)]
    return nodes, edges


# =============================================================================
# Stable Protocol Interface
# =============================================================================


@runtime_checkable
class WorksDataSourceProtocol(Protocol):
    """
    Language-level contract for the GraphWorks data source.
    """

    async def query(self, request: QueryRequest, *, ctx: Any = None) -> Any:
        ...

    async def execute_graph_query(self, query: WorksQuery, *, ctx: Any = None) -> Any:
        ...

    async def get_datasets(self, *, ctx: Any = None) -> List[Dataset]:
        ...

    async def test_datasource(self, *, ctx: Any = None) -> Mapping[str, Any]:
        ...


__all__ = [
    "GRAPHWORKS_PROTOCOL_VERSION",
    "NETWORK_PATH",
    "DATASETS_PATH",
    "PING_PATH",
    "WorksAdapterError",
    "BadRequest",
    "TransportError",
    "AuthenticationError",
    "MalformedResponse",
    "MetricsSink",
    "NoopMetrics",
    "Category",
    "QueryType",
    "Node",
    "Edge",
    "Dataset",
    "WorksQuery",
    "QueryRequest",
    "DataSourceSettings",
    "basic_auth_header",
    "node_from_wire",
    "edge_from_wire",
    "dataset_from_wire",
    "graph_records_from_wire",
    "WorksDataSourceProtocol",
]
