# graphworks_sdk/graph/transport.py
# SPDX-License-Identifier: Apache-2.0
"""
Fetch-style transport for the GraphWorks data source.

The data source composes a `FetchRequest` (URL, method, headers, body,
credentials flag) and hands it to a `Transport`, which returns the parsed
JSON body or raises:

- TransportError        connection failure or non-2xx status (3xx included)
- AuthenticationError   401 / 403
- MalformedResponse     body is not JSON

`HttpxTransport` is the default implementation. Without an injected
client it opens an `httpx.AsyncClient` per call, so nothing outlives a
single operation. An injected client is owned by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx

from graphworks_sdk.graph.graph_base import (
    AuthenticationError,
    MalformedResponse,
    TransportError,
)

LOG = logging.getLogger(__name__)

_AUTH_STATUS_CODES = frozenset({401, 403})


@dataclass(frozen=True)
class FetchRequest:
    """
    One HTTP call.

    Attributes:
        url: Absolute URL.
        method: HTTP method.
        headers: Extra request headers.
        data: JSON body (POST only).
        with_credentials: Whether the call is credentialed.
    """
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[Any] = None
    with_credentials: bool = False


@runtime_checkable
class Transport(Protocol):
    async def fetch(self, request: FetchRequest) -> Any:
        ...


class HttpxTransport:
    """
    Transport backed by httpx.

    No timeout and no retries are configured: a caller that wants them
    supplies its own client. `http_transport` swaps the low-level httpx
    transport of the per-call client (proxies, mounts, test doubles).
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = client
        self._http_transport = http_transport

    async def fetch(self, request: FetchRequest) -> Any:
        if self._client is not None:
            return await self._send(self._client, request)
        async with httpx.AsyncClient(timeout=None, transport=self._http_transport) as client:
            return await self._send(client, request)

    async def _send(self, client: httpx.AsyncClient, request: FetchRequest) -> Any:
        LOG.debug(
            "%s %s (credentials=%s)",
            request.method,
            request.url,
            request.with_credentials,
        )
        try:
            resp = await client.request(
                request.method,
                request.url,
                headers=request.headers or None,
                json=request.data,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"{request.method} {request.url} failed: {type(e).__name__}",
                details={"url": request.url},
            ) from e

        if resp.status_code in _AUTH_STATUS_CODES:
            raise AuthenticationError(
                f"{request.method} {request.url} rejected credentials",
                status_code=resp.status_code,
            )
        # redirects are not followed, so 3xx is a failure too
        if not resp.is_success:
            raise TransportError(
                f"{request.method} {request.url} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponse(
                f"{request.method} {request.url} returned a non-JSON body",
                details={"status_code": resp.status_code},
            ) from e


__all__ = [
    "FetchRequest",
    "Transport",
    "HttpxTransport",
]
