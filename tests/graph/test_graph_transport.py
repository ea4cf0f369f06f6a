# SPDX-License-Identifier: Apache-2.0
"""
httpx-backed transport.

Asserts:
  • method, URL, headers and JSON body are sent as composed
  • status mapping: 2xx body, 401/403 auth error, any other status (3xx included) transport error
  • non-JSON bodies raise MalformedResponse
  • an injected client is used as-is and left open
"""
import httpx
import pytest

from graphworks_sdk.graph.graph_base import (
    AuthenticationError,
    MalformedResponse,
    TransportError,
)
from graphworks_sdk.graph.transport import FetchRequest, HttpxTransport, Transport

pytestmark = pytest.mark.asyncio


def _transport(handler):
    return HttpxTransport(http_transport=httpx.MockTransport(handler))


async def test_post_sends_json_body_and_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    body = await _transport(handler).fetch(
        FetchRequest(
            url="http://graphworks.test/network",
            method="POST",
            headers={"Authorization": "Basic abc"},
            data={"dataset": "gdelt", "query": "", "type": ""},
        )
    )

    assert body == {"ok": True}
    (request,) = seen
    assert request.method == "POST"
    assert request.headers["authorization"] == "Basic abc"
    assert request.headers["content-type"] == "application/json"
    assert request.content


async def test_get_sends_no_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    assert await _transport(handler).fetch(FetchRequest(url="http://graphworks.test/datasets")) == []
    assert seen[0].method == "GET"
    assert seen[0].content == b""


@pytest.mark.parametrize("status", [401, 403])
async def test_auth_statuses_raise_authentication_error(status):
    with pytest.raises(AuthenticationError) as ei:
        await _transport(lambda r: httpx.Response(status)).fetch(
            FetchRequest(url="http://graphworks.test/ping")
        )
    assert ei.value.status_code == status


@pytest.mark.parametrize("status", [301, 302, 304, 400, 404, 500, 503])
async def test_non_success_statuses_raise_transport_error(status):
    with pytest.raises(TransportError) as ei:
        await _transport(lambda r: httpx.Response(status, json={"message": "nope"})).fetch(
            FetchRequest(url="http://graphworks.test/ping")
        )
    assert not isinstance(ei.value, AuthenticationError)
    assert ei.value.details == {"status_code": status}


async def test_connection_errors_raise_transport_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(TransportError) as ei:
        await _transport(handler).fetch(FetchRequest(url="http://graphworks.test/ping"))
    assert isinstance(ei.value.__cause__, httpx.ConnectTimeout)
    assert ei.value.status_code is None


async def test_non_json_body_is_malformed():
    handler = lambda r: httpx.Response(200, text="<html>gateway</html>")  # noqa: E731
    with pytest.raises(MalformedResponse):
        await _transport(handler).fetch(FetchRequest(url="http://graphworks.test/ping"))


async def test_injected_client_is_used_and_left_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"a": 1})))
    transport = HttpxTransport(client)
    try:
        assert await transport.fetch(FetchRequest(url="http://graphworks.test/ping")) == {"a": 1}
        assert await transport.fetch(FetchRequest(url="http://graphworks.test/ping")) == {"a": 1}
        assert not client.is_closed
    finally:
        await client.aclose()


async def test_httpx_transport_satisfies_protocol():
    assert isinstance(HttpxTransport(), Transport)
