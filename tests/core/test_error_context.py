# SPDX-License-Identifier: Apache-2.0
"""
Error context attachment.

Asserts:
  • context is stored on the canonical and origin-specific attributes
  • repeated attachment merges keys and keeps the first origin
  • retrieval falls back to the canonical attribute and to {}
"""
from graphworks_sdk.core.error_context import attach_context, get_context, has_context


def test_attach_and_get():
    exc = RuntimeError("boom")
    attach_context(exc, "graphworks", operation="query", dataset="gdelt")

    assert get_context(exc) == {"origin": "graphworks", "operation": "query", "dataset": "gdelt"}
    assert get_context(exc, origin="graphworks")["dataset"] == "gdelt"
    assert has_context(exc)


def test_merge_keeps_first_origin():
    exc = ValueError("bad")
    attach_context(exc, "graphworks", operation="ping")
    attach_context(exc, "graphworks_cli", command="ping")

    context = get_context(exc)
    assert context["origin"] == "graphworks"
    assert context["operation"] == "ping"
    assert context["command"] == "ping"
    assert get_context(exc, origin="graphworks_cli")["command"] == "ping"


def test_unknown_origin_falls_back_to_canonical():
    exc = KeyError("x")
    attach_context(exc, "graphworks", operation="datasets")
    assert get_context(exc, origin="elsewhere")["operation"] == "datasets"


def test_no_context():
    exc = Exception("plain")
    assert get_context(exc) == {}
    assert not has_context(exc)
