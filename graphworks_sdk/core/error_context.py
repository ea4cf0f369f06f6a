# graphworks_sdk/core/error_context.py
# SPDX-License-Identifier: Apache-2.0

"""
Error context utilities for the GraphWorks data source.

Failures raised by the data source (transport errors, malformed responses,
bad requests) are enriched with debugging metadata as they propagate to the
embedding system. The metadata lives on exception attributes, so the
original exception type, message and traceback reach the caller unchanged.

Typical usage
-------------

    from graphworks_sdk.core.error_context import attach_context

    try:
        frames = await datasource.execute_graph_query(query)
    except Exception as exc:
        attach_context(
            exc,
            origin="graphworks",
            operation="query",
            dataset=query.dataset,
        )
        raise

Later, in error handlers:

    except Exception as exc:
        context = get_context(exc)
        logger.error(
            "Data source error",
            extra={
                "operation": context.get("operation"),
                "dataset": context.get("dataset"),
            },
        )

Two attributes are set:

* `__graphworks_context__` (canonical), merged across calls.
* `__<origin>_context__` (origin-specific), for discoverability when
  several layers contribute context.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping, Optional

logger = logging.getLogger(__name__)

_CANONICAL_ATTR = "__graphworks_context__"


def attach_context(
    exc: BaseException,
    origin: str,
    **context: Any,
) -> None:
    """
    Attach debugging context to an exception.

    If context already exists on the exception, the new keys are merged
    into it. The `origin` key is set once and never overwritten.

    Parameters
    ----------
    exc:
        The exception to enrich.

    origin:
        Identifier of the layer contributing the context, e.g.
        "graphworks" for the data source or "graphworks_cli" for the CLI.

    **context:
        Arbitrary keyword arguments. Common keys:
            - operation: str ("query", "datasets", "ping")
            - dataset: str
            - request_id: str
            - url: str (base URL only, never credentials)

    Notes
    -----
    Attachment is best-effort; failures are logged at debug level and
    never prevent the original exception from propagating.
    """
    try:
        merged_context: MutableMapping[str, Any] = {}

        existing = getattr(exc, _CANONICAL_ATTR, None)
        if isinstance(existing, Mapping):
            merged_context.update(existing)

        merged_context.setdefault("origin", origin)
        merged_context.update(context)

        setattr(exc, _CANONICAL_ATTR, merged_context)
        setattr(exc, f"__{origin}_context__", merged_context)

    except Exception as attachment_error:  # noqa: BLE001
        logger.debug(
            "Failed to attach error context to %s: %s",
            type(exc).__name__,
            attachment_error,
            extra={"origin": origin},
        )


def get_context(
    exc: BaseException,
    *,
    origin: Optional[str] = None,
) -> Mapping[str, Any]:
    """
    Retrieve attached context from an exception.

    When `origin` is given, the origin-specific attribute is tried first
    before falling back to the canonical one. Returns an empty dict when
    nothing is attached.
    """
    try:
        if origin:
            ctx = getattr(exc, f"__{origin}_context__", None)
            if isinstance(ctx, Mapping):
                return ctx

        ctx = getattr(exc, _CANONICAL_ATTR, None)
        if isinstance(ctx, Mapping):
            return ctx

    except Exception as retrieval_error:  # noqa: BLE001
        logger.debug(
            "Failed to retrieve error context from %s: %s",
            type(exc).__name__,
            retrieval_error,
        )

    return {}


def has_context(
    exc: BaseException,
    *,
    origin: Optional[str] = None,
) -> bool:
    """Check if an exception has non-empty attached context."""
    return len(get_context(exc, origin=origin)) > 0


__all__ = [
    "attach_context",
    "get_context",
    "has_context",
]
