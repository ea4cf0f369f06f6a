# graphworks_sdk/core/operation_context.py
# SPDX-License-Identifier: Apache-2.0

"""
Request-scoped context carrier for data source operations.

Every public data source operation accepts an optional `OperationContext`.
It carries a correlation id for logs and error context, plus a free-form
`attrs` bag for the embedding system (panel id, dashboard, user-visible
query label, ...). Nothing in here influences the request sent to the
remote service.

Typical usage
-------------

    from graphworks_sdk.core.operation_context import OperationContext

    ctx = OperationContext(request_id="req-123", attrs={"panel": 4})
    frames = await datasource.execute_graph_query(query, ctx=ctx)

    child = ctx.with_attr("refresh", True)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


@dataclass
class OperationContext:
    """
    Request context for GraphWorks operations.

    Fields
    ------
    request_id:
        Correlation id for the logical request. Generated lazily by
        `ensure_request_id` when absent.

    attrs:
        Free-form attribute bag. Should remain JSON-serializable so it can
        be attached to error context and log records.
    """

    request_id: Optional[str] = None
    attrs: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "attrs": dict(self.attrs) if self.attrs is not None else {},
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "OperationContext":
        """
        Create an OperationContext from a dict. Unknown keys are ignored;
        missing keys default to None / {}.
        """
        if data is None:
            return cls()
        return cls(
            request_id=data.get("request_id"),
            attrs=dict(data.get("attrs") or {}),
        )

    def ensure_request_id(self) -> "OperationContext":
        """Return self if a request id is set, else a copy with a fresh one."""
        if self.request_id:
            return self
        return replace(self, request_id=uuid.uuid4().hex, attrs=dict(self.attrs))

    def with_attr(self, key: str, value: Any) -> "OperationContext":
        """Return a new context with `key` set in attrs."""
        new_attrs = dict(self.attrs)
        new_attrs[key] = value
        return replace(self, attrs=new_attrs)

    def get_attr(self, key: str, default: Any = None) -> Any:
        return self.attrs.get(key, default) if self.attrs is not None else default


__all__ = [
    "OperationContext",
]
