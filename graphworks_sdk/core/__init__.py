# graphworks_sdk/core/__init__.py
# SPDX-License-Identifier: Apache-2.0

from graphworks_sdk.core.error_context import attach_context, get_context, has_context
from graphworks_sdk.core.operation_context import OperationContext

__all__ = [
    "OperationContext",
    "attach_context",
    "get_context",
    "has_context",
]
