# graphworks_sdk/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
GraphWorks SDK

Data source for the GraphWorks knowledge-graph service: query execution
and transformation of graph responses into node-graph frames.
"""

from graphworks_sdk.graph.graph_base import GRAPHWORKS_PROTOCOL_VERSION

__version__ = "0.1.0"

__all__ = [
    "GRAPHWORKS_PROTOCOL_VERSION",
    "__version__",
]
