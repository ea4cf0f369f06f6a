# graphworks_sdk/graph/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
GraphWorks Data Source - Public API

All public types and functions are re-exported here for clean imports.
"""

from graphworks_sdk.graph.graph_base import (
    # Protocol version and wire paths
    GRAPHWORKS_PROTOCOL_VERSION,
    NETWORK_PATH,
    DATASETS_PATH,
    PING_PATH,

    # Error types
    WorksAdapterError,
    BadRequest,
    TransportError,
    AuthenticationError,
    MalformedResponse,

    # Metrics
    MetricsSink,
    NoopMetrics,

    # Records and requests
    Category,
    QueryType,
    Node,
    Edge,
    Dataset,
    WorksQuery,
    QueryRequest,

    # Configuration
    DataSourceSettings,
    basic_auth_header,

    # Wire mapping
    node_from_wire,
    edge_from_wire,
    dataset_from_wire,
    graph_records_from_wire,

    # Protocol interface
    WorksDataSourceProtocol,
)
from graphworks_sdk.graph.frames import (
    FieldType,
    FieldSpec,
    Field,
    DataFrame,
    GraphFrames,
)
from graphworks_sdk.graph.links import LINK_DOMAIN, Link, make_links
from graphworks_sdk.graph.transform import arc_values, classify, parse_graph_response
from graphworks_sdk.graph.transport import FetchRequest, HttpxTransport, Transport
from graphworks_sdk.graph.datasource import (
    NODE_QUERY_TEMPLATE,
    QueryResponse,
    WorksDataSource,
)

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
    "FieldType",
    "FieldSpec",
    "Field",
    "DataFrame",
    "GraphFrames",
    "LINK_DOMAIN",
    "Link",
    "make_links",
    "arc_values",
    "classify",
    "parse_graph_response",
    "FetchRequest",
    "HttpxTransport",
    "Transport",
    "NODE_QUERY_TEMPLATE",
    "QueryResponse",
    "WorksDataSource",
]
