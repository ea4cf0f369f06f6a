# graphworks_sdk/graph/transform.py
# SPDX-License-Identifier: Apache-2.0
"""
Node / edge records → node-graph frames.

Pure, no I/O. Row order follows input order; nothing is sorted, filtered
or deduplicated. Duplicate ids and dangling edge endpoints pass through
and surface in the rendering component.

Each node is classified into one Category from its subTitle and drawn as
a colored circle: the four `arc__*` fields hold a one-hot vector, so
exactly one of them is 1.0 and they always sum to 1.0.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from graphworks_sdk.graph.frames import (
    DataFrame,
    FieldSpec,
    FieldType,
    GraphFrames,
    graph_meta,
)
from graphworks_sdk.graph.graph_base import Category, Edge, Node

# Field names expected by the node-graph panel.
FIELD_ID = "id"
FIELD_TITLE = "title"
FIELD_SUBTITLE = "subTitle"
FIELD_MAINSTAT = "mainStat"
FIELD_SOURCE = "source"
FIELD_TARGET = "target"
FIELD_ARC_PREFIX = "arc__"

NODES_FRAME_NAME = "nodes"
EDGES_FRAME_NAME = "edges"
FRAME_REF_ID = "*"

# Order of the arc fields in the node frame.
ARC_CATEGORIES: Tuple[Category, ...] = (
    Category.DEFAULT,
    Category.NEGATIVE,
    Category.NEUTRAL,
    Category.POSITIVE,
)

ARC_COLORS: Dict[Category, str] = {
    Category.DEFAULT: "#5a84e4",
    Category.NEGATIVE: "red",
    Category.NEUTRAL: "#800080",
    Category.POSITIVE: "green",
}

_ARC_VECTORS: Dict[Category, Tuple[float, ...]] = {
    category: tuple(1.0 if c is category else 0.0 for c in ARC_CATEGORIES)
    for category in ARC_CATEGORIES
}

_LABELS: Dict[str, Category] = {c.value: c for c in ARC_CATEGORIES}

NODE_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(FIELD_ID, FieldType.STRING),
    FieldSpec(FIELD_TITLE, FieldType.STRING, display_name="Name"),
    FieldSpec(FIELD_SUBTITLE, FieldType.STRING, display_name="Type"),
    FieldSpec(FIELD_MAINSTAT, FieldType.NUMBER, display_name="Score"),
) + tuple(
    FieldSpec(FIELD_ARC_PREFIX + c.value, FieldType.NUMBER, color=ARC_COLORS[c])
    for c in ARC_CATEGORIES
)

EDGE_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(FIELD_ID, FieldType.STRING),
    FieldSpec(FIELD_SOURCE, FieldType.STRING),
    FieldSpec(FIELD_TARGET, FieldType.STRING),
    FieldSpec(FIELD_MAINSTAT, FieldType.STRING, display_name="Label"),
)


def classify(sub_title: Optional[str]) -> Category:
    """Exact match on the named categories; anything else is DEFAULT."""
    if not isinstance(sub_title, str):
        return Category.DEFAULT
    return _LABELS.get(sub_title, Category.DEFAULT)


def arc_values(category: Category) -> Tuple[float, ...]:
    """One-hot arc vector in ARC_CATEGORIES order."""
    return _ARC_VECTORS[category]


def _columns(rows: Iterable[Sequence[object]], width: int) -> List[List[object]]:
    columns: List[List[object]] = [[] for _ in range(width)]
    for row in rows:
        for column, value in zip(columns, row):
            column.append(value)
    return columns


def _node_row(node: Node) -> Tuple[object, ...]:
    return (
        node.id,
        node.title,
        node.sub_title,
        node.main_stat,
    ) + arc_values(classify(node.sub_title))


def _edge_row(edge: Edge) -> Tuple[object, ...]:
    return (edge.id, edge.src, edge.dst, edge.main_stat)


def _frame(name: str, specs: Sequence[FieldSpec], rows: Iterable[Sequence[object]]) -> DataFrame:
    columns = _columns(rows, len(specs))
    return DataFrame(
        name=name,
        ref_id=FRAME_REF_ID,
        fields=[spec.build(values) for spec, values in zip(specs, columns)],
        meta=dict(graph_meta()),
    )


def parse_graph_response(nodes: Sequence[Node], edges: Sequence[Edge]) -> GraphFrames:
    """
    Build the node and edge frames shown by the node-graph panel.

    Node frame: id, title, subTitle, mainStat, arc__default, arc__negative,
    arc__neutral, arc__positive.
    Edge frame: id, source, target, mainStat.
    """
    return GraphFrames(
        nodes=_frame(NODES_FRAME_NAME, NODE_FIELDS, (_node_row(n) for n in nodes)),
        edges=_frame(EDGES_FRAME_NAME, EDGE_FIELDS, (_edge_row(e) for e in edges)),
    )


__all__ = [
    "FIELD_ID",
    "FIELD_TITLE",
    "FIELD_SUBTITLE",
    "FIELD_MAINSTAT",
    "FIELD_SOURCE",
    "FIELD_TARGET",
    "ARC_CATEGORIES",
    "ARC_COLORS",
    "NODE_FIELDS",
    "EDGE_FIELDS",
    "classify",
    "arc_values",
    "parse_graph_response",
]
