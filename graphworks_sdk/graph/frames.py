# graphworks_sdk/graph/frames.py
# SPDX-License-Identifier: Apache-2.0
"""
Column-oriented tables consumed by the node-graph visualization.

A DataFrame is an ordered list of named, typed fields. Every field holds
one value per row and all fields of a frame share the same row order.

Presentation (display name, fixed color, links) lives in the field config
and is declared separately from the data via `FieldSpec` descriptors:

    spec = FieldSpec("mainStat", FieldType.NUMBER, display_name="Score")
    field = spec.build([5, 7, 2])

`DataFrame.to_dict()` renders the JSON data-frame shape:

    {
        "name": "nodes",
        "refId": "*",
        "fields": [{"name": ..., "type": ..., "values": [...], "config": {...}}],
        "meta": {"preferredVisualisationType": "nodeGraph"}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

PREFERRED_VISUALISATION_TYPE = "nodeGraph"
FIXED_COLOR_MODE = "fixed"


class FieldType:
    STRING = "string"
    NUMBER = "number"


@dataclass(frozen=True)
class FieldSpec:
    """
    Descriptor for one column: data type plus presentation hints.

    Attributes:
        name: Column name; part of the rendering contract.
        type: FieldType value.
        display_name: Label shown in context menus / tooltips.
        color: Fixed color used when drawing arc sections.
    """
    name: str
    type: str
    display_name: Optional[str] = None
    color: Optional[str] = None

    def config(self) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        if self.display_name:
            cfg["displayName"] = self.display_name
        if self.color:
            cfg["color"] = {"fixedColor": self.color, "mode": FIXED_COLOR_MODE}
        return cfg

    def build(self, values: Iterable[Any]) -> "Field":
        return Field(name=self.name, type=self.type, values=list(values), config=self.config())


@dataclass
class Field:
    name: str
    type: str
    values: List[Any] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        config = dict(self.config)
        links = config.get("links")
        if links:
            config["links"] = [
                link.to_dict() if hasattr(link, "to_dict") else dict(link) for link in links
            ]
        return {
            "name": self.name,
            "type": self.type,
            "values": list(self.values),
            "config": config,
        }


@dataclass
class DataFrame:
    """
    Named column table.

    Attributes:
        name: "nodes" or "edges" for graph frames.
        fields: Ordered fields; order is part of the rendering contract.
        ref_id: Reference of the query target that produced the frame.
        meta: Frame-level hints for the visualization layer.
    """
    name: str
    fields: List[Field]
    ref_id: str = "*"
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        lengths = {len(f.values) for f in self.fields}
        if len(lengths) > 1:
            raise ValueError(f"frame '{self.name}' has fields of unequal length: {sorted(lengths)}")

    @property
    def length(self) -> int:
        return len(self.fields[0].values) if self.fields else 0

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def rows(self) -> Iterator[Dict[str, Any]]:
        """Yield one {field name: value} dict per row."""
        for i in range(self.length):
            yield {f.name: f.values[i] for f in self.fields}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "refId": self.ref_id,
            "fields": [f.to_dict() for f in self.fields],
            "meta": dict(self.meta),
        }


@dataclass
class GraphFrames:
    """Node/edge frame pair. Unpacks as `nodes, edges = frames`."""
    nodes: DataFrame
    edges: DataFrame

    def __iter__(self) -> Iterator[DataFrame]:
        return iter((self.nodes, self.edges))

    def to_list(self) -> List[Dict[str, Any]]:
        return [self.nodes.to_dict(), self.edges.to_dict()]


def graph_meta() -> Mapping[str, Any]:
    return {"preferredVisualisationType": PREFERRED_VISUALISATION_TYPE}


__all__ = [
    "PREFERRED_VISUALISATION_TYPE",
    "FieldType",
    "FieldSpec",
    "Field",
    "DataFrame",
    "GraphFrames",
    "graph_meta",
]
