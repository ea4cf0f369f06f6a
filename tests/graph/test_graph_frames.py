# SPDX-License-Identifier: Apache-2.0
"""
Data frame model and JSON rendering.

Asserts:
  • field config built from display name / fixed color
  • fields of unequal length are rejected
  • row iteration and field lookup
  • JSON shape of frames, including serialized links
"""
import pytest

from graphworks_sdk.graph.frames import (
    DataFrame,
    Field,
    FieldSpec,
    FieldType,
    GraphFrames,
    graph_meta,
)
from graphworks_sdk.graph.graph_base import DataSourceSettings
from graphworks_sdk.graph.links import make_links


def test_field_spec_config_is_empty_without_hints():
    assert FieldSpec("id", FieldType.STRING).config() == {}


def test_field_spec_config_carries_display_name_and_color():
    spec = FieldSpec("arc__positive", FieldType.NUMBER, display_name="Positive", color="green")
    assert spec.config() == {
        "displayName": "Positive",
        "color": {"fixedColor": "green", "mode": "fixed"},
    }


def test_field_spec_build_copies_values():
    values = (1, 2, 3)
    built = FieldSpec("mainStat", FieldType.NUMBER).build(values)
    assert built.values == [1, 2, 3]
    assert built.type == "number"


def test_unequal_field_lengths_are_rejected():
    with pytest.raises(ValueError):
        DataFrame(
            name="nodes",
            fields=[Field("id", FieldType.STRING, ["a", "b"]), Field("title", FieldType.STRING, ["A"])],
        )


def test_rows_and_lookup():
    frame = DataFrame(
        name="edges",
        fields=[Field("id", FieldType.STRING, ["e1", "e2"]), Field("source", FieldType.STRING, ["a", "b"])],
    )
    assert frame.length == 2
    assert frame.field_names == ["id", "source"]
    assert list(frame.rows()) == [{"id": "e1", "source": "a"}, {"id": "e2", "source": "b"}]
    assert frame.get_field("source").values == ["a", "b"]
    with pytest.raises(KeyError):
        frame.get_field("target")


def test_frame_without_fields_has_no_rows():
    frame = DataFrame(name="empty", fields=[])
    assert frame.length == 0
    assert list(frame.rows()) == []


def test_frame_json_shape():
    frame = DataFrame(
        name="nodes",
        fields=[FieldSpec("title", FieldType.STRING, display_name="Name").build(["Berlin"])],
        meta=dict(graph_meta()),
    )
    assert frame.to_dict() == {
        "name": "nodes",
        "refId": "*",
        "fields": [
            {
                "name": "title",
                "type": "string",
                "values": ["Berlin"],
                "config": {"displayName": "Name"},
            }
        ],
        "meta": {"preferredVisualisationType": "nodeGraph"},
    }


def test_links_are_rendered_as_json_objects():
    settings = DataSourceSettings(url="http://graphworks.test", uid="u", name="n")
    id_field = Field("id", FieldType.STRING, ["n1"])
    id_field.config["links"] = make_links("q", settings)

    rendered = id_field.to_dict()["config"]["links"]

    assert [link["title"] for link in rendered] == ["GDELT/Events", "GDELT/Mentions"]
    assert rendered[0]["internal"]["datasourceUid"] == "u"
    # the in-memory config keeps the Link objects
    assert id_field.config["links"][0].title == "GDELT/Events"


def test_graph_frames_unpack_and_render_in_order():
    nodes = DataFrame(name="nodes", fields=[])
    edges = DataFrame(name="edges", fields=[])
    frames = GraphFrames(nodes=nodes, edges=edges)

    first, second = frames
    assert first is nodes
    assert second is edges
    assert [f["name"] for f in frames.to_list()] == ["nodes", "edges"]
