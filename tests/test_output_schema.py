"""Tests for schema descriptors and their Vertex AI rendering."""

import pytest

from ashwini.core.output_schema import (
    ArrayNode,
    EnumNode,
    ObjectNode,
    StringNode,
    enum_fields,
)
from ashwini.prompts.crop import CROP_ANALYSIS_SCHEMA
from ashwini.prompts.facilities import FACILITY_LIST_SCHEMA
from ashwini.prompts.medical import MEDICAL_REPORT_SCHEMA


def test_required_field_must_be_declared():
    with pytest.raises(ValueError):
        ObjectNode(fields={"summary": StringNode()}, required=("summary", "severity"))


def test_object_renders_properties_and_required():
    node = ObjectNode(
        fields={
            "summary": StringNode(description="Short summary."),
            "level": EnumNode(values=("LOW", "HIGH")),
        },
        required=("summary",),
    )
    assert node.to_vertex_schema() == {
        "type": "OBJECT",
        "properties": {
            "summary": {"type": "STRING", "description": "Short summary."},
            "level": {"type": "STRING", "enum": ["LOW", "HIGH"]},
        },
        "required": ["summary"],
    }


def test_facility_schema_is_an_array_of_objects():
    schema = FACILITY_LIST_SCHEMA.to_vertex_schema()
    assert schema["type"] == "ARRAY"
    assert schema["items"]["type"] == "OBJECT"
    assert schema["items"]["required"] == ["name", "rating", "address"]


def test_medical_schema_constrains_critical_alert():
    schema = MEDICAL_REPORT_SCHEMA.to_vertex_schema()
    assert schema["properties"]["criticalAlert"]["enum"] == ["NONE", "LOW", "MEDIUM", "HIGH"]
    assert "kidneyStoneDetails" not in schema["required"]


@pytest.mark.parametrize("schema, expected", [
    (MEDICAL_REPORT_SCHEMA, ["criticalAlert"]),
    (CROP_ANALYSIS_SCHEMA, ["severity"]),
    (FACILITY_LIST_SCHEMA, []),
    (ArrayNode(items=ObjectNode(fields={"kind": EnumNode(values=("a",))})), ["[].kind"]),
])
def test_enum_field_paths(schema, expected):
    assert [path for path, _ in enum_fields(schema)] == expected
