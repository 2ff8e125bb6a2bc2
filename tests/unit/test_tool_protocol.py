"""Tests for tool protocol types and helpers."""

import pytest

from patchrunner.core.tool_protocol import (
    ToolCall,
    ToolDefinition,
    ToolResult,
    validate_tool_schema,
)


def make_definition(**parameters):
    params = {"type": "object", "properties": {"path": {"type": "string"}}}
    params.update(parameters)
    return ToolDefinition(name="t", description="d", parameters=params)


class TestToolCall:
    def test_creation(self):
        call = ToolCall(id="1", name="multi_edit", arguments={"file_path": "a"})
        assert call.arguments["file_path"] == "a"


class TestToolResult:
    def test_defaults(self):
        result = ToolResult(success=True)
        assert result.output is None
        assert result.error is None
        assert result.error_code is None
        assert result.data is None
        assert result.diffs is None
        assert result.files_changed is None


class TestToolDefinition:
    def test_safety_defaults(self):
        definition = make_definition()
        assert definition.safety == {"requires_read_first": False, "requires_confirmation": False}

    def test_explicit_safety_kept(self):
        definition = ToolDefinition(
            name="t",
            description="d",
            parameters={"type": "object", "properties": {}},
            safety={"requires_read_first": True},
        )
        assert definition.safety["requires_read_first"] is True
        assert definition.safety["requires_confirmation"] is False

    def test_parameters_must_be_dict(self):
        with pytest.raises(ValueError, match="must be a dictionary"):
            ToolDefinition(name="t", description="d", parameters=[])

    def test_parameters_need_type(self):
        with pytest.raises(ValueError, match="must specify 'type'"):
            ToolDefinition(name="t", description="d", parameters={"properties": {}})


class TestValidateToolSchema:
    def test_valid(self):
        assert validate_tool_schema(make_definition(required=["path"]))

    def test_required_must_be_list(self):
        assert not validate_tool_schema(make_definition(required="path"))

    def test_properties_must_be_dict(self):
        assert not validate_tool_schema(make_definition(properties=["path"]))

    def test_property_needs_type(self):
        assert not validate_tool_schema(make_definition(properties={"path": {}}))

    def test_type_must_be_string(self):
        definition = make_definition()
        definition.parameters["type"] = 3
        assert not validate_tool_schema(definition)
