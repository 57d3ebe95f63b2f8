"""
51World camera MCP — tool_schemas.py tests.

Verifies that the canonical JSON schemas for all camera tools are:
    1. Structurally valid (name, description, input_schema present)
    2. Complete (all 5 tools registered)
    3. Enum-constrained where expected (controlMode)
    4. Defaulted where update_camera fills omitted fields
    5. Enforced by require_arguments before any I/O

These tests protect the LLM routing contract. A broken schema means
Claude calls tools with wrong parameters.

Pure unit tests — no I/O, no network, no FastMCP instantiation.
"""

from __future__ import annotations

import pytest

# ---------------------------------------------------------------------------
# Registry completeness
# ---------------------------------------------------------------------------


class TestSchemaRegistry:
    def test_all_five_tools_registered(self) -> None:
        from world_mcp.tool_schemas import list_tool_names

        names = set(list_tool_names())
        expected = {
            "create_note",
            "get_camera_info",
            "send_message",
            "update_camera",
            "set_camera_mode",
        }
        assert expected == names, f"Missing: {expected - names}, extra: {names - expected}"

    def test_list_tool_names_is_sorted(self) -> None:
        from world_mcp.tool_schemas import list_tool_names

        names = list_tool_names()
        assert names == sorted(names)

    def test_get_tool_schema_unknown_raises_unknown_tool(self) -> None:
        from core.errors import UnknownTool
        from world_mcp.tool_schemas import get_tool_schema

        with pytest.raises(UnknownTool, match="Unknown tool: fly_away"):
            get_tool_schema("fly_away")

    def test_unknown_tool_is_key_error(self) -> None:
        from world_mcp.tool_schemas import get_tool_schema

        with pytest.raises(KeyError):
            get_tool_schema("nonexistent_tool")

    def test_get_all_schemas_sorted_by_name(self) -> None:
        from world_mcp.tool_schemas import get_all_schemas

        names = [s["name"] for s in get_all_schemas()]
        assert len(names) == 5
        assert names == sorted(names)


# ---------------------------------------------------------------------------
# Structural validation
# ---------------------------------------------------------------------------


class TestSchemaStructureValidation:
    """validate_schema_structure() catches structural problems."""

    def test_all_schemas_pass_structure_validation(self) -> None:
        from world_mcp.tool_schemas import get_all_schemas, validate_schema_structure

        for schema in get_all_schemas():
            errors = validate_schema_structure(schema)
            assert errors == [], f"{schema['name']}: {errors}"

    def test_missing_name_caught(self) -> None:
        from world_mcp.tool_schemas import validate_schema_structure

        errors = validate_schema_structure(
            {
                "description": "A description that is long enough",
                "input_schema": {"type": "object", "properties": {}, "required": []},
            }
        )
        assert any("name" in e for e in errors)

    def test_short_description_caught(self) -> None:
        from world_mcp.tool_schemas import validate_schema_structure

        errors = validate_schema_structure(
            {
                "name": "x",
                "description": "short",
                "input_schema": {"type": "object", "properties": {}, "required": []},
            }
        )
        assert any("description" in e for e in errors)

    def test_required_key_not_in_properties_caught(self) -> None:
        from world_mcp.tool_schemas import validate_schema_structure

        errors = validate_schema_structure(
            {
                "name": "x",
                "description": "A description that is long enough",
                "input_schema": {"type": "object", "properties": {}, "required": ["ghost"]},
            }
        )
        assert any("ghost" in e for e in errors)

    def test_missing_input_schema_caught(self) -> None:
        from world_mcp.tool_schemas import validate_schema_structure

        errors = validate_schema_structure(
            {"name": "x", "description": "A description that is long enough"}
        )
        assert errors == ["missing 'input_schema'"]


# ---------------------------------------------------------------------------
# Per-tool contracts
# ---------------------------------------------------------------------------


class TestCreateNoteSchema:
    def test_required_params(self) -> None:
        from world_mcp.tool_schemas import get_tool_schema

        schema = get_tool_schema("create_note")
        assert schema["input_schema"]["required"] == ["title", "content"]


class TestGetCameraInfoSchema:
    def test_guid_optional_with_empty_default(self) -> None:
        from world_mcp.tool_schemas import get_tool_schema

        inp = get_tool_schema("get_camera_info")["input_schema"]
        assert inp["required"] == []
        assert inp["properties"]["guid"]["default"] == ""


class TestSendMessageSchema:
    def test_message_required(self) -> None:
        from world_mcp.tool_schemas import get_tool_schema

        assert get_tool_schema("send_message")["input_schema"]["required"] == ["message"]


class TestUpdateCameraSchema:
    def _props(self) -> dict:
        from world_mcp.tool_schemas import get_tool_schema

        return get_tool_schema("update_camera")["input_schema"]["properties"]

    def test_location_and_rotation_required(self) -> None:
        from world_mcp.tool_schemas import get_tool_schema

        inp = get_tool_schema("update_camera")["input_schema"]
        assert inp["required"] == ["location", "rotation"]

    def test_location_is_triple(self) -> None:
        loc = self._props()["location"]
        assert loc["minItems"] == 3
        assert loc["maxItems"] == 3

    def test_rotation_requires_pitch_and_yaw(self) -> None:
        assert self._props()["rotation"]["required"] == ["pitch", "yaw"]

    def test_property_names_are_camel_case(self) -> None:
        assert set(self._props()) == {
            "guid",
            "location",
            "rotation",
            "locationLimit",
            "pitchLimit",
            "yawLimit",
            "viewDistanceLimit",
            "controlMode",
            "fieldOfView",
            "flyTime",
        }

    def test_defaults_match_command_defaults(self) -> None:
        from core.camera.commands import UPDATE_CAMERA_DEFAULTS

        props = self._props()
        for key in ("locationLimit", "pitchLimit", "yawLimit", "viewDistanceLimit", "fieldOfView", "flyTime"):
            assert props[key]["default"] == UPDATE_CAMERA_DEFAULTS[key], key

    def test_control_mode_enum(self) -> None:
        assert self._props()["controlMode"]["enum"] == ["RTS", "TPS", "FPS"]


class TestSetCameraModeSchema:
    def test_control_mode_required_with_enum(self) -> None:
        from world_mcp.tool_schemas import get_tool_schema

        inp = get_tool_schema("set_camera_mode")["input_schema"]
        assert inp["required"] == ["controlMode"]
        assert inp["properties"]["controlMode"]["enum"] == ["RTS", "TPS", "FPS"]


# ---------------------------------------------------------------------------
# require_arguments
# ---------------------------------------------------------------------------


class TestRequireArguments:
    def test_all_present_passes(self) -> None:
        from world_mcp.tool_schemas import require_arguments

        require_arguments("create_note", {"title": "t", "content": "c"})

    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_value_raises(self, value) -> None:
        from core.errors import MissingArgument
        from world_mcp.tool_schemas import require_arguments

        with pytest.raises(MissingArgument, match="'content' is required"):
            require_arguments("create_note", {"title": "t", "content": value})

    def test_missing_key_raises(self) -> None:
        from core.errors import MissingArgument
        from world_mcp.tool_schemas import require_arguments

        with pytest.raises(MissingArgument) as exc_info:
            require_arguments("update_camera", {"location": [0, 0, 0]})
        assert exc_info.value.argument == "rotation"

    def test_falsy_non_empty_values_count_as_present(self) -> None:
        from world_mcp.tool_schemas import require_arguments

        require_arguments("update_camera", {"location": [0, 0, 0], "rotation": {"pitch": 0, "yaw": 0}})

    def test_no_required_arguments(self) -> None:
        from world_mcp.tool_schemas import require_arguments

        require_arguments("get_camera_info", {})
