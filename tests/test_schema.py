"""Tests for parameter schemas and argument decoding."""

from __future__ import annotations

import pytest

from v0_mcp.models import ValidationFailure
from v0_mcp.tools import ToolRegistry
from v0_mcp.tools.schema import (
    Param,
    ParameterSchema,
    array,
    boolean,
    enum,
    number,
    obj,
    string,
)


def _chat_schema() -> ParameterSchema:
    return ParameterSchema(
        params={
            "chatId": string("The chat", required=True),
            "message": string("The message", required=True),
            "privacy": enum(("private", "public"), "Privacy"),
            "limit": number("Page size", default=10),
            "favorite": boolean("Favorite only"),
        },
        name="test_tool",
    )


# ── Required and optional fields ─────────────────────────────────


class TestRequiredFields:
    def test_missing_required_is_reported(self) -> None:
        result = _chat_schema().decode({"message": "hi"})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("chatId",)
        assert "required" in result.describe()

    def test_all_missing_fields_reported_in_one_pass(self) -> None:
        result = _chat_schema().decode({"privacy": "secret"})
        assert isinstance(result, ValidationFailure)
        assert set(result.fields) == {"chatId", "message", "privacy"}

    def test_none_arguments_treated_as_empty(self) -> None:
        result = _chat_schema().decode(None)
        assert isinstance(result, ValidationFailure)
        assert set(result.fields) == {"chatId", "message"}

    def test_non_object_arguments_rejected(self) -> None:
        result = _chat_schema().decode(["chatId"])
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("(arguments)",)

    def test_wrong_type_rejected(self) -> None:
        result = _chat_schema().decode({"chatId": 42, "message": "hi"})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("chatId",)


class TestOptionalFields:
    def test_omitted_optional_field_is_absent(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi"})
        assert isinstance(result, dict)
        assert "privacy" not in result
        assert "favorite" not in result

    def test_null_optional_field_is_absent(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "privacy": None})
        assert isinstance(result, dict)
        assert "privacy" not in result

    def test_default_applied_when_omitted(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi"})
        assert isinstance(result, dict)
        assert result["limit"] == 10

    def test_supplied_value_wins_over_default(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "limit": 3})
        assert isinstance(result, dict)
        assert result["limit"] == 3
        assert isinstance(result["limit"], int)

    def test_false_boolean_is_kept(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "favorite": False})
        assert isinstance(result, dict)
        assert result["favorite"] is False

    def test_unknown_fields_are_ignored(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "color": "red"})
        assert isinstance(result, dict)
        assert "color" not in result
        assert result["chatId"] == "c1"


# ── Enums ────────────────────────────────────────────────────────


class TestEnums:
    @pytest.mark.parametrize("value", ["private", "public"])
    def test_declared_value_passes_unchanged(self, value: str) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "privacy": value})
        assert isinstance(result, dict)
        assert result["privacy"] == value

    @pytest.mark.parametrize("value", ["secret", "PRIVATE", ""])
    def test_undeclared_value_fails(self, value: str) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "privacy": value})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("privacy",)
        assert "must be one of" in result.describe()


# ── Numbers ──────────────────────────────────────────────────────


class TestNumbers:
    def test_non_numeric_value_names_the_field_once(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "limit": "abc"})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("limit",)

    def test_every_bad_field_reported_by_its_own_name(self, registry: ToolRegistry) -> None:
        schema = registry.lookup("find_chats").parameters
        result = schema.decode({"limit": "abc", "isFavorite": "maybe"})
        assert isinstance(result, ValidationFailure)
        assert set(result.fields) == {"limit", "isFavorite"}
        assert len(result.errors) == 2

    def test_fractional_value_kept(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "limit": 2.5})
        assert isinstance(result, dict)
        assert result["limit"] == 2.5

    def test_whole_float_becomes_int(self) -> None:
        result = _chat_schema().decode({"chatId": "c1", "message": "hi", "limit": 20.0})
        assert isinstance(result, dict)
        assert result["limit"] == 20
        assert isinstance(result["limit"], int)


# ── Nested shapes ────────────────────────────────────────────────


def _nested_schema() -> ParameterSchema:
    return ParameterSchema(
        params={
            "files": array(
                obj(
                    {
                        "name": string(required=True),
                        "locked": boolean(),
                    }
                )
            ),
            "repo": obj({"url": string(required=True), "branch": string()}),
            "ids": array(string()),
            "events": array(enum(("a", "b"))),
            "metadata": obj(),
        },
        name="nested_tool",
    )


class TestNestedShapes:
    def test_valid_nested_values(self) -> None:
        result = _nested_schema().decode(
            {
                "files": [{"name": "app.tsx", "locked": True}, {"name": "b.ts"}],
                "repo": {"url": "https://github.com/x/y"},
                "ids": ["e1", "e2"],
                "events": ["a"],
                "metadata": {"anything": [1, 2]},
            }
        )
        assert isinstance(result, dict)
        assert result["files"] == [{"name": "app.tsx", "locked": True}, {"name": "b.ts"}]
        assert result["repo"] == {"url": "https://github.com/x/y"}
        assert result["metadata"] == {"anything": [1, 2]}

    def test_nested_missing_field_has_dotted_path(self) -> None:
        result = _nested_schema().decode({"files": [{"name": "a"}, {"locked": True}]})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("files.1.name",)

    def test_nested_object_missing_field(self) -> None:
        result = _nested_schema().decode({"repo": {"branch": "main"}})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("repo.url",)

    def test_array_of_enums_rejects_bad_member(self) -> None:
        result = _nested_schema().decode({"events": ["a", "c"]})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("events.1",)

    def test_array_given_scalar(self) -> None:
        result = _nested_schema().decode({"ids": "e1"})
        assert isinstance(result, ValidationFailure)
        assert result.fields == ("ids",)

    def test_unknown_nested_keys_dropped(self) -> None:
        result = _nested_schema().decode({"repo": {"url": "u", "token": "secret"}})
        assert isinstance(result, dict)
        assert result["repo"] == {"url": "u"}


# ── JSON Schema ──────────────────────────────────────────────────


class TestJsonSchema:
    def test_top_level_shape(self) -> None:
        schema = _chat_schema().to_json_schema()
        assert schema["type"] == "object"
        assert schema["required"] == ["chatId", "message"]
        assert list(schema["properties"]) == ["chatId", "message", "privacy", "limit", "favorite"]
        assert schema["additionalProperties"] is True

    def test_enum_and_default(self) -> None:
        props = _chat_schema().to_json_schema()["properties"]
        assert props["privacy"] == {
            "type": "string",
            "enum": ["private", "public"],
            "description": "Privacy",
        }
        assert props["limit"]["default"] == 10
        assert props["limit"]["type"] == "number"

    def test_nested_schema(self) -> None:
        props = _nested_schema().to_json_schema()["properties"]
        files = props["files"]
        assert files["type"] == "array"
        assert files["items"]["required"] == ["name"]
        assert files["items"]["properties"]["locked"] == {"type": "boolean"}
        assert props["metadata"] == {"type": "object"}

    def test_no_required_key_without_required_params(self) -> None:
        schema = ParameterSchema(params={}, name="empty").to_json_schema()
        assert "required" not in schema
        assert schema["properties"] == {}


class TestParamDeclaration:
    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown parameter kind"):
            Param("date")

    def test_enum_needs_choices(self) -> None:
        with pytest.raises(ValueError, match="choice"):
            Param("enum")

    def test_array_needs_items(self) -> None:
        with pytest.raises(ValueError, match="item type"):
            Param("array")

    def test_required_with_default(self) -> None:
        with pytest.raises(ValueError, match="default"):
            string(required=True, default="x")
