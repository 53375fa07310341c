"""Tests for result formatting and per-tool renderers."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from v0_mcp.models import (
    FieldError,
    Success,
    ToolNotFound,
    UpstreamFailure,
    ValidationFailure,
)
from v0_mcp.tools import ToolDescriptor, ToolRegistry
from v0_mcp.tools.adapters import platform_call
from v0_mcp.tools.formatting import format_outcome, items_of, listing, to_json

from .helpers import text_of


def _broken_descriptor() -> ToolDescriptor:
    def render(result: Any, _: Dict[str, Any]) -> str:
        return result["missing"]["deeper"]

    return ToolDescriptor.build(
        name="fragile",
        description="Renderer that assumes a shape",
        params={},
        operation=platform_call("user.get"),
        render=render,
        error_prefix="Error being fragile",
    )


def _render(registry: ToolRegistry, name: str, value: Any, arguments: Dict[str, Any]) -> str:
    descriptor = registry.lookup(name)
    decoded = descriptor.parameters.decode(arguments)
    assert isinstance(decoded, dict)
    return text_of(format_outcome(descriptor, Success(value), decoded))


# ── format_outcome ───────────────────────────────────────────────


class TestFormatOutcome:
    def test_validation_failure(self, registry: ToolRegistry) -> None:
        failure = ValidationFailure(
            errors=(FieldError("chatId", "required"), FieldError("limit", "bad"))
        )
        result = format_outcome(registry.lookup("get_chat"), failure)
        assert result.isError
        assert text_of(result) == (
            "Error retrieving chat: Invalid arguments: chatId: required; limit: bad"
        )

    def test_upstream_failure_with_status(self, registry: ToolRegistry) -> None:
        result = format_outcome(
            registry.lookup("create_chat"), UpstreamFailure("quota exceeded", 429)
        )
        assert text_of(result) == "Error creating chat: HTTP 429: quota exceeded"

    def test_tool_not_found_without_descriptor(self) -> None:
        result = format_outcome(None, ToolNotFound("nope"))
        assert result.isError
        assert "nope" in text_of(result)

    def test_success_without_descriptor_is_still_an_envelope(self) -> None:
        result = format_outcome(None, Success({"id": 1}))
        assert result.isError
        assert len(result.content) == 1

    def test_renderer_failure_falls_back_to_raw(self) -> None:
        result = format_outcome(_broken_descriptor(), Success({"id": "x1"}))
        assert not result.isError
        assert "x1" in text_of(result)
        assert "fragile succeeded" in text_of(result)


class TestHelpers:
    def test_items_of(self) -> None:
        assert items_of({"data": [1, 2]}) == [1, 2]
        assert items_of([3]) == [3]
        assert items_of({"object": "list"}) == []
        assert items_of(None) == []

    def test_listing_empty(self) -> None:
        assert listing("chats", [], str) == "Found 0 chats:\n\nNo chats found"

    def test_to_json_is_stable(self) -> None:
        assert to_json({"b": 1, "a": 2}) == to_json({"a": 2, "b": 1})


# ── Renderers ────────────────────────────────────────────────────


class TestChatRenderers:
    def test_get_chat(self, registry: ToolRegistry) -> None:
        text = _render(
            registry, "get_chat", {"id": "c1", "url": "https://v0.dev/chat/c1"}, {"chatId": "c1"}
        )
        assert text == "Chat Details:\n\nID: c1\nURL: https://v0.dev/chat/c1"

    def test_find_chats_lists_ids_up_to_limit(self, registry: ToolRegistry) -> None:
        chats = {"data": [{"id": "a"}, {"id": "b"}, {"id": "c"}]}
        text = _render(registry, "find_chats", chats, {"limit": 2})
        assert text == "Found 3 chats:\n\n- a\n- b"

    def test_find_chats_empty(self, registry: ToolRegistry) -> None:
        text = _render(registry, "find_chats", {"data": []}, {})
        assert text == "Found 0 chats:\n\nNo chats found"

    def test_delete_chat_echoes_id(self, registry: ToolRegistry) -> None:
        text = _render(registry, "delete_chat", {"deleted": True}, {"chatId": "c9"})
        assert text == "Chat c9 deleted successfully!"

    def test_fork_chat_shows_new_id(self, registry: ToolRegistry) -> None:
        text = _render(registry, "fork_chat", {"id": "c2", "webUrl": "w"}, {"chatId": "c1"})
        assert "New chat ID: c2" in text

    def test_chat_version_lists_files(self, registry: ToolRegistry) -> None:
        version = {
            "id": "v1",
            "status": "completed",
            "demoUrl": "https://demo",
            "files": [{"name": "app/page.tsx"}],
        }
        text = _render(registry, "get_chat_version", version, {"chatId": "c1", "versionId": "v1"})
        assert "ID: v1" in text
        assert "- app/page.tsx" in text

    def test_add_message_includes_response(self, registry: ToolRegistry) -> None:
        text = _render(
            registry, "add_message", {"id": "m1"}, {"chatId": "c1", "message": "hi"}
        )
        assert text.startswith("Message added successfully!")
        assert '"id": "m1"' in text


class TestProjectRenderers:
    def test_find_projects_slices_locally(self, registry: ToolRegistry) -> None:
        projects = {"data": [{"id": f"p{i}", "name": f"n{i}"} for i in range(5)]}
        text = _render(registry, "find_projects", projects, {"limit": 2, "offset": 1})
        assert text == "Found 5 projects:\n\n- p1: n1\n- p2: n2"

    def test_create_project(self, registry: ToolRegistry) -> None:
        text = _render(registry, "create_project", {"id": "p1", "name": "Shop"}, {"name": "Shop"})
        assert text == "Project created successfully!\n\nID: p1\nName: Shop"

    def test_delete_env_vars(self, registry: ToolRegistry) -> None:
        text = _render(
            registry,
            "delete_env_vars",
            {},
            {"projectId": "p1", "environmentVariableIds": ["e1", "e2"]},
        )
        assert text == "Deleted 2 environment variables from project p1: e1, e2"


class TestOtherRenderers:
    def test_user_info_without_name(self, registry: ToolRegistry) -> None:
        text = _render(registry, "get_user_info", {"id": "u1", "email": "a@b.c"}, {})
        assert text == "User Information:\n\nID: u1\nEmail: a@b.c\nName: Not provided"

    def test_rate_limits_embeds_json(self, registry: ToolRegistry) -> None:
        text = _render(registry, "check_rate_limits", {"remaining": 5, "limit": 10}, {})
        assert text.startswith("Rate Limits:\n\n")
        assert '"remaining": 5' in text

    def test_deployment_logs(self, registry: ToolRegistry) -> None:
        logs = {"logs": ["build started", {"text": "done"}], "nextSince": 1700}
        text = _render(registry, "find_deployment_logs", logs, {"deploymentId": "d1"})
        assert "build started\ndone" in text
        assert "Next since: 1700" in text

    def test_created_deployment(self, registry: ToolRegistry) -> None:
        deployment = {"id": "d1", "webUrl": "https://x.vercel.app", "status": "ready"}
        text = _render(
            registry,
            "create_deployment",
            deployment,
            {"projectId": "p", "chatId": "c", "versionId": "v"},
        )
        assert "ID: d1" in text
        assert "https://x.vercel.app" in text

    def test_hook_events(self, registry: ToolRegistry) -> None:
        hook = {"id": "h1", "name": "ci", "url": "https://e", "events": ["chat.created"]}
        text = _render(registry, "get_hook", hook, {"hookId": "h1"})
        assert "Events: chat.created" in text

    @pytest.mark.parametrize("payload", [None, [], "text", {"unexpected": True}])
    def test_renderers_tolerate_odd_payloads(self, registry: ToolRegistry, payload: Any) -> None:
        for name in ("get_chat", "find_chats", "get_user_info", "find_hooks", "get_deployment"):
            descriptor = registry.lookup(name)
            arguments = {k: "x" for k in descriptor.parameters.required}
            result = format_outcome(descriptor, Success(payload), arguments)
            assert len(result.content) == 1
