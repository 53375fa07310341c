from __future__ import annotations

from typing import Any, Dict, List

from . import ToolDescriptor, ToolRegistry
from .adapters import platform_call
from .formatting import field_of, items_of, listing
from .schema import array, enum, string

HOOK_EVENTS = (
    "chat.created",
    "chat.updated",
    "chat.deleted",
    "message.created",
    "message.updated",
    "message.deleted",
    "message.finished",
)


def _events(required: bool = False) -> Any:
    return array(enum(HOOK_EVENTS), "Events that trigger the webhook", required=required)


def _render_hook(hook: Any, _: Dict[str, Any]) -> str:
    events = hook.get("events") if isinstance(hook, dict) else None
    lines = [
        f"ID: {field_of(hook, 'id')}",
        f"Name: {field_of(hook, 'name')}",
        f"URL: {field_of(hook, 'url')}",
    ]
    if isinstance(events, list):
        lines.append(f"Events: {', '.join(str(e) for e in events) or 'none'}")
    if isinstance(hook, dict) and hook.get("chatId"):
        lines.append(f"Chat ID: {hook['chatId']}")
    return "\n".join(lines)


def _render_created(hook: Any, arguments: Dict[str, Any]) -> str:
    return f"Webhook created successfully!\n\n{_render_hook(hook, arguments)}"


def _render_details(hook: Any, arguments: Dict[str, Any]) -> str:
    return f"Webhook Details:\n\n{_render_hook(hook, arguments)}"


def _render_updated(hook: Any, arguments: Dict[str, Any]) -> str:
    return f"Webhook updated successfully!\n\n{_render_hook(hook, arguments)}"


def _render_list(hooks: Any, _: Dict[str, Any]) -> str:
    return listing(
        "webhooks",
        items_of(hooks),
        lambda h: f"{field_of(h, 'id')}: {field_of(h, 'name')}",
    )


def _render_deleted(_: Any, arguments: Dict[str, Any]) -> str:
    return f"Webhook {arguments['hookId']} deleted successfully!"


def hook_tools() -> List[ToolDescriptor]:
    return [
        ToolDescriptor.build(
            name="create_hook",
            description=(
                "Register a webhook that the v0 platform calls when chat or "
                "message events happen. Optionally scope it to a single chat."
            ),
            params={
                "name": string("Name of the webhook", required=True),
                "url": string("Endpoint that receives the events", required=True),
                "events": _events(required=True),
                "chatId": string("Only send events for this chat"),
            },
            operation=platform_call("hooks.create"),
            render=_render_created,
            error_prefix="Error creating webhook",
        ),
        ToolDescriptor.build(
            name="get_hook",
            description="Retrieve a webhook by its ID.",
            params={"hookId": string("The ID of the webhook", required=True)},
            operation=platform_call("hooks.getById"),
            render=_render_details,
            error_prefix="Error retrieving webhook",
        ),
        ToolDescriptor.build(
            name="find_hooks",
            description="List your webhooks.",
            params={},
            operation=platform_call("hooks.find"),
            render=_render_list,
            error_prefix="Error finding webhooks",
        ),
        ToolDescriptor.build(
            name="update_hook",
            description="Change a webhook's name, URL or subscribed events.",
            params={
                "hookId": string("The ID of the webhook", required=True),
                "name": string("New name"),
                "url": string("New endpoint URL"),
                "events": _events(),
            },
            operation=platform_call("hooks.update"),
            render=_render_updated,
            error_prefix="Error updating webhook",
        ),
        ToolDescriptor.build(
            name="delete_hook",
            description="Delete a webhook by its ID.",
            params={"hookId": string("The ID of the webhook to delete", required=True)},
            operation=platform_call("hooks.delete"),
            render=_render_deleted,
            error_prefix="Error deleting webhook",
        ),
    ]


def register_tools(registry: ToolRegistry) -> None:
    registry.register_all(hook_tools())
