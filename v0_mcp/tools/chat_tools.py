from __future__ import annotations

from typing import Any, Dict, List

from . import ToolDescriptor, ToolRegistry
from .adapters import platform_call, with_model_configuration
from .formatting import field_of, items_of, listing, to_json
from .schema import array, boolean, enum, number, obj, string

MODEL_IDS = ("v0-1.5-sm", "v0-1.5-md", "v0-1.5-lg")
CHAT_PRIVACY = ("public", "private", "team-edit", "team", "unlisted")
INIT_TYPES = ("files", "repo", "registry", "zip")

DEFAULT_PAGE_SIZE = 10


def _chat_id(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {"chatId": arguments["chatId"]}


def _attachments() -> Any:
    return array(
        obj({"url": string("Public URL of the attachment.", required=True)}),
        "Files or images to attach to the message.",
    )


def _model_params() -> Dict[str, Any]:
    return {
        "modelId": enum(MODEL_IDS, "Model ID to use"),
        "imageGenerations": boolean("Enable image generations"),
    }


# Renderers


def _render_created_chat(chat: Any, _: Dict[str, Any]) -> str:
    return (
        "Chat created successfully!\n\n"
        f"Chat URL: {field_of(chat, 'url')}\n"
        f"Chat ID: {field_of(chat, 'id')}"
    )


def _render_chat(chat: Any, _: Dict[str, Any]) -> str:
    lines = [
        "Chat Details:",
        "",
        f"ID: {field_of(chat, 'id')}",
        f"URL: {field_of(chat, 'url', field_of(chat, 'webUrl'))}",
    ]
    if isinstance(chat, dict):
        if chat.get("name"):
            lines.append(f"Name: {chat['name']}")
        if chat.get("privacy"):
            lines.append(f"Privacy: {chat['privacy']}")
        latest = chat.get("latestVersion")
        if isinstance(latest, dict) and latest.get("id"):
            lines.append(f"Latest version: {latest['id']} ({latest.get('status', 'unknown')})")
    return "\n".join(lines)


def _render_chat_list(chats: Any, arguments: Dict[str, Any]) -> str:
    data = items_of(chats)
    limit = int(arguments.get("limit", DEFAULT_PAGE_SIZE))
    return listing("chats", data[:limit], lambda c: field_of(c, "id"), total=len(data))


def _render_updated_chat(chat: Any, _: Dict[str, Any]) -> str:
    return f"Chat updated successfully!\n\n{_render_chat(chat, _)}"


def _render_deleted_chat(_: Any, arguments: Dict[str, Any]) -> str:
    return f"Chat {arguments['chatId']} deleted successfully!"


def _render_favorite(chat: Any, arguments: Dict[str, Any]) -> str:
    state = "added to" if arguments["isFavorite"] else "removed from"
    return f"Chat {field_of(chat, 'id', arguments['chatId'])} {state} favorites."


def _render_forked_chat(chat: Any, arguments: Dict[str, Any]) -> str:
    return (
        f"Chat {arguments['chatId']} forked successfully!\n\n"
        f"New chat ID: {field_of(chat, 'id')}\n"
        f"Chat URL: {field_of(chat, 'url', field_of(chat, 'webUrl'))}"
    )


def _render_initialized_chat(chat: Any, _: Dict[str, Any]) -> str:
    return (
        "Chat initialized successfully!\n\n"
        f"Chat URL: {field_of(chat, 'url', field_of(chat, 'webUrl'))}\n"
        f"Chat ID: {field_of(chat, 'id')}"
    )


def _render_message_sent(response: Any, _: Dict[str, Any]) -> str:
    return f"Message sent successfully!\n\nResponse: {to_json(response)}"


def _render_message_added(response: Any, _: Dict[str, Any]) -> str:
    return f"Message added successfully!\n\nResponse: {to_json(response)}"


def _render_message_list(messages: Any, arguments: Dict[str, Any]) -> str:
    def line(m: Any) -> str:
        return f"{field_of(m, 'id')} ({field_of(m, 'role')})"

    return f"Chat {arguments['chatId']}: " + listing("messages", items_of(messages), line)


def _render_message(message: Any, _: Dict[str, Any]) -> str:
    return (
        "Message Details:\n\n"
        f"ID: {field_of(message, 'id')}\n"
        f"Role: {field_of(message, 'role')}\n"
        f"Content: {field_of(message, 'content', '')}"
    )


def _render_version_list(versions: Any, arguments: Dict[str, Any]) -> str:
    def line(v: Any) -> str:
        return f"{field_of(v, 'id')} ({field_of(v, 'status')})"

    return f"Chat {arguments['chatId']}: " + listing("versions", items_of(versions), line)


def _render_version(version: Any, _: Dict[str, Any]) -> str:
    files = version.get("files") if isinstance(version, dict) else None
    names = [field_of(f, "name") for f in files] if isinstance(files, list) else []
    lines = [
        "Version Details:",
        "",
        f"ID: {field_of(version, 'id')}",
        f"Status: {field_of(version, 'status')}",
    ]
    if isinstance(version, dict) and version.get("demoUrl"):
        lines.append(f"Demo URL: {version['demoUrl']}")
    if names:
        lines.append(f"Files ({len(names)}):")
        lines.extend(f"- {n}" for n in names)
    return "\n".join(lines)


def chat_tools() -> List[ToolDescriptor]:
    return [
        ToolDescriptor.build(
            name="create_chat",
            description=(
                "Create a new AI-powered chat session. Use this to start a new "
                "conversation with the v0 platform, optionally providing a system "
                "prompt, privacy setting, and model configuration."
            ),
            params={
                "message": string("The message to send to v0 AI", required=True),
                "system": string("Optional system prompt to guide the AI"),
                "chatPrivacy": enum(CHAT_PRIVACY, "Chat privacy setting"),
                "projectId": string("Project to create the chat in"),
                **_model_params(),
                "attachments": _attachments(),
            },
            operation=platform_call("chats.create", with_model_configuration),
            render=_render_created_chat,
            error_prefix="Error creating chat",
        ),
        ToolDescriptor.build(
            name="init_chat",
            description=(
                "Initialize a chat from existing source code: inline files, a git "
                "repository, a shadcn registry item, or a zip archive. No AI "
                "generation happens, so this is faster than create_chat."
            ),
            params={
                "type": enum(INIT_TYPES, "Where the initial code comes from", required=True),
                "name": string("Name for the new chat"),
                "projectId": string("Project to create the chat in"),
                "chatPrivacy": enum(CHAT_PRIVACY, "Chat privacy setting"),
                "files": array(
                    obj(
                        {
                            "name": string("File path within the chat", required=True),
                            "content": string("Inline file content"),
                            "url": string("URL to fetch the file from"),
                            "locked": boolean("Prevent the AI from editing this file"),
                        }
                    ),
                    "Files to start from (type=files)",
                ),
                "repo": obj(
                    {
                        "url": string("Git repository URL", required=True),
                        "branch": string("Branch to check out"),
                    },
                    "Repository to start from (type=repo)",
                ),
                "registry": obj(
                    {"url": string("Registry item URL", required=True)},
                    "Registry item to start from (type=registry)",
                ),
                "zip": obj(
                    {"url": string("Zip archive URL", required=True)},
                    "Zip archive to start from (type=zip)",
                ),
            },
            operation=platform_call("chats.init"),
            render=_render_initialized_chat,
            error_prefix="Error initializing chat",
        ),
        ToolDescriptor.build(
            name="get_chat",
            description=(
                "Retrieve details for a specific chat session by its ID. Use this "
                "to get information or the URL for an existing chat."
            ),
            params={"chatId": string("The ID of the chat to retrieve", required=True)},
            operation=platform_call("chats.getById", _chat_id),
            render=_render_chat,
            error_prefix="Error retrieving chat",
        ),
        ToolDescriptor.build(
            name="find_chats",
            description=(
                "List existing chat sessions. Use this to browse your chat "
                "history, with optional pagination."
            ),
            params={
                "limit": number(
                    "Number of chats to retrieve (default: 10)", default=DEFAULT_PAGE_SIZE
                ),
                "offset": number("Number of chats to skip (default: 0)", default=0),
                "isFavorite": boolean("Only return favorite chats"),
            },
            operation=platform_call("chats.find"),
            render=_render_chat_list,
            error_prefix="Error finding chats",
        ),
        ToolDescriptor.build(
            name="update_chat",
            description="Rename a chat or change its privacy setting.",
            params={
                "chatId": string("The ID of the chat to update", required=True),
                "name": string("New name for the chat"),
                "privacy": enum(CHAT_PRIVACY, "New privacy setting"),
            },
            operation=platform_call("chats.update"),
            render=_render_updated_chat,
            error_prefix="Error updating chat",
        ),
        ToolDescriptor.build(
            name="delete_chat",
            description=(
                "Delete a chat session by its ID. Use this to remove a chat and "
                "its associated data from your account."
            ),
            params={"chatId": string("The ID of the chat to delete", required=True)},
            operation=platform_call("chats.delete", _chat_id),
            render=_render_deleted_chat,
            error_prefix="Error deleting chat",
        ),
        ToolDescriptor.build(
            name="favorite_chat",
            description="Mark a chat as favorite, or remove it from favorites.",
            params={
                "chatId": string("The ID of the chat", required=True),
                "isFavorite": boolean("true to favorite, false to unfavorite", required=True),
            },
            operation=platform_call("chats.favorite"),
            render=_render_favorite,
            error_prefix="Error updating favorite",
        ),
        ToolDescriptor.build(
            name="fork_chat",
            description=(
                "Create a copy of an existing chat, optionally starting from a "
                "specific version. The original chat is left untouched."
            ),
            params={
                "chatId": string("The ID of the chat to fork", required=True),
                "versionId": string("Version to fork from (default: latest)"),
            },
            operation=platform_call("chats.fork"),
            render=_render_forked_chat,
            error_prefix="Error forking chat",
        ),
        ToolDescriptor.build(
            name="send_message",
            description=(
                "Send a message to an existing chat and get the AI's reply. "
                "Optionally override the model configuration for this message."
            ),
            params={
                "chatId": string("The ID of the chat to send the message to", required=True),
                "message": string("The message to send", required=True),
                "system": string("Optional system prompt for this message"),
                **_model_params(),
                "attachments": _attachments(),
            },
            operation=platform_call("chats.sendMessage", with_model_configuration),
            render=_render_message_sent,
            error_prefix="Error sending message",
        ),
        ToolDescriptor.build(
            name="add_message",
            description=(
                "Add a new message to an existing chat session. Use this to "
                "continue a conversation or provide additional instructions to the AI."
            ),
            params={
                "chatId": string("The ID of the chat to add message to", required=True),
                "message": string("The message to add to the chat", required=True),
            },
            operation=platform_call("chats.sendMessage"),
            render=_render_message_added,
            error_prefix="Error adding message",
        ),
        ToolDescriptor.build(
            name="find_messages",
            description="List the messages of a chat, newest first.",
            params={
                "chatId": string("The ID of the chat", required=True),
                "limit": number("Maximum number of messages to return"),
                "cursor": string("Pagination cursor from a previous call"),
            },
            operation=platform_call("chats.findMessages"),
            render=_render_message_list,
            error_prefix="Error finding messages",
        ),
        ToolDescriptor.build(
            name="get_message",
            description="Retrieve a single message of a chat.",
            params={
                "chatId": string("The ID of the chat", required=True),
                "messageId": string("The ID of the message", required=True),
            },
            operation=platform_call("chats.getMessage"),
            render=_render_message,
            error_prefix="Error retrieving message",
        ),
        ToolDescriptor.build(
            name="find_chat_versions",
            description="List the generated versions of a chat.",
            params={
                "chatId": string("The ID of the chat", required=True),
                "limit": number("Maximum number of versions to return"),
                "cursor": string("Pagination cursor from a previous call"),
            },
            operation=platform_call("chats.findVersions"),
            render=_render_version_list,
            error_prefix="Error finding chat versions",
        ),
        ToolDescriptor.build(
            name="get_chat_version",
            description="Retrieve one version of a chat, including its file list and demo URL.",
            params={
                "chatId": string("The ID of the chat", required=True),
                "versionId": string("The ID of the version", required=True),
            },
            operation=platform_call("chats.getVersion"),
            render=_render_version,
            error_prefix="Error retrieving chat version",
        ),
    ]


def register_tools(registry: ToolRegistry) -> None:
    registry.register_all(chat_tools())
