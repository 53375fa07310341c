from __future__ import annotations

from typing import Any, Dict, List

from . import ToolDescriptor, ToolRegistry
from .adapters import platform_call
from .formatting import field_of, items_of, listing
from .schema import array, boolean, enum, number, obj, string

PROJECT_PRIVACY = ("private", "team")

DEFAULT_PAGE_SIZE = 10


def _env_var() -> Any:
    return obj(
        {
            "key": string("Variable name", required=True),
            "value": string("Variable value", required=True),
        }
    )


def _no_params(_: Dict[str, Any]) -> Dict[str, Any]:
    # The listing endpoint is not paginated upstream.
    return {}


def _render_created_project(project: Any, _: Dict[str, Any]) -> str:
    return (
        "Project created successfully!\n\n"
        f"ID: {field_of(project, 'id')}\n"
        f"Name: {field_of(project, 'name')}"
    )


def _render_project(project: Any, _: Dict[str, Any]) -> str:
    lines = [
        "Project Details:",
        "",
        f"ID: {field_of(project, 'id')}",
        f"Name: {field_of(project, 'name')}",
    ]
    if isinstance(project, dict):
        if project.get("description"):
            lines.append(f"Description: {project['description']}")
        if project.get("privacy"):
            lines.append(f"Privacy: {project['privacy']}")
        if project.get("vercelProjectId"):
            lines.append(f"Vercel project: {project['vercelProjectId']}")
        chats = project.get("chats")
        if isinstance(chats, list) and chats:
            lines.append(f"Chats ({len(chats)}):")
            lines.extend(f"- {field_of(c, 'id')}" for c in chats)
    return "\n".join(lines)


def _render_project_list(projects: Any, arguments: Dict[str, Any]) -> str:
    data = items_of(projects)
    offset = int(arguments.get("offset", 0))
    limit = int(arguments.get("limit", DEFAULT_PAGE_SIZE))
    page = data[offset : offset + limit]
    return listing(
        "projects",
        page,
        lambda p: f"{field_of(p, 'id')}: {field_of(p, 'name')}",
        total=len(data),
    )


def _render_updated_project(project: Any, arguments: Dict[str, Any]) -> str:
    return f"Project updated successfully!\n\n{_render_project(project, arguments)}"


def _render_deleted_project(_: Any, arguments: Dict[str, Any]) -> str:
    return f"Project {arguments['projectId']} deleted successfully!"


def _render_assigned(_: Any, arguments: Dict[str, Any]) -> str:
    return f"Chat {arguments['chatId']} assigned to project {arguments['projectId']}."


def _render_env_var_list(env_vars: Any, arguments: Dict[str, Any]) -> str:
    def line(v: Any) -> str:
        return f"{field_of(v, 'id')}: {field_of(v, 'key')}"

    return f"Project {arguments['projectId']}: " + listing(
        "environment variables", items_of(env_vars), line
    )


def _render_created_env_vars(env_vars: Any, arguments: Dict[str, Any]) -> str:
    created = items_of(env_vars)
    body = "\n".join(f"- {field_of(v, 'id')}: {field_of(v, 'key')}" for v in created)
    return (
        f"Saved {len(created)} environment variables for project "
        f"{arguments['projectId']}.\n\n{body}"
    ).rstrip()


def _render_deleted_env_vars(_: Any, arguments: Dict[str, Any]) -> str:
    ids = arguments["environmentVariableIds"]
    return (
        f"Deleted {len(ids)} environment variables from project "
        f"{arguments['projectId']}: {', '.join(ids)}"
    )


def project_tools() -> List[ToolDescriptor]:
    return [
        ToolDescriptor.build(
            name="create_project",
            description=(
                "Create a new project on the v0 platform. Use this to organize "
                "related chats, files, and deployments under a single project."
            ),
            params={
                "name": string("Name of the project", required=True),
                "description": string("Description of the project"),
                "icon": string("Icon for the project"),
                "instructions": string("Custom instructions applied to every chat"),
                "environmentVariables": array(_env_var(), "Initial environment variables"),
                "vercelProjectId": string("Existing Vercel project to link"),
            },
            operation=platform_call("projects.create"),
            render=_render_created_project,
            error_prefix="Error creating project",
        ),
        ToolDescriptor.build(
            name="get_project",
            description="Retrieve a project by its ID, including its chats.",
            params={"projectId": string("The ID of the project", required=True)},
            operation=platform_call("projects.getById"),
            render=_render_project,
            error_prefix="Error retrieving project",
        ),
        ToolDescriptor.build(
            name="find_projects",
            description=(
                "List your v0 projects. Use this to browse and manage your "
                "projects, with optional pagination."
            ),
            params={
                "limit": number(
                    "Number of projects to retrieve (default: 10)",
                    default=DEFAULT_PAGE_SIZE,
                ),
                "offset": number("Number of projects to skip (default: 0)", default=0),
            },
            operation=platform_call("projects.find", _no_params),
            render=_render_project_list,
            error_prefix="Error finding projects",
        ),
        ToolDescriptor.build(
            name="update_project",
            description="Update a project's name, description, instructions or privacy.",
            params={
                "projectId": string("The ID of the project", required=True),
                "name": string("New name"),
                "description": string("New description"),
                "instructions": string("New custom instructions"),
                "privacy": enum(PROJECT_PRIVACY, "New privacy setting"),
            },
            operation=platform_call("projects.update"),
            render=_render_updated_project,
            error_prefix="Error updating project",
        ),
        ToolDescriptor.build(
            name="delete_project",
            description="Delete a project by its ID.",
            params={"projectId": string("The ID of the project to delete", required=True)},
            operation=platform_call("projects.delete"),
            render=_render_deleted_project,
            error_prefix="Error deleting project",
        ),
        ToolDescriptor.build(
            name="get_project_by_chat",
            description="Find the project a chat belongs to.",
            params={"chatId": string("The ID of the chat", required=True)},
            operation=platform_call("projects.getByChatId"),
            render=_render_project,
            error_prefix="Error retrieving project for chat",
        ),
        ToolDescriptor.build(
            name="assign_project",
            description="Move an existing chat into a project.",
            params={
                "projectId": string("The ID of the target project", required=True),
                "chatId": string("The ID of the chat to assign", required=True),
            },
            operation=platform_call("projects.assign"),
            render=_render_assigned,
            error_prefix="Error assigning project",
        ),
        ToolDescriptor.build(
            name="find_env_vars",
            description="List the environment variables of a project.",
            params={
                "projectId": string("The ID of the project", required=True),
                "decrypted": boolean("Return decrypted values"),
            },
            operation=platform_call("projects.findEnvVars"),
            render=_render_env_var_list,
            error_prefix="Error finding environment variables",
        ),
        ToolDescriptor.build(
            name="create_env_vars",
            description="Add environment variables to a project, optionally overwriting existing keys.",
            params={
                "projectId": string("The ID of the project", required=True),
                "environmentVariables": array(
                    _env_var(), "Variables to create", required=True
                ),
                "upsert": boolean("Overwrite variables whose key already exists"),
            },
            operation=platform_call("projects.createEnvVars"),
            render=_render_created_env_vars,
            error_prefix="Error creating environment variables",
        ),
        ToolDescriptor.build(
            name="delete_env_vars",
            description="Delete environment variables from a project by ID.",
            params={
                "projectId": string("The ID of the project", required=True),
                "environmentVariableIds": array(
                    string(), "IDs of the variables to delete", required=True
                ),
            },
            operation=platform_call("projects.deleteEnvVars"),
            render=_render_deleted_env_vars,
            error_prefix="Error deleting environment variables",
        ),
    ]


def register_tools(registry: ToolRegistry) -> None:
    registry.register_all(project_tools())
