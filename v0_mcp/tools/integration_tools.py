from __future__ import annotations

from typing import Any, Dict, List

from . import ToolDescriptor, ToolRegistry
from .adapters import platform_call
from .formatting import field_of, items_of, listing
from .schema import string


def _render_created(project: Any, arguments: Dict[str, Any]) -> str:
    return (
        "Vercel project created successfully!\n\n"
        f"Vercel project ID: {field_of(project, 'id')}\n"
        f"Name: {field_of(project, 'name', arguments['name'])}\n"
        f"Linked v0 project: {arguments['projectId']}"
    )


def _render_list(projects: Any, _: Dict[str, Any]) -> str:
    return listing(
        "Vercel projects",
        items_of(projects),
        lambda p: f"{field_of(p, 'id')}: {field_of(p, 'name')}",
    )


def integration_tools() -> List[ToolDescriptor]:
    return [
        ToolDescriptor.build(
            name="create_vercel_project",
            description=(
                "Create a Vercel project and link it to a v0 project so its "
                "chats can be deployed."
            ),
            params={
                "projectId": string("The ID of the v0 project to link", required=True),
                "name": string("Name of the new Vercel project", required=True),
            },
            operation=platform_call("integrations.vercel.projects.create"),
            render=_render_created,
            error_prefix="Error creating Vercel project",
        ),
        ToolDescriptor.build(
            name="find_vercel_projects",
            description="List the Vercel projects linked to your v0 account.",
            params={},
            operation=platform_call("integrations.vercel.projects.find"),
            render=_render_list,
            error_prefix="Error finding Vercel projects",
        ),
    ]


def register_tools(registry: ToolRegistry) -> None:
    registry.register_all(integration_tools())
