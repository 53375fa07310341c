from __future__ import annotations

from typing import Any, Dict, List

from . import ToolDescriptor, ToolRegistry
from .adapters import platform_call
from .formatting import bullet_list, field_of, items_of, listing
from .schema import number, string


def _render_deployment(deployment: Any, _: Dict[str, Any]) -> str:
    lines = [
        f"ID: {field_of(deployment, 'id')}",
        f"Status: {field_of(deployment, 'status')}",
        f"URL: {field_of(deployment, 'webUrl', field_of(deployment, 'url'))}",
    ]
    if isinstance(deployment, dict):
        for key, label in (
            ("inspectorUrl", "Inspector"),
            ("projectId", "Project ID"),
            ("chatId", "Chat ID"),
            ("versionId", "Version ID"),
        ):
            if deployment.get(key):
                lines.append(f"{label}: {deployment[key]}")
    return "\n".join(lines)


def _render_created_deployment(deployment: Any, arguments: Dict[str, Any]) -> str:
    return f"Deployment created successfully!\n\n{_render_deployment(deployment, arguments)}"


def _render_deployment_details(deployment: Any, arguments: Dict[str, Any]) -> str:
    return f"Deployment Details:\n\n{_render_deployment(deployment, arguments)}"


def _render_deployment_list(deployments: Any, _: Dict[str, Any]) -> str:
    def line(d: Any) -> str:
        return f"{field_of(d, 'id')}: {field_of(d, 'webUrl', field_of(d, 'url'))}"

    return listing("deployments", items_of(deployments), line)


def _render_deleted_deployment(_: Any, arguments: Dict[str, Any]) -> str:
    return f"Deployment {arguments['deploymentId']} deleted successfully!"


def _log_line(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    return field_of(entry, "text", field_of(entry, "message", str(entry)))


def _render_logs(logs: Any, arguments: Dict[str, Any]) -> str:
    entries = logs.get("logs") if isinstance(logs, dict) else logs
    if not isinstance(entries, list):
        entries = items_of(logs)
    header = f"Deployment {arguments['deploymentId']} logs ({len(entries)} lines):"
    body = "\n".join(_log_line(e) for e in entries) or "No logs found"
    lines = [header, "", body]
    if isinstance(logs, dict) and logs.get("nextSince") is not None:
        lines.extend(["", f"Next since: {logs['nextSince']}"])
    return "\n".join(lines)


def _render_errors(errors: Any, arguments: Dict[str, Any]) -> str:
    if isinstance(errors, dict) and not items_of(errors):
        found = [
            f"{key}: {errors[key]}"
            for key in ("error", "fullErrorText", "errorType")
            if errors.get(key)
        ]
    else:
        found = [_log_line(e) for e in items_of(errors)]
    body = bullet_list(found, "No errors found")
    return f"Deployment {arguments['deploymentId']} errors:\n\n{body}"


def deployment_tools() -> List[ToolDescriptor]:
    return [
        ToolDescriptor.build(
            name="create_deployment",
            description=(
                "Deploy a specific chat version of a project to Vercel. Returns "
                "the deployment ID and its URLs."
            ),
            params={
                "projectId": string("The ID of the project", required=True),
                "chatId": string("The ID of the chat", required=True),
                "versionId": string("The ID of the chat version to deploy", required=True),
            },
            operation=platform_call("deployments.create"),
            render=_render_created_deployment,
            error_prefix="Error creating deployment",
        ),
        ToolDescriptor.build(
            name="get_deployment",
            description="Retrieve a deployment by its ID.",
            params={"deploymentId": string("The ID of the deployment", required=True)},
            operation=platform_call("deployments.getById"),
            render=_render_deployment_details,
            error_prefix="Error retrieving deployment",
        ),
        ToolDescriptor.build(
            name="find_deployments",
            description="List the deployments of a given project, chat and version.",
            params={
                "projectId": string("The ID of the project", required=True),
                "chatId": string("The ID of the chat", required=True),
                "versionId": string("The ID of the chat version", required=True),
            },
            operation=platform_call("deployments.find"),
            render=_render_deployment_list,
            error_prefix="Error finding deployments",
        ),
        ToolDescriptor.build(
            name="delete_deployment",
            description="Delete a deployment by its ID.",
            params={"deploymentId": string("The ID of the deployment to delete", required=True)},
            operation=platform_call("deployments.delete"),
            render=_render_deleted_deployment,
            error_prefix="Error deleting deployment",
        ),
        ToolDescriptor.build(
            name="find_deployment_logs",
            description=(
                "Fetch build and runtime logs of a deployment. Pass the returned "
                "'since' value back to page through newer logs."
            ),
            params={
                "deploymentId": string("The ID of the deployment", required=True),
                "since": number("Only return logs after this timestamp (ms)"),
            },
            operation=platform_call("deployments.findLogs"),
            render=_render_logs,
            error_prefix="Error finding deployment logs",
        ),
        ToolDescriptor.build(
            name="find_deployment_errors",
            description="Fetch the errors reported for a deployment.",
            params={"deploymentId": string("The ID of the deployment", required=True)},
            operation=platform_call("deployments.findErrors"),
            render=_render_errors,
            error_prefix="Error finding deployment errors",
        ),
    ]


def register_tools(registry: ToolRegistry) -> None:
    registry.register_all(deployment_tools())
