from __future__ import annotations

from typing import Any, Dict, List

from . import ToolDescriptor, ToolRegistry
from .adapters import platform_call
from .formatting import field_of, items_of, listing, to_json
from .schema import string


def _render_user(user: Any, _: Dict[str, Any]) -> str:
    return (
        "User Information:\n\n"
        f"ID: {field_of(user, 'id')}\n"
        f"Email: {field_of(user, 'email')}\n"
        f"Name: {field_of(user, 'name', 'Not provided') or 'Not provided'}"
    )


def _render_plan(plan: Any, _: Dict[str, Any]) -> str:
    return f"User Plan:\n\nPlan: {field_of(plan, 'plan')}\nDetails: {to_json(plan)}"


def _scope_line(scope: Any) -> str:
    name = field_of(scope, "name", "")
    return f"{field_of(scope, 'id')}: {name}" if name else field_of(scope, "id")


def _render_scopes(scopes: Any, _: Dict[str, Any]) -> str:
    return listing("scopes", items_of(scopes), _scope_line)


def _render_billing(billing: Any, arguments: Dict[str, Any]) -> str:
    scope = arguments.get("scope")
    header = f"Billing ({scope}):" if scope else "Billing:"
    return f"{header}\n\n{to_json(billing)}"


def _render_rate_limits(limits: Any, _: Dict[str, Any]) -> str:
    return f"Rate Limits:\n\n{to_json(limits)}"


def user_tools() -> List[ToolDescriptor]:
    return [
        ToolDescriptor.build(
            name="get_user_info",
            description=(
                "Retrieve information about the current user, such as user ID, "
                "email, and name."
            ),
            params={},
            operation=platform_call("user.get"),
            render=_render_user,
            error_prefix="Error getting user info",
        ),
        ToolDescriptor.build(
            name="get_user_plan",
            description=(
                "Get the current user's plan and billing details. Use this to "
                "check your subscription and usage limits."
            ),
            params={},
            operation=platform_call("user.getPlan"),
            render=_render_plan,
            error_prefix="Error getting user plan",
        ),
        ToolDescriptor.build(
            name="get_user_scopes",
            description=(
                "List the scopes (personal account and teams) the current user "
                "can act in. Scope IDs are accepted by get_billing and "
                "check_rate_limits."
            ),
            params={},
            operation=platform_call("user.getScopes"),
            render=_render_scopes,
            error_prefix="Error getting user scopes",
        ),
        ToolDescriptor.build(
            name="get_billing",
            description="Get billing and credit usage for the user or one of their teams.",
            params={"scope": string("Scope ID (default: personal account)")},
            operation=platform_call("user.getBilling"),
            render=_render_billing,
            error_prefix="Error getting billing",
        ),
        ToolDescriptor.build(
            name="check_rate_limits",
            description=(
                "Check your current API rate limits and usage. Use this to "
                "monitor your quota and avoid hitting rate limits."
            ),
            params={"scope": string("Scope ID (default: personal account)")},
            operation=platform_call("rateLimits.find"),
            render=_render_rate_limits,
            error_prefix="Error checking rate limits",
        ),
    ]


def register_tools(registry: ToolRegistry) -> None:
    registry.register_all(user_tools())
