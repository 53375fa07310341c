from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

import httpx

from .config import Settings
from .errors import UpstreamError

logger = logging.getLogger(__name__)

_PATH_PARAM = re.compile(r"{(\w+)}")


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    query: Tuple[str, ...] = ()
    body: Tuple[str, ...] = ()

    @property
    def path_params(self) -> Tuple[str, ...]:
        return tuple(_PATH_PARAM.findall(self.path))


# operation name -> endpoint. Operation names follow the platform SDK's
# resource.action naming so adapters read like SDK calls.
ENDPOINTS: Dict[str, Endpoint] = {
    # Chats
    "chats.create": Endpoint(
        "POST",
        "/chats",
        body=(
            "message",
            "attachments",
            "system",
            "chatPrivacy",
            "projectId",
            "modelConfiguration",
        ),
    ),
    "chats.init": Endpoint(
        "POST",
        "/chats/init",
        body=("type", "name", "projectId", "chatPrivacy", "files", "repo", "registry", "zip"),
    ),
    "chats.getById": Endpoint("GET", "/chats/{chatId}"),
    "chats.find": Endpoint("GET", "/chats", query=("limit", "offset", "isFavorite")),
    "chats.update": Endpoint("PATCH", "/chats/{chatId}", body=("name", "privacy")),
    "chats.delete": Endpoint("DELETE", "/chats/{chatId}"),
    "chats.favorite": Endpoint("PUT", "/chats/{chatId}/favorite", body=("isFavorite",)),
    "chats.fork": Endpoint("POST", "/chats/{chatId}/fork", body=("versionId",)),
    "chats.sendMessage": Endpoint(
        "POST",
        "/chats/{chatId}/messages",
        body=("message", "system", "attachments", "modelConfiguration"),
    ),
    "chats.findMessages": Endpoint(
        "GET", "/chats/{chatId}/messages", query=("limit", "cursor")
    ),
    "chats.getMessage": Endpoint("GET", "/chats/{chatId}/messages/{messageId}"),
    "chats.findVersions": Endpoint(
        "GET", "/chats/{chatId}/versions", query=("limit", "cursor")
    ),
    "chats.getVersion": Endpoint("GET", "/chats/{chatId}/versions/{versionId}"),
    # Projects
    "projects.create": Endpoint(
        "POST",
        "/projects",
        body=(
            "name",
            "description",
            "icon",
            "environmentVariables",
            "instructions",
            "vercelProjectId",
        ),
    ),
    "projects.getById": Endpoint("GET", "/projects/{projectId}"),
    "projects.find": Endpoint("GET", "/projects"),
    "projects.update": Endpoint(
        "PATCH",
        "/projects/{projectId}",
        body=("name", "description", "instructions", "privacy"),
    ),
    "projects.delete": Endpoint("DELETE", "/projects/{projectId}"),
    "projects.getByChatId": Endpoint("GET", "/chats/{chatId}/project"),
    "projects.assign": Endpoint("POST", "/projects/{projectId}/assign", body=("chatId",)),
    "projects.findEnvVars": Endpoint(
        "GET", "/projects/{projectId}/env-vars", query=("decrypted",)
    ),
    "projects.createEnvVars": Endpoint(
        "POST",
        "/projects/{projectId}/env-vars",
        body=("environmentVariables", "upsert"),
    ),
    "projects.deleteEnvVars": Endpoint(
        "POST",
        "/projects/{projectId}/env-vars/delete",
        body=("environmentVariableIds",),
    ),
    # Deployments
    "deployments.create": Endpoint(
        "POST", "/deployments", body=("projectId", "chatId", "versionId")
    ),
    "deployments.getById": Endpoint("GET", "/deployments/{deploymentId}"),
    "deployments.find": Endpoint(
        "GET", "/deployments", query=("projectId", "chatId", "versionId")
    ),
    "deployments.delete": Endpoint("DELETE", "/deployments/{deploymentId}"),
    "deployments.findLogs": Endpoint(
        "GET", "/deployments/{deploymentId}/logs", query=("since",)
    ),
    "deployments.findErrors": Endpoint("GET", "/deployments/{deploymentId}/errors"),
    # Integrations
    "integrations.vercel.projects.create": Endpoint(
        "POST", "/integrations/vercel/projects", body=("projectId", "name")
    ),
    "integrations.vercel.projects.find": Endpoint("GET", "/integrations/vercel/projects"),
    # Webhooks
    "hooks.create": Endpoint("POST", "/hooks", body=("name", "events", "chatId", "url")),
    "hooks.getById": Endpoint("GET", "/hooks/{hookId}"),
    "hooks.find": Endpoint("GET", "/hooks"),
    "hooks.update": Endpoint("PATCH", "/hooks/{hookId}", body=("name", "events", "url")),
    "hooks.delete": Endpoint("DELETE", "/hooks/{hookId}"),
    # User
    "user.get": Endpoint("GET", "/user"),
    "user.getPlan": Endpoint("GET", "/user/plan"),
    "user.getScopes": Endpoint("GET", "/user/scopes"),
    "user.getBilling": Endpoint("GET", "/user/billing", query=("scope",)),
    # Rate limits
    "rateLimits.find": Endpoint("GET", "/rate-limits", query=("scope",)),
}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class V0Client:
    """
    Thin async client for the v0 Platform API.

    One `httpx.AsyncClient` is shared for connection pooling, but it carries
    no credentials: every `perform` call passes the caller's key and it is
    only ever attached to that single request.
    """

    def __init__(
        self,
        base_url: str = "https://api.v0.dev/v1",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "V0Client":
        return cls(base_url=settings.api_base_url, timeout=settings.request_timeout)

    async def __aenter__(self) -> "V0Client":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def build_request(
        self,
        operation: str,
        params: Mapping[str, Any],
        api_key: str,
    ) -> httpx.Request:
        endpoint = ENDPOINTS.get(operation)
        if endpoint is None:
            raise ValueError(f"Unknown platform operation '{operation}'")
        if not api_key:
            raise ValueError("A platform API key is required")

        path = endpoint.path
        for name in endpoint.path_params:
            value = params.get(name)
            if value is None or value == "":
                raise ValueError(f"Missing path parameter '{name}' for '{operation}'")
            path = path.replace("{%s}" % name, quote(str(value), safe=""))

        query = {
            key: _query_value(params[key])
            for key in endpoint.query
            if params.get(key) is not None
        }
        body = {key: params[key] for key in endpoint.body if params.get(key) is not None}

        headers = {"Authorization": f"Bearer {api_key}"}
        json_body: Optional[Dict[str, Any]] = None
        if endpoint.method != "GET" and endpoint.body:
            json_body = body

        return self._http.build_request(
            endpoint.method,
            path,
            params=query or None,
            json=json_body,
            headers=headers,
        )

    async def perform(
        self,
        operation: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        api_key: str,
    ) -> Any:
        """
        Execute one platform operation and return the parsed JSON response.

        Raises `UpstreamError` carrying the status code and response body on a
        non-success answer, or the transport error text when the API could
        not be reached. Nothing is retried here.
        """
        request = self.build_request(operation, params or {}, api_key)
        logger.debug("%s %s (%s)", request.method, request.url.path, operation)

        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            raise UpstreamError(None, f"{type(e).__name__}: {e}") from e

        if response.is_error:
            raise UpstreamError(response.status_code, response.text)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                response.status_code,
                f"Invalid JSON in response: {response.text[:200]}",
            ) from e
