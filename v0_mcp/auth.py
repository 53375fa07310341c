"""Credential extraction for inbound connections."""

from __future__ import annotations

from typing import Mapping, Optional

from .config import Settings
from .errors import UnauthorizedError


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of an `Authorization: Bearer <token>` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def extract_credential(
    headers: Mapping[str, str],
    fallback: Optional[str] = None,
) -> str:
    """
    Pull the caller's platform key out of request headers.

    `fallback` is the process-wide key for single-tenant deployments; it is
    only used when the request carries no bearer token of its own.
    """
    token = bearer_token(headers.get("authorization") or headers.get("Authorization"))
    if token:
        return token
    if fallback:
        return fallback
    raise UnauthorizedError("Missing API key. Provide 'Authorization: Bearer <v0 API key>'.")


def http_fallback(settings: Settings) -> Optional[str]:
    return settings.api_key if settings.allow_env_credential else None


def stdio_credential(settings: Settings) -> str:
    """A stdio connection has no headers; its credential is the configured key."""
    if not settings.api_key:
        raise UnauthorizedError("V0_API_KEY is required for the stdio transport")
    return settings.api_key
