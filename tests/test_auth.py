"""Tests for credential extraction."""

from __future__ import annotations

import pytest

from v0_mcp.auth import bearer_token, extract_credential, http_fallback, stdio_credential
from v0_mcp.config import Settings
from v0_mcp.errors import UnauthorizedError


class TestBearerToken:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer key123", "key123"),
            ("bearer key123", "key123"),
            ("Bearer   key123  ", "key123"),
            ("Basic dXNlcjpwdw==", None),
            ("Bearer", None),
            ("Bearer ", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parsing(self, header: str, expected: str) -> None:
        assert bearer_token(header) == expected


class TestExtractCredential:
    def test_from_header(self) -> None:
        assert extract_credential({"authorization": "Bearer key123"}) == "key123"

    def test_header_beats_fallback(self) -> None:
        assert extract_credential({"authorization": "Bearer mine"}, fallback="shared") == "mine"

    def test_fallback_used_without_header(self) -> None:
        assert extract_credential({}, fallback="shared") == "shared"

    def test_missing_credential_rejected(self) -> None:
        with pytest.raises(UnauthorizedError, match="Missing API key"):
            extract_credential({})

    def test_non_bearer_rejected(self) -> None:
        with pytest.raises(UnauthorizedError):
            extract_credential({"authorization": "Basic abc"})


class TestSettingsCredentials:
    def test_http_fallback_disabled_by_default(self, settings: Settings) -> None:
        settings.api_key = "shared"
        assert http_fallback(settings) is None

    def test_http_fallback_when_allowed(self, settings: Settings) -> None:
        settings.api_key = "shared"
        settings.allow_env_credential = True
        assert http_fallback(settings) == "shared"

    def test_stdio_requires_key(self, settings: Settings) -> None:
        with pytest.raises(UnauthorizedError, match="V0_API_KEY"):
            stdio_credential(settings)

    def test_stdio_uses_configured_key(self, settings: Settings) -> None:
        settings.api_key = "shared"
        assert stdio_credential(settings) == "shared"
