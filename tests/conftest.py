"""Shared test fixtures for v0_mcp."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from v0_mcp.config import Settings
from v0_mcp.dispatcher import ToolDispatcher
from v0_mcp.main import create_registry
from v0_mcp.tools import ToolRegistry


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the developer's environment and .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        api_key=None,
        allow_env_credential=False,
        api_base_url="https://api.v0.test/v1",
    )


@pytest.fixture
def platform() -> Any:
    """Stub of the platform capability interface; configure `perform` per test."""
    client = AsyncMock()
    client.perform.return_value = {}
    return client


@pytest.fixture
def registry() -> ToolRegistry:
    return create_registry()


@pytest.fixture
def dispatcher(registry: ToolRegistry, platform: Any) -> ToolDispatcher:
    return ToolDispatcher(registry, platform)

