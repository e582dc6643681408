"""Shared fixtures: asyncio backend and an in-memory registry."""
from __future__ import annotations

import pytest

from eureka_cli.discovery import StaticRegistry, static_registry
from tests.factories import make_instance


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def registry() -> StaticRegistry:
    return static_registry([
        make_instance("ORDERS", "i-1", "UP", "10.0.0.5", 8080),
        make_instance("ORDERS", "i-2", "STARTING", "10.0.0.6", 8080),
        make_instance("BILLING", "i-1", "DOWN", "10.0.1.7", 9090),
    ])
