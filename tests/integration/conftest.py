# tests/integration/conftest.py - v1
"""Shared fixtures for integration tests.

FakeLanguageClient stands in for the editor: it answers configuration and
environment requests from in-memory tables and records every request, so
tests can assert how often the caches went to the client.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest


class FakeLanguageClient:
    """In-memory editor answering per-scope configuration requests."""

    def __init__(self) -> None:
        self.configuration: dict[str, dict[str, Any]] = {}
        self.environments: dict[str, dict[str, Any]] = {}
        self.configuration_requests: list[list[dict[str, str]]] = []
        self.environment_requests: list[list[str]] = []
        self.latency = 0.0

    async def workspace_configuration(
        self, items: list[dict[str, str]]
    ) -> list[dict[str, Any] | None]:
        self.configuration_requests.append(items)
        if self.latency:
            await asyncio.sleep(self.latency)
        return [self.configuration.get(item["scopeUri"]) for item in items]

    async def ruby_environments(self, keys: list[str]) -> list[dict[str, Any] | None]:
        self.environment_requests.append(keys)
        if self.latency:
            await asyncio.sleep(self.latency)
        return [self.environments.get(key) for key in keys]


@pytest.fixture
def client() -> FakeLanguageClient:
    return FakeLanguageClient()
