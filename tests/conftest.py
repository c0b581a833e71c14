# tests/conftest.py - v1
"""Shared test fixtures: sample targets, settings payloads and fake fetchers.

No external dependencies; every fetch is an AsyncMock.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
from unittest.mock import AsyncMock

import pytest

from settingscache.cache.models import RubyConfiguration, TextDocument, WorkspaceFolder
from settingscache.logging.context import clear_context


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def document() -> TextDocument:
    return TextDocument(uri="file:///project/app/models/user.rb")


@pytest.fixture
def other_document() -> TextDocument:
    return TextDocument(uri="file:///project/app/models/account.rb")


@pytest.fixture
def workspace_folder() -> WorkspaceFolder:
    return WorkspaceFolder(uri="file:///project", name="project")


@pytest.fixture
def rubocop_configuration() -> RubyConfiguration:
    return RubyConfiguration.model_validate(
        {
            "useBundler": True,
            "workspaceFolderUri": "file:///project",
            "lint": {"rubocop": {"command": "rubocop", "except": ["Style/Documentation"]}},
            "format": "rubocop",
        }
    )


@pytest.fixture
def make_fetcher() -> Callable[[Mapping[str, Any]], AsyncMock]:
    """Build an AsyncMock fetcher answering from a fixed key -> value table.

    Keys missing from the table produce an empty result.
    """

    def _make(table: Mapping[str, Any]) -> AsyncMock:
        async def fetch(keys: list[str]) -> list[Any]:
            return [table[key] for key in keys if key in table]

        return AsyncMock(side_effect=fetch)

    return _make
