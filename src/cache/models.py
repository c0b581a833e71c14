# src/cache/models.py - v1
"""Cache domain models: targets (TextDocument, WorkspaceFolder) and the
settings values cached for them (RubyConfiguration, Environment).

Wire names are the client's camelCase; unknown keys are preserved so newer
client settings survive a round trip through the cache.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Environment = dict[str, str]


class TextDocument(BaseModel):
    """Open document, addressed by its URI."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    uri: str
    language_id: str = "ruby"
    version: int = 0


class WorkspaceFolder(BaseModel):
    """Workspace folder, addressed by its URI."""

    model_config = ConfigDict(frozen=True)

    uri: str
    name: str = ""


class _SettingsModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class RubyCommandConfiguration(_SettingsModel):
    """Command override for an external Ruby tool."""

    command: str | None = None
    use_bundler: bool | None = None


class RuboCopLintConfiguration(RubyCommandConfiguration):
    """RuboCop linter options."""

    lint: bool | None = None
    only: list[str] | None = None
    except_: list[str] | None = Field(default=None, alias="except")
    require: list[str] | None = None
    rails: bool | None = None
    force_exclusion: bool | None = None


class LintConfiguration(_SettingsModel):
    """Enabled linters; True enables with defaults, an object overrides them."""

    fasterer: bool | RubyCommandConfiguration | None = None
    reek: bool | RubyCommandConfiguration | None = None
    rubocop: bool | RuboCopLintConfiguration | None = None


class InterpreterConfiguration(_SettingsModel):
    command_path: str | None = None


class RubyConfiguration(_SettingsModel):
    """Per-document Ruby settings as returned by the client."""

    use_bundler: bool = False
    workspace_folder_uri: str = ""
    interpreter: InterpreterConfiguration | None = None
    path_to_bundler: str = "bundle"
    lint: LintConfiguration = Field(default_factory=LintConfiguration)
    format: bool | Literal["rubocop", "standard", "rufo"] = False
