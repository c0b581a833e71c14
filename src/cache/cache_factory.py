# src/cache/cache_factory.py - v1
"""Factory for the two settings caches a language server keeps."""

from __future__ import annotations

from dataclasses import dataclass

from settingscache.cache import fetchers
from settingscache.cache.keyed_cache import Fetcher, KeyedAsyncCache
from settingscache.cache.models import (
    Environment,
    RubyConfiguration,
    TextDocument,
    WorkspaceFolder,
)
from settingscache.config.settings import Settings

DOCUMENT_CONFIGURATION_CACHE = "document_configuration"
WORKSPACE_ENVIRONMENT_CACHE = "workspace_ruby_environment"


@dataclass
class SettingsCaches:
    """Document configuration and workspace environment caches.

    The two caches share no state.
    """

    documents: KeyedAsyncCache[TextDocument, RubyConfiguration]
    environments: KeyedAsyncCache[WorkspaceFolder, Environment]

    def flush(self) -> None:
        self.documents.flush()
        self.environments.flush()


def create_settings_caches(
    settings: Settings | None = None,
    *,
    configuration_fetcher: Fetcher[RubyConfiguration] | None = None,
    environment_fetcher: Fetcher[Environment] | None = None,
    configuration_request: fetchers.ConfigurationRequest | None = None,
    environment_request: fetchers.EnvironmentRequest | None = None,
) -> SettingsCaches:
    """Instantiate both caches.

    Args:
        settings: Application settings. Defaults to in-flight deduplication
            on and sequential get_all.
        configuration_fetcher: Fetch function for document configuration.
        environment_fetcher: Fetch function for workspace environments.
        configuration_request: Client transport to wrap with
            fetchers.configuration_fetcher() (uses settings.configuration_section).
        environment_request: Client transport to wrap with
            fetchers.environment_fetcher().

    Raises:
        ValueError: If both a fetcher and a request are given for one cache.

    Fetchers left as None must be bound with bind_fetcher() before the first
    miss.
    """
    if configuration_request is not None:
        if configuration_fetcher is not None:
            raise ValueError(
                "Pass configuration_fetcher or configuration_request, not both"
            )
        section = "ruby" if settings is None else settings.configuration_section
        configuration_fetcher = fetchers.configuration_fetcher(
            configuration_request, section=section
        )
    if environment_request is not None:
        if environment_fetcher is not None:
            raise ValueError("Pass environment_fetcher or environment_request, not both")
        environment_fetcher = fetchers.environment_fetcher(environment_request)

    dedupe = True if settings is None else settings.cache_dedupe_inflight
    batch = False if settings is None else settings.cache_batch_get_all

    documents: KeyedAsyncCache[TextDocument, RubyConfiguration] = KeyedAsyncCache(
        configuration_fetcher,
        name=DOCUMENT_CONFIGURATION_CACHE,
        dedupe_inflight=dedupe,
        batch_get_all=batch,
    )
    environments: KeyedAsyncCache[WorkspaceFolder, Environment] = KeyedAsyncCache(
        environment_fetcher,
        name=WORKSPACE_ENVIRONMENT_CACHE,
        dedupe_inflight=dedupe,
        batch_get_all=batch,
    )
    return SettingsCaches(documents=documents, environments=environments)
