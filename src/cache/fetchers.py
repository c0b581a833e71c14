# src/cache/fetchers.py - v1
"""Fetch adapters: turn an owner-supplied request callable into a cache
fetch function and validate the returned payloads.

The request callable is the transport (for a language server, a
``workspace/configuration`` request to the client); this module only shapes
the request items and validates the replies.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from settingscache.cache.errors import SettingsFetchError
from settingscache.cache.keyed_cache import Fetcher
from settingscache.cache.models import Environment, RubyConfiguration

logger = logging.getLogger(__name__)

ConfigurationRequest = Callable[[list[dict[str, str]]], Awaitable[Sequence[Any]]]
EnvironmentRequest = Callable[[list[str]], Awaitable[Sequence[Any]]]

# Numeric environment values are accepted and stringified.
_environment_adapter: TypeAdapter[dict[str, str | int | float]] = TypeAdapter(
    dict[str, str | int | float]
)


def configuration_fetcher(
    send_request: ConfigurationRequest,
    section: str = "ruby",
) -> Fetcher[RubyConfiguration]:
    """Build a fetcher for per-document Ruby configuration.

    Args:
        send_request: Sends configuration items (``scopeUri`` + ``section``)
            to the client and returns one payload per item.
        section: Configuration section to request.

    Returns:
        Fetch function suitable for KeyedAsyncCache.
    """

    async def fetch(keys: list[str]) -> list[RubyConfiguration | None]:
        items = [{"scopeUri": key, "section": section} for key in keys]
        payloads = await send_request(items)
        logger.debug("Received %d configuration payloads", len(payloads))
        return [
            _validate_configuration(key, payload)
            for key, payload in zip(keys, payloads)
        ]

    return fetch


def environment_fetcher(send_request: EnvironmentRequest) -> Fetcher[Environment]:
    """Build a fetcher for workspace-folder Ruby environments.

    Values are coerced to strings; a None payload stays None.
    """

    async def fetch(keys: list[str]) -> list[Environment | None]:
        payloads = await send_request(keys)
        logger.debug("Received %d environment payloads", len(payloads))
        return [
            _validate_environment(key, payload)
            for key, payload in zip(keys, payloads)
        ]

    return fetch


def _validate_configuration(key: str, payload: Any) -> RubyConfiguration | None:
    if payload is None:
        return None
    try:
        return RubyConfiguration.model_validate(payload)
    except ValidationError as e:
        raise SettingsFetchError(key, str(e)) from e


def _validate_environment(key: str, payload: Any) -> Environment | None:
    if payload is None:
        return None
    try:
        values = _environment_adapter.validate_python(payload)
    except ValidationError as e:
        raise SettingsFetchError(key, str(e)) from e
    return {name: str(value) for name, value in values.items()}
