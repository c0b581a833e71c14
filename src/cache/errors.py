# src/cache/errors.py - v1
"""Exceptions raised by the settings cache and its fetch adapters."""

from __future__ import annotations


class SettingsCacheError(Exception):
    """Base class for settingscache errors."""


class FetcherNotBoundError(SettingsCacheError, RuntimeError):
    """A cache miss occurred before a fetch function was bound."""

    def __init__(self, cache: str, key: str):
        self.cache = cache
        self.key = key
        super().__init__(
            f"Cache '{cache}' has no fetch function bound (miss on {key!r})"
        )


class InvalidTargetError(SettingsCacheError, TypeError):
    """Target is neither a string key nor an object carrying a string uri."""

    def __init__(self, target: object):
        self.target = target
        super().__init__(
            f"Cannot derive a cache key from {type(target).__name__}: "
            "expected a str or an object with a str 'uri'"
        )


class SettingsFetchError(SettingsCacheError):
    """Fetched settings payload failed validation."""

    def __init__(self, key: str, detail: str):
        self.key = key
        self.detail = detail
        super().__init__(f"Invalid settings payload for {key!r}: {detail}")
