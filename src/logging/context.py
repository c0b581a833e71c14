# src/logging/context.py - v1
"""Contextual logging support: attach request and cache details to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Set per incoming language-server request by the owning process.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_method: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "method", default=None
)
# Set by the cache around a fetch.
_cache: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "cache", default=None
)
_key: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "key", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    method: str | None = None
    cache: str | None = None
    key: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        method=_method.get(),
        cache=_cache.get(),
        key=_key.get(),
    )


def set_request_context(request_id: str, method: str | None = None) -> None:
    """Set request-level context (called once per handled request)."""
    _request_id.set(request_id)
    _method.set(method)


@contextmanager
def cache_context(cache: str, key: str) -> Iterator[None]:
    """Bind cache name and key for the duration of the block."""
    cache_token = _cache.set(cache)
    key_token = _key.set(key)
    try:
        yield
    finally:
        _key.reset(key_token)
        _cache.reset(cache_token)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _method.set(None)
    _cache.set(None)
    _key.set(None)
