# src/cache/keys.py - v1
"""Cache key derivation.

Every cache operation resolves its target through resolve_key(), so raw URI
strings, pydantic target models and plain LSP dictionaries all address the
same entry when they carry the same uri.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, Union, runtime_checkable

from settingscache.cache.errors import InvalidTargetError


@runtime_checkable
class HasUri(Protocol):
    """Anything exposing a stable ``uri`` identifier."""

    @property
    def uri(self) -> str: ...


Target = Union[str, HasUri, Mapping[str, Any]]


def resolve_key(target: Target) -> str:
    """Derive the cache key for a target.

    Args:
        target: A raw key string, an object with a ``uri`` attribute, or a
            mapping with a ``"uri"`` entry (LSP identifiers arrive as dicts).

    Returns:
        The string key.

    Raises:
        InvalidTargetError: If no string identifier can be derived.
    """
    if isinstance(target, str):
        return target
    if isinstance(target, Mapping):
        uri = target.get("uri")
    else:
        uri = getattr(target, "uri", None)
    if not isinstance(uri, str):
        raise InvalidTargetError(target)
    return uri
