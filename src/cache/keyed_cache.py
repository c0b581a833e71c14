# src/cache/keyed_cache.py - v1
"""Lazily populated keyed cache backed by an async batch fetch function.

Entries are looked up by a string key derived from the target (see
cache/keys.py). A miss calls the bound fetch function with a one-element key
list and stores the first returned value. Entries live until they are deleted
or the cache is flushed; there is no size or time based eviction.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Generic, TypeVar

from settingscache.cache.errors import FetcherNotBoundError
from settingscache.cache.keys import Target, resolve_key
from settingscache.logging.context import cache_context

logger = logging.getLogger(__name__)

TargetT = TypeVar("TargetT")
ValueT = TypeVar("ValueT")

Fetcher = Callable[[list[str]], Awaitable[Sequence[ValueT | None]]]


class KeyedAsyncCache(Generic[TargetT, ValueT]):
    """Memoizes fetched settings per document or workspace-folder URI.

    Args:
        fetcher: Async batch lookup used on a miss. May be bound later with
            bind_fetcher().
        name: Cache name used in log records.
        dedupe_inflight: Let overlapping misses for the same key share one
            fetch call instead of issuing one each.
        batch_get_all: Default for get_all(batch=...).
    """

    def __init__(
        self,
        fetcher: Fetcher[ValueT] | None = None,
        *,
        name: str = "settings",
        dedupe_inflight: bool = True,
        batch_get_all: bool = False,
    ) -> None:
        self.name = name
        self._fetcher = fetcher
        self._dedupe_inflight = dedupe_inflight
        self._batch_get_all = batch_get_all
        self._entries: dict[str, ValueT] = {}
        self._inflight: dict[str, asyncio.Future[ValueT | None]] = {}

    @property
    def fetcher(self) -> Fetcher[ValueT] | None:
        return self._fetcher

    def bind_fetcher(self, fetcher: Fetcher[ValueT]) -> None:
        """Bind (or replace) the fetch function used on a miss."""
        self._fetcher = fetcher

    # --- Mutation ---

    def set(self, target: TargetT | Target, value: ValueT) -> None:
        """Store value under the target's key, overwriting any prior entry."""
        if value is None:
            raise ValueError(f"Cache '{self.name}' cannot store None")
        self._entries[resolve_key(target)] = value

    def set_all(self, values: Mapping[str, ValueT]) -> None:
        """Store every key/value pair. Not atomic."""
        for key, value in values.items():
            self.set(key, value)

    def delete(self, target: TargetT | Target) -> bool:
        """Remove the target's entry. Returns True if one existed."""
        key = resolve_key(target)
        if key not in self._entries:
            return False
        del self._entries[key]
        logger.debug("Cache '%s' deleted %s", self.name, key)
        return True

    def delete_all(self, targets: Iterable[TargetT | Target]) -> None:
        for target in targets:
            self.delete(target)

    def flush(self) -> None:
        """Drop every entry. Pending fetches are not cancelled."""
        count = len(self._entries)
        self._entries.clear()
        logger.debug("Cache '%s' flushed (%d entries)", self.name, count)

    # --- Lookup ---

    async def get(self, target: TargetT | Target | None) -> ValueT | None:
        """Return the cached value for target, fetching it on a miss.

        A falsy target resolves to None without touching the cache. On a
        miss the fetch function is called once with ``[key]``; its first
        result (if any, and not None) is stored before returning.

        Raises:
            FetcherNotBoundError: On a miss with no fetch function bound.
            Exception: Whatever the fetch function raises, unchanged.
        """
        if not target:
            return None
        key = resolve_key(target)
        if key in self._entries:
            logger.debug("Cache '%s' hit for %s", self.name, key)
            return self._entries[key]

        fetcher = self._require_fetcher(key)
        if not self._dedupe_inflight:
            return await self._populate(key, fetcher)

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._populate(key, fetcher))
            self._inflight[key] = pending
            pending.add_done_callback(
                lambda done, key=key: self._forget_inflight(key, done)
            )
        else:
            logger.debug(
                "Cache '%s' joining in-flight fetch for %s", self.name, key
            )
        # Shielded so one cancelled caller does not cancel the shared fetch.
        return await asyncio.shield(pending)

    async def get_all(
        self,
        targets: Iterable[TargetT | Target | None],
        *,
        batch: bool | None = None,
    ) -> dict[str, ValueT | None]:
        """Look up every target, keyed by derived key in input order.

        Sequential by default: each target goes through get() and completes
        before the next starts, so each miss is its own single-key fetch.
        With batch=True all distinct missing keys are fetched in one call and
        results are matched to keys by position. Falsy targets are skipped.
        """
        if batch is None:
            batch = self._batch_get_all
        if batch:
            return await self._get_all_batched(targets)

        settings: dict[str, ValueT | None] = {}
        for target in targets:
            if not target:
                continue
            settings[resolve_key(target)] = await self.get(target)
        return settings

    # --- Introspection ---

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, target: object) -> bool:
        """Peek for an entry without fetching."""
        if not target:
            return False
        return resolve_key(target) in self._entries  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"entries={len(self._entries)}, bound={self._fetcher is not None})"
        )

    # --- Internals ---

    def _require_fetcher(self, key: str) -> Fetcher[ValueT]:
        if self._fetcher is None:
            raise FetcherNotBoundError(self.name, key)
        return self._fetcher

    async def _populate(self, key: str, fetcher: Fetcher[ValueT]) -> ValueT | None:
        with cache_context(self.name, key):
            logger.debug("Cache '%s' miss for %s, fetching", self.name, key)
            results = await fetcher([key])
            value = results[0] if len(results) > 0 else None
            if value is None:
                logger.debug("Cache '%s' fetch returned no value", self.name)
            else:
                self._entries[key] = value
        return value

    def _forget_inflight(self, key: str, done: asyncio.Future[ValueT | None]) -> None:
        if self._inflight.get(key) is done:
            del self._inflight[key]

    async def _get_all_batched(
        self, targets: Iterable[TargetT | Target | None]
    ) -> dict[str, ValueT | None]:
        keys = list(dict.fromkeys(resolve_key(t) for t in targets if t))
        hits = {key: self._entries[key] for key in keys if key in self._entries}
        missing = [key for key in keys if key not in hits]

        fetched: dict[str, ValueT | None] = {}
        if missing:
            fetcher = self._require_fetcher(missing[0])
            with cache_context(self.name, ",".join(missing)):
                logger.debug(
                    "Cache '%s' batch fetching %d keys", self.name, len(missing)
                )
                results = await fetcher(missing)
            for key, value in zip(missing, results):
                fetched[key] = value
                if value is not None:
                    self._entries[key] = value

        return {key: hits[key] if key in hits else fetched.get(key) for key in keys}
