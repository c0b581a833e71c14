"""settingscache: lazily populated, asynchronously fetched settings caches."""

from settingscache.cache.cache_factory import SettingsCaches, create_settings_caches
from settingscache.cache.keyed_cache import KeyedAsyncCache
from settingscache.cache.keys import resolve_key

__version__ = "0.1.0"

__all__ = [
    "KeyedAsyncCache",
    "SettingsCaches",
    "create_settings_caches",
    "resolve_key",
]
