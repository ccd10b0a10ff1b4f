from abc import ABC
from abc import abstractmethod
from typing import Any

from fs_cachex.config import OptionsLayer
from fs_cachex.types import DEFAULT_MAX_AGE_MS
from fs_cachex.types import CacheKey
from fs_cachex.types import CacheResult


class BaseCacheBackend(ABC):
    """Base class for all cache backends."""

    @abstractmethod
    async def write(
        self,
        key: CacheKey,
        content: Any,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
        options: OptionsLayer = None,
    ) -> CacheResult:
        """Store a value under a key for ``max_age_ms`` milliseconds."""

    @abstractmethod
    async def read(self, key: CacheKey, options: OptionsLayer = None) -> CacheResult:
        """Retrieve the first live value stored under a key."""

    @abstractmethod
    async def remove(self, key: CacheKey, options: OptionsLayer = None) -> None:
        """Remove every value stored under a key."""

    @abstractmethod
    async def clear(self, options: OptionsLayer = None) -> None:
        """Remove all cached values."""
