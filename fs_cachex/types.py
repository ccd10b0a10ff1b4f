"""Type definitions and type aliases for fs-cachex."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import Union

# A single component of a cache key. Numbers are hashed by their decimal text.
Key = Union[str, int, float, bytes, bytearray, memoryview]
CacheKey = Sequence[Key]

# Entry files are named "{max_age_ms}.{expire_at_ms}.{etag}.json"
ENTRY_SEPARATOR = "."
ENTRY_EXTENSION = "json"

DEFAULT_MAX_AGE_MS = 60 * 1000


@dataclass(frozen=True)
class ETagContent:
    """ETag and data of a cached value."""

    etag: str
    data: Any

    def __bool__(self) -> bool:
        return True


class MissReason(str, Enum):
    """Why an operation produced no value."""

    DISABLED = "disabled"
    NOT_FOUND = "not_found"
    WRITE_FAILED = "write_failed"


@dataclass(frozen=True)
class CacheMiss:
    """Empty result of a read or write.

    Falsy, so callers can branch with ``if result:`` and still tell a cached
    ``None`` (an :class:`ETagContent` whose data is ``None``) from a miss.
    """

    reason: MissReason

    def __bool__(self) -> bool:
        return False


CacheResult = Union[ETagContent, CacheMiss]


@dataclass(frozen=True)
class EntryName:
    """Metadata carried in the name of an entry file.

    Args:
        max_age_ms: TTL requested at write time, informational only
        expire_at_ms: Epoch milliseconds after which the entry is expired
        etag: Digest of the serialized value
    """

    max_age_ms: int
    expire_at_ms: int
    etag: str

    def format(self) -> str:
        return ENTRY_SEPARATOR.join(
            [str(self.max_age_ms), str(self.expire_at_ms), self.etag, ENTRY_EXTENSION]
        )

    def is_expired(self, now_ms: int) -> bool:
        return self.expire_at_ms < now_ms

    @classmethod
    def parse(cls, filename: str) -> "EntryName | None":
        """Parse an entry filename, returning None if it is not one."""
        parts = filename.split(ENTRY_SEPARATOR)
        if len(parts) != 4 or parts[3] != ENTRY_EXTENSION or not parts[2]:
            return None

        max_age, expire_at, etag, _ = parts
        try:
            return cls(max_age_ms=int(max_age), expire_at_ms=int(expire_at), etag=etag)
        except ValueError:
            return None
