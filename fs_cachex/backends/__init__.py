"""Cache backend implementations for fs-cachex."""

from .base import BaseCacheBackend
from .filesystem import FileSystemBackend

__all__ = [
    "BaseCacheBackend",
    "FileSystemBackend",
]
