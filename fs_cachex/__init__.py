"""fs-cachex: A small filesystem cache with per-entry TTL and lazy cleanup."""

from .backends import FileSystemBackend as FileSystemBackend
from .cache import cache as cache
from .cache import create_cache_instance as create_cache_instance
from .config import CacheOptions as CacheOptions
from .config import default_options as default_options
from .config import resolve_options as resolve_options
from .hashing import get_hash as get_hash
from .types import CacheMiss as CacheMiss
from .types import ETagContent as ETagContent
from .types import MissReason as MissReason

__all__ = [
    "CacheMiss",
    "CacheOptions",
    "ETagContent",
    "FileSystemBackend",
    "MissReason",
    "cache",
    "create_cache_instance",
    "default_options",
    "get_hash",
    "resolve_options",
]
