"""Filesystem cache backend.

Every cache key maps to one directory under the cache root, named by the
hash of the key. Each write adds a file to that directory named
``{max_age_ms}.{expire_at_ms}.{etag}.json`` whose body is the JSON text of
the value. Expired files are only removed when a read comes across them.
"""

import asyncio
import json
import os
import shutil
import time
from logging import getLogger
from pathlib import Path
from typing import Any

from fs_cachex.config import CacheOptions
from fs_cachex.config import OptionsLayer
from fs_cachex.config import options_layer
from fs_cachex.config import resolve_options
from fs_cachex.hashing import get_hash
from fs_cachex.types import DEFAULT_MAX_AGE_MS
from fs_cachex.types import CacheKey
from fs_cachex.types import CacheMiss
from fs_cachex.types import CacheResult
from fs_cachex.types import EntryName
from fs_cachex.types import ETagContent
from fs_cachex.types import MissReason

from .base import BaseCacheBackend

logger = getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _key_directory(key: CacheKey, options: CacheOptions) -> Path:
    return Path(options.cache_directory) / get_hash(key, options.cache_algorithm)


def _describe(key: CacheKey) -> str:
    return ", ".join(str(item) for item in key)


def _serialize(content: Any) -> str:
    return json.dumps(content, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _write_entry(directory: Path, target: Path, text: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not delete cache entry %s: %s", path, e)


def _has_entries(directory: Path) -> bool:
    return any(EntryName.parse(name) is not None for name in os.listdir(directory))


def _clear_root(root: Path) -> None:
    try:
        children = list(root.iterdir())
    except OSError as e:
        logger.debug("Nothing to clear in %s: %s", root, e)
        return

    for child in children:
        try:
            if child.is_dir() and _has_entries(child):
                shutil.rmtree(child)
        except OSError as e:
            logger.debug("Could not clear %s: %s", child, e)


class FileSystemBackend(BaseCacheBackend):
    """Filesystem cache backend implementation.

    Args:
        options: Instance-level options, layered over the defaults
        **overrides: Individual options, layered over ``options``
    """

    def __init__(self, options: OptionsLayer = None, **overrides: Any) -> None:
        self._instance_options = {**options_layer(options), **options_layer(overrides)}

    @property
    def options(self) -> CacheOptions:
        """The instance options merged over the defaults."""
        return resolve_options(self._instance_options)

    def _resolve(self, options: OptionsLayer) -> CacheOptions:
        return resolve_options(self._instance_options, options)

    def key_directory(self, key: CacheKey, options: OptionsLayer = None) -> Path:
        """Return the directory holding the entries of a key."""
        return _key_directory(key, self._resolve(options))

    async def write(
        self,
        key: CacheKey,
        content: Any,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
        options: OptionsLayer = None,
    ) -> CacheResult:
        resolved = self._resolve(options)
        if not resolved.enabled:
            return CacheMiss(MissReason.DISABLED)

        directory = _key_directory(key, resolved)
        max_age_ms = int(max_age_ms)
        target: Path | None = None

        try:
            text = _serialize(content)
            etag = get_hash([text], resolved.cache_algorithm)
            entry = EntryName(max_age_ms, _now_ms() + max_age_ms, etag)
            target = directory / entry.format()
            await asyncio.to_thread(_write_entry, directory, target, text)
        except (OSError, TypeError, ValueError, RecursionError):
            logger.exception("Failed to write [%s] to filesystem", _describe(key))
            if target is not None:
                await asyncio.to_thread(_discard, target)
            return CacheMiss(MissReason.WRITE_FAILED)

        logger.debug("Cached [%s] as %s", _describe(key), target)
        return ETagContent(etag=etag, data=content)

    async def read(self, key: CacheKey, options: OptionsLayer = None) -> CacheResult:
        resolved = self._resolve(options)
        if not resolved.enabled:
            return CacheMiss(MissReason.DISABLED)

        directory = _key_directory(key, resolved)
        now_ms = _now_ms()

        try:
            filenames = await asyncio.to_thread(os.listdir, directory)
        except OSError:
            return CacheMiss(MissReason.NOT_FOUND)

        # Listing order is whatever the filesystem returns; the first live entry wins
        for filename in filenames:
            entry = EntryName.parse(filename)
            if entry is None:
                logger.debug("Skipping unrecognized file %s in %s", filename, directory)
                continue

            path = directory / filename
            if entry.is_expired(now_ms):
                await asyncio.to_thread(_discard, path)
                continue

            try:
                text = await asyncio.to_thread(path.read_text, encoding="utf-8")
                data = json.loads(text)
            except (OSError, ValueError, RecursionError) as e:
                logger.debug("Could not read cache entry %s: %s", path, e)
                return CacheMiss(MissReason.NOT_FOUND)

            return ETagContent(etag=entry.etag, data=data)

        return CacheMiss(MissReason.NOT_FOUND)

    async def remove(self, key: CacheKey, options: OptionsLayer = None) -> None:
        resolved = self._resolve(options)
        if not resolved.enabled:
            return

        directory = _key_directory(key, resolved)
        try:
            await asyncio.to_thread(shutil.rmtree, directory)
        except OSError as e:
            logger.debug("Could not remove %s: %s", directory, e)

    async def clear(self, options: OptionsLayer = None) -> None:
        resolved = self._resolve(options)
        if not resolved.enabled:
            return

        await asyncio.to_thread(_clear_root, Path(resolved.cache_directory))
