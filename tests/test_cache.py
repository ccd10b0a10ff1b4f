"""Tests for the cache factory and the caching decorator."""

from pathlib import Path

import pytest

from fs_cachex import create_cache_instance
from fs_cachex.backends import FileSystemBackend
from fs_cachex.cache import cache
from fs_cachex.cache import default_key
from fs_cachex.types import CacheMiss
from fs_cachex.types import MissReason


def test_create_cache_instance_options(tmp_path: Path) -> None:
    instance = create_cache_instance({"cache_directory": tmp_path}, cache_algorithm="md5")

    assert isinstance(instance, FileSystemBackend)
    assert instance.options.cache_directory == tmp_path
    assert instance.options.cache_algorithm == "md5"
    assert instance.options.enabled is True


def test_instances_are_independent(tmp_path: Path) -> None:
    first = create_cache_instance(cache_directory=tmp_path / "first", enabled=False)
    second = create_cache_instance(cache_directory=tmp_path / "second")

    assert first.options.enabled is False
    assert second.options.enabled is True
    assert first.options.cache_directory != second.options.cache_directory


@pytest.mark.asyncio
async def test_instance_operations(tmp_path: Path) -> None:
    instance = create_cache_instance(cache_directory=tmp_path)

    written = await instance.write(["k", 1, b"raw"], {"v": True}, 1000)
    retrieved = await instance.read(["k", 1, b"raw"])
    await instance.remove(["k", 1, b"raw"])

    assert written
    assert retrieved == written
    assert await instance.read(["k", 1, b"raw"]) == CacheMiss(MissReason.NOT_FOUND)


@pytest.mark.asyncio
async def test_cache_decorator_async(tmp_path: Path) -> None:
    """Test that a cached coroutine only runs once per argument set."""
    call_count = {"value": 0}

    @cache(max_age_ms=60000, options={"cache_directory": tmp_path})
    async def load(page: int) -> dict:
        call_count["value"] += 1
        return {"page": page, "count": call_count["value"]}

    assert await load(1) == {"page": 1, "count": 1}
    assert await load(1) == {"page": 1, "count": 1}
    assert await load(2) == {"page": 2, "count": 2}
    assert call_count["value"] == 2


@pytest.mark.asyncio
async def test_cache_decorator_sync_function(tmp_path: Path) -> None:
    calls = []

    @cache(instance=create_cache_instance(cache_directory=tmp_path))
    def render(name: str) -> str:
        calls.append(name)
        return f"# {name}"

    assert await render("intro") == "# intro"
    assert await render(name="intro") == "# intro"
    assert await render("intro") == "# intro"
    assert calls == ["intro", "intro"]


@pytest.mark.asyncio
async def test_cache_decorator_custom_key(tmp_path: Path) -> None:
    instance = create_cache_instance(cache_directory=tmp_path)

    @cache(key=lambda user_id, verbose=False: ["user", user_id], instance=instance)
    async def fetch_user(user_id: int, verbose: bool = False) -> dict:
        return {"id": user_id, "verbose": verbose}

    assert await fetch_user(7) == {"id": 7, "verbose": False}
    assert await fetch_user(7, verbose=True) == {"id": 7, "verbose": False}

    cached = await instance.read(["user", 7])
    assert cached
    assert cached.data == {"id": 7, "verbose": False}


@pytest.mark.asyncio
async def test_cache_decorator_unserializable_result(tmp_path: Path) -> None:
    calls = []

    @cache(options={"cache_directory": tmp_path})
    async def build() -> set:
        calls.append(1)
        return {1, 2}

    assert await build() == {1, 2}
    assert await build() == {1, 2}
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_cache_decorator_disabled(tmp_path: Path) -> None:
    calls = []

    @cache(options={"cache_directory": tmp_path, "enabled": False})
    async def compute() -> int:
        calls.append(1)
        return 42

    assert await compute() == 42
    assert await compute() == 42
    assert len(calls) == 2
    assert list(tmp_path.iterdir()) == []


def test_default_key_includes_function_and_arguments() -> None:
    def func(a, b=None):
        return a

    first = default_key(func, (1,), {"b": "x"})
    second = default_key(func, (1,), {"b": "y"})

    assert first[0].endswith("test_default_key_includes_function_and_arguments.<locals>.func")
    assert first != second
