from pathlib import Path

import pytest

from fs_cachex.backends.filesystem import FileSystemBackend


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def fs_backend(cache_dir: Path) -> FileSystemBackend:
    return FileSystemBackend(cache_directory=cache_dir)
