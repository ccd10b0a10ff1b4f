import inspect
import json
from collections.abc import Callable
from functools import wraps
from typing import Any
from typing import Optional

from fs_cachex.backends import BaseCacheBackend
from fs_cachex.backends import FileSystemBackend
from fs_cachex.config import OptionsLayer
from fs_cachex.types import DEFAULT_MAX_AGE_MS
from fs_cachex.types import CacheKey


def create_cache_instance(options: OptionsLayer = None, **overrides: Any) -> FileSystemBackend:
    """Create a filesystem cache with its own instance-level options.

    Args:
        options: Options layered over the defaults for this instance only
        **overrides: Individual options layered over ``options``

    Returns:
        A backend exposing ``write``, ``read``, ``remove`` and ``clear``
    """
    return FileSystemBackend(options, **overrides)


async def get_response(func: Callable, *args: Any, **kwargs: Any) -> Any:
    """Get the result of the function."""
    if inspect.iscoroutinefunction(func):
        return await func(*args, **kwargs)
    else:
        return func(*args, **kwargs)


def default_key(func: Callable, args: tuple, kwargs: dict[str, Any]) -> list[str]:
    """Build a cache key from a function's qualified name and its arguments."""
    arguments = json.dumps([list(args), kwargs], sort_keys=True, default=str)
    return [f"{func.__module__}:{func.__qualname__}", "|", arguments]


def cache(
    max_age_ms: int = DEFAULT_MAX_AGE_MS,
    *,
    key: Optional[Callable[..., CacheKey]] = None,
    instance: Optional[BaseCacheBackend] = None,
    options: OptionsLayer = None,
) -> Callable:
    """Cache the JSON-serializable results of a function on disk.

    The wrapped function is always a coroutine function. A failed cache
    write is logged by the backend and the fresh result is still returned.

    Args:
        max_age_ms: How long a result stays fresh
        key: Builds the cache key from the call arguments
        instance: Backend to use, a new filesystem cache by default
        options: Call-level options for every read and write
    """

    def decorator(func: Callable) -> Callable:
        backend = instance if instance is not None else create_cache_instance()

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            cache_key = key(*args, **kwargs) if key else default_key(func, args, kwargs)

            cached = await backend.read(cache_key, options)
            if cached:
                return cached.data

            result = await get_response(func, *args, **kwargs)
            await backend.write(cache_key, result, max_age_ms, options)
            return result

        return wrapper

    return decorator
