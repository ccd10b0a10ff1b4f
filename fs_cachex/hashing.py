"""Deterministic hashing of cache keys into filesystem-safe names."""

import base64
import hashlib
import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from fs_cachex.exceptions import InvalidKeyError
from fs_cachex.exceptions import UnsupportedAlgorithmError
from fs_cachex.types import Key

DEFAULT_ALGORITHM = "sha256"


def _new_hasher(algorithm: str) -> Any:
    try:
        hasher = hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        msg = f"Unsupported hash algorithm: {algorithm!r}"
        raise UnsupportedAlgorithmError(msg) from e

    # shake_* digests need an explicit length
    if hasher.digest_size == 0:
        msg = f"Unsupported hash algorithm: {algorithm!r} has no fixed digest size"
        raise UnsupportedAlgorithmError(msg)

    return hasher


def _float_to_text(value: float) -> str:
    """Render a float the way JavaScript's ``String(number)`` does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest digits that round-trip, the same digits JavaScript picks
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    return f"{sign}{mantissa}e{n - 1:+d}"


def _to_bytes(item: Key) -> bytes:
    # bool is an int subclass but has no sensible key representation
    if isinstance(item, bool):
        msg = f"Cache key components cannot be bool, got {item!r}"
        raise InvalidKeyError(msg)
    if isinstance(item, int):
        return str(item).encode("utf-8")
    if isinstance(item, float):
        return _float_to_text(item).encode("utf-8")
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)

    msg = f"Unsupported cache key component type: {type(item).__name__}"
    raise InvalidKeyError(msg)


def get_hash(items: Iterable[Key], algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hash key components into a string usable as a single path segment.

    Components are fed to the hash in order with no delimiter between them.
    The digest is base64 encoded with ``/`` replaced by ``-``.
    Integers are hashed by their exact decimal text and floats by the text
    JavaScript's ``String(number)`` gives, so ``1.0`` hashes as ``"1"`` and
    ``1e21`` as ``"1e+21"``.

    Args:
        items: Ordered key components
        algorithm: Any fixed-size algorithm known to :mod:`hashlib`

    Returns:
        The encoded digest

    Raises:
        UnsupportedAlgorithmError: If ``algorithm`` is not available
        InvalidKeyError: If a component is not a str, number or bytes-like
    """
    hasher = _new_hasher(algorithm)
    for item in items:
        hasher.update(_to_bytes(item))

    # See https://en.wikipedia.org/wiki/Base64#Filenames
    return base64.b64encode(hasher.digest()).decode("ascii").replace("/", "-")
