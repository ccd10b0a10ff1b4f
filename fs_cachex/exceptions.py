class FSCacheXError(Exception):
    """Base class for all exceptions in fs-cachex."""


class UnsupportedAlgorithmError(FSCacheXError, ValueError):
    """Exception raised when the configured hash algorithm is not available."""


class InvalidKeyError(FSCacheXError, TypeError):
    """Exception raised for cache key components of an unsupported type."""


class InvalidOptionError(FSCacheXError, TypeError):
    """Exception raised for unknown option names."""
