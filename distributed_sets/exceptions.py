"""
Custom exceptions used by the distributed sets package.

Keeping library-specific errors in one module gives users a predictable
import surface for catching and handling operational edge cases.
"""


class DistributedSetsError(Exception):
    """Base error type for all library-level exceptions."""


class SetParseError(DistributedSetsError, ValueError):
    """
    Raised when textual set input cannot be parsed.

    Only an empty input string is rejected. Empty or duplicate tokens inside
    a non-empty input are accepted and inserted as-is.
    """


class StoreOperationError(DistributedSetsError):
    """
    Raised when a failed store operation result is unwrapped.

    The store exception is always chained as ``__cause__`` so the network or
    protocol failure stays inspectable.
    """


class BackendConfigurationError(DistributedSetsError, ValueError):
    """
    Raised when a backend name or backend options are invalid.
    """
