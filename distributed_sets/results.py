"""
Explicit success-or-error results for checked set operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import StoreOperationError


@dataclass(frozen=True, slots=True)
class OperationResult:
    """
    Outcome of one store operation issued by a set handle.

    Parameters
    ----------
    operation:
        Short operation name such as ``"insert"`` or ``"members"``.
    key:
        Logical set key the operation targeted.
    value:
        Operation return value on success, or the fail-closed default on
        failure.
    error:
        Captured store exception, or ``None`` on success.
    """

    operation: str
    key: str
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the operation succeeded."""
        return self.error is None

    def unwrap(self) -> Any:
        """
        Return ``value`` or raise when the operation failed.

        Raises
        ------
        StoreOperationError
            Chained from the captured store exception.
        """
        if self.error is not None:
            raise StoreOperationError(
                f"Set operation {self.operation!r} failed for key {self.key!r}: {self.error}"
            ) from self.error
        return self.value
