"""
OperationResult -- the return type of every exposed HR operation.

Responsibility:
    Carries either the value of a successful operation or the structured
    failure (status, machine-readable code, message, details) of a failed
    one.  Callers branch on ``status`` / ``is_success`` instead of catching
    exceptions.

Architecture position:
    Kernel > Domain -- pure data definitions, zero I/O.

Integrity errors (``ErrorKind.INTEGRITY``) are never folded into a result;
they signal a write path that bypassed the ledger store and propagate.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from hr_kernel.exceptions import ErrorKind, HRKernelError

T = TypeVar("T")


class OperationStatus(str, Enum):
    """Outcome of an exposed operation."""

    SUCCEEDED = "succeeded"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    CONSTRAINT_VIOLATION = "constraint_violation"
    TRANSACTION_FAILED = "transaction_failed"
    ACCESS_DENIED = "access_denied"


_STATUS_BY_KIND: dict[ErrorKind, OperationStatus] = {
    ErrorKind.NOT_FOUND: OperationStatus.NOT_FOUND,
    ErrorKind.INVALID_STATE: OperationStatus.INVALID_STATE,
    ErrorKind.CONSTRAINT_VIOLATION: OperationStatus.CONSTRAINT_VIOLATION,
    ErrorKind.TRANSACTION_FAILURE: OperationStatus.TRANSACTION_FAILED,
    ErrorKind.ACCESS_DENIED: OperationStatus.ACCESS_DENIED,
}


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Result of an HR operation.

    ``value`` is set only on success.  ``error_code`` / ``message`` /
    ``details`` are set only on failure and come from the HRKernelError
    that caused it.
    """

    status: OperationStatus
    value: T | None = None
    error_code: str | None = None
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCEEDED

    @classmethod
    def succeeded(cls, value: T | None = None, message: str = "") -> "OperationResult[T]":
        return cls(status=OperationStatus.SUCCEEDED, value=value, message=message)

    @classmethod
    def failed(cls, exc: HRKernelError) -> "OperationResult[T]":
        """
        Convert a kernel error into a failed result.

        Raises:
            ValueError: ``exc`` is an integrity error, which has no
                result status.
        """
        status = _STATUS_BY_KIND.get(exc.kind)
        if status is None:
            raise ValueError(f"{exc.code} cannot be reported as an operation result")
        return cls(
            status=status,
            error_code=exc.code,
            message=str(exc),
            details=exc.details,
        )
