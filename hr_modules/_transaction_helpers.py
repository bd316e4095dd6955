"""
Shared helpers for module service flows.

Used by hr_modules/*/service.py to run a unit of work inside a ledger
transaction (or read-only snapshot) and turn kernel errors into
``OperationResult`` failures.

Architecture: Modules layer. Imports only from hr_kernel (domain, services).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar
from uuid import uuid4

from hr_kernel.domain.capabilities import Capability, CapabilityCheck
from hr_kernel.domain.results import OperationResult
from hr_kernel.exceptions import AccessDeniedError, ErrorKind, HRKernelError
from hr_kernel.logging_config import LogContext, get_logger
from hr_kernel.services.ledger_store import LedgerStore

logger = get_logger("modules.transactions")

T = TypeVar("T")


def access_denied_result(
    check: CapabilityCheck,
    actor_id: str,
    capability: Capability,
    operation: str,
) -> OperationResult | None:
    """Return an ACCESS_DENIED result if ``check`` refuses, else None.

    Returns None when the actor holds the capability (caller should
    proceed).  The ledger is not touched either way.
    """
    if check(actor_id, capability):
        return None
    exc = AccessDeniedError(actor_id=actor_id, capability=capability.value)
    logger.warning(
        "access_denied",
        extra={"actor_id": actor_id, "capability": capability.value, "operation": operation},
    )
    return OperationResult.failed(exc)


def _operation_context(operation, actor_id, employee_id, department_id):
    return LogContext.bind(
        correlation_id=str(uuid4()),
        actor_id=actor_id,
        operation=operation,
        employee_id=employee_id,
        department_id=department_id,
    )


def _failed(exc: HRKernelError, operation: str) -> OperationResult:
    if exc.kind == ErrorKind.INTEGRITY:
        raise exc
    logger.warning(
        "operation_failed",
        extra={"error_code": exc.code, "error_kind": exc.kind.value, "details": exc.details},
    )
    return OperationResult.failed(exc)


def run_atomic(
    store: LedgerStore,
    operation: str,
    actor_id: str,
    work: Callable[[], T],
    *,
    employee_id: int | None = None,
    department_id: int | None = None,
) -> OperationResult[T]:
    """Run ``work`` inside one ledger transaction.

    Commits on success.  On an HRKernelError the transaction is rolled
    back and a failed result is returned; integrity errors and any other
    exception are rolled back and re-raised.  Inside a transaction the
    caller already opened, ``work`` runs in a savepoint and the caller
    still owns the commit.

    ``employee_id`` and ``department_id`` name the record the operation is
    scoped to; they are bound into every log line it emits.
    """
    with _operation_context(operation, actor_id, employee_id, department_id):
        logger.info("operation_started")
        try:
            with store.transaction(actor_id=actor_id):
                value = work()
        except HRKernelError as exc:
            return _failed(exc, operation)
        logger.info("operation_committed")
        return OperationResult.succeeded(value)


def run_read(
    store: LedgerStore,
    operation: str,
    actor_id: str,
    work: Callable[[], T],
    *,
    employee_id: int | None = None,
    department_id: int | None = None,
) -> OperationResult[T]:
    """Run ``work`` inside a read-only snapshot (joins an open transaction)."""
    with _operation_context(operation, actor_id, employee_id, department_id):
        try:
            with store.snapshot():
                value = work()
        except HRKernelError as exc:
            return _failed(exc, operation)
        logger.debug("read_completed")
        return OperationResult.succeeded(value)
