"""
ORM-Level Write-Path Enforcement for the employee ledger.

===============================================================================
WHY THIS EXISTS
===============================================================================

Every salary or department change must leave an AuditEntry, and audit and
payroll rows must never change once written.  The LedgerStore is the only
component that writes salaries; this module makes that a structural
property instead of a convention:

    session.flush()
         |
         v
    [before_flush] --> _check_unaudited_employee_changes() --> UnauditedMutationError
         |
         v
    [before_update / before_delete on append-only models] --> ImmutabilityViolationError
         |
         v
    SQL sent to database (only if checks pass)

===============================================================================
PROTECTED ENTITIES
===============================================================================

Entity          | Rule
----------------|--------------------------------------------------------
Employee        | salary / department_id change only if registered with
                | the ledger store for audit; never physically deleted
AuditEntry      | ALWAYS immutable (from creation)
PayrollRecord   | ALWAYS immutable (from creation)

===============================================================================
HOW THE LEDGER STORE REGISTERS A CHANGE
===============================================================================

``LedgerStore.apply_update`` / ``apply_transfer`` put the employee id into
``session.info[PENDING_AUDIT_KEY]`` before touching the attribute.  At
commit the store hands every pending change to the AuditRecorder and
clears the registry.  A write that did not go through the store is not in
the registry and is rejected at flush time.  A raw ``session.commit()``
while the registry is non-empty is rejected (the changes were never
recorded), and any rollback discards the registry.  A savepoint release is
not a commit: the registry survives it for the enclosing commit.

``session.info[OPEN_TRANSACTION_KEY]`` marks a transaction the caller
opened through ``LedgerStore.begin_transaction``; it is dropped when the
outermost transaction ends, however it ends.

Inline model imports avoid circular imports (models import db.base).

To temporarily disable (TESTS ONLY - never in production):

    from hr_kernel.db.immutability import unregister_immutability_listeners
    unregister_immutability_listeners()
"""

from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from hr_kernel.exceptions import ImmutabilityViolationError, UnauditedMutationError
from hr_kernel.logging_config import get_logger

logger = get_logger("db.immutability")

PENDING_AUDIT_KEY = "hr_pending_audit"
OPEN_TRANSACTION_KEY = "hr_ledger_open"

AUDITED_EMPLOYEE_FIELDS = ("salary", "department_id")


def _check_unaudited_employee_changes(session, flush_context, instances):
    """
    Reject salary / department changes that bypass the ledger store.
    """
    from hr_kernel.models.employee import Employee

    pending = session.info.get(PENDING_AUDIT_KEY, {})

    for obj in session.dirty:
        if not isinstance(obj, Employee):
            continue
        state = inspect(obj)
        changed = tuple(
            name for name in AUDITED_EMPLOYEE_FIELDS
            if state.attrs[name].history.has_changes()
        )
        if changed and obj.id not in pending:
            logger.error(
                "unaudited_mutation_blocked",
                extra={"employee_id": obj.id, "fields": changed},
            )
            raise UnauditedMutationError(employee_id=obj.id, fields=changed)


def _reject_unrecorded_commit(session):
    """
    Reject a commit that still has registered but unrecorded changes.

    ``LedgerStore.commit`` hands every pending change to the recorder and
    empties the registry before committing; a raw ``session.commit()`` does
    not.
    """
    if session.in_nested_transaction():
        return
    pending = session.info.get(PENDING_AUDIT_KEY)
    if pending:
        employee_id = next(iter(pending))
        logger.error(
            "unrecorded_commit_blocked",
            extra={"employee_ids": sorted(pending)},
        )
        raise UnauditedMutationError(employee_id=employee_id, fields=AUDITED_EMPLOYEE_FIELDS)


def _discard_pending_changes(session, previous_transaction=None):
    """Registered changes die with the transaction that made them."""
    session.info.pop(PENDING_AUDIT_KEY, None)


def _close_ledger_transaction(session, transaction):
    if transaction.parent is None:
        session.info.pop(OPEN_TRANSACTION_KEY, None)


def _reject_employee_delete(mapper, connection, target):
    """Employees are deactivated, never deleted."""
    logger.error(
        "immutability_violation_blocked",
        extra={"entity_type": "Employee", "entity_id": target.id, "operation": "DELETE"},
    )
    raise ImmutabilityViolationError(
        entity_type="Employee",
        entity_id=str(target.id),
        reason="Employees cannot be deleted; deactivate instead",
    )


def _reject_update(mapper, connection, target):
    """Append-only rows cannot be modified."""
    entity_type = type(target).__name__
    logger.error(
        "immutability_violation_blocked",
        extra={"entity_type": entity_type, "entity_id": target.id, "operation": "UPDATE"},
    )
    raise ImmutabilityViolationError(
        entity_type=entity_type,
        entity_id=str(target.id),
        reason=f"{entity_type} records are immutable and cannot be modified",
    )


def _reject_delete(mapper, connection, target):
    """Append-only rows cannot be deleted."""
    entity_type = type(target).__name__
    logger.error(
        "immutability_violation_blocked",
        extra={"entity_type": entity_type, "entity_id": target.id, "operation": "DELETE"},
    )
    raise ImmutabilityViolationError(
        entity_type=entity_type,
        entity_id=str(target.id),
        reason=f"{entity_type} records are append-only and cannot be deleted",
    )


def _listeners():
    from hr_kernel.models.audit_entry import AuditEntry
    from hr_kernel.models.employee import Employee
    from hr_kernel.models.payroll import PayrollRecord

    return (
        (Session, "before_flush", _check_unaudited_employee_changes),
        (Session, "before_commit", _reject_unrecorded_commit),
        (Session, "after_soft_rollback", _discard_pending_changes),
        (Session, "after_transaction_end", _close_ledger_transaction),
        (Employee, "before_delete", _reject_employee_delete),
        (AuditEntry, "before_update", _reject_update),
        (AuditEntry, "before_delete", _reject_delete),
        (PayrollRecord, "before_update", _reject_update),
        (PayrollRecord, "before_delete", _reject_delete),
    )


def register_immutability_listeners():
    """
    Register all write-path enforcement listeners (idempotent).

    Called by ``init_engine_from_url``; safe to call again.
    """
    for target, event_name, listener_fn in _listeners():
        if not event.contains(target, event_name, listener_fn):
            event.listen(target, event_name, listener_fn)


def unregister_immutability_listeners():
    """
    Remove the enforcement listeners.

    WARNING: Only use this in tests that need to bypass the guards.
    """
    for target, event_name, listener_fn in _listeners():
        if event.contains(target, event_name, listener_fn):
            event.remove(target, event_name, listener_fn)
