"""
AuditRecorder -- append-only capture of employee salary/department changes.

Responsibility:
    Turns one committed employee change into one ``AuditEntry`` row, or
    into nothing when the change is a no-op.

Architecture position:
    Kernel > Services -- called by ``LedgerStore.commit()`` once per
    affected employee row, inside the committing transaction.  A rolled
    back transaction therefore leaves no audit entries.

Suppression rule:
    An entry is written iff

        coalesce(old_salary, 0) != coalesce(new_salary, 0)
        OR coalesce(old_department_id, 0) != coalesce(new_department_id, 0)

    so an update that writes the same salary back produces no entry.
    Treating NULL as 0 means a move from "no department" to a department
    with id 0 is invisible; department ids start at 1, so this never
    happens in practice.

Operation kind:
    INSERT  no prior row (``old_salary is None``)
    DELETE  no new row (``new_salary is None``)
    UPDATE  otherwise
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from hr_kernel.db.types import ZERO
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.logging_config import get_logger
from hr_kernel.models.audit_entry import AuditEntry, AuditOperation
from hr_kernel.models.employee import Employee
from hr_kernel.services.base import BaseService

logger = get_logger("services.audit_recorder")

EMPLOYEE_TABLE = Employee.__tablename__


def _row_value(salary: Decimal | None, department_id: int | None) -> dict[str, Any] | None:
    if salary is None:
        return None
    return {"salary": str(salary), "department_id": department_id}


class AuditRecorder(BaseService):
    """
    Writes AuditEntry rows for employee changes.

    Non-goals:
        - Does NOT commit; the ledger store's commit carries the entries.
        - Does NOT decide which changes happened; the store tracks them.
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()

    def record_change(
        self,
        employee_id: int,
        old_salary: Decimal | None,
        old_department_id: int | None,
        new_salary: Decimal | None,
        new_department_id: int | None,
        actor_id: str,
    ) -> AuditEntry | None:
        """
        Record one employee change.

        Returns:
            The flushed AuditEntry, or None when the change was suppressed.
        """
        salary_changed = (old_salary if old_salary is not None else ZERO) != (
            new_salary if new_salary is not None else ZERO
        )
        department_changed = (old_department_id or 0) != (new_department_id or 0)

        if not (salary_changed or department_changed):
            logger.debug(
                "audit_entry_suppressed",
                extra={"employee_id": employee_id, "reason": "no_change"},
            )
            return None

        if old_salary is None:
            operation = AuditOperation.INSERT
        elif new_salary is None:
            operation = AuditOperation.DELETE
        else:
            operation = AuditOperation.UPDATE

        modified_at: datetime = self._clock.now_utc()
        entry = AuditEntry(
            table_name=EMPLOYEE_TABLE,
            record_id=employee_id,
            operation=operation.value,
            old_value=_row_value(old_salary, old_department_id),
            new_value=_row_value(new_salary, new_department_id),
            modified_by=actor_id,
            modified_at=modified_at,
        )
        self.session.add(entry)
        self.session.flush()

        logger.info(
            "audit_entry_recorded",
            extra={
                "audit_entry_id": entry.id,
                "employee_id": employee_id,
                "audit_operation": operation.value,
                "salary_changed": salary_changed,
                "department_changed": department_changed,
                "modified_by": actor_id,
            },
        )
        return entry
