"""
Module: hr_kernel.selectors.audit_selector
Responsibility: Read access to the employee audit log.
Architecture position: Kernel > Selectors.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func, select

from hr_kernel.models.audit_entry import AuditEntry, AuditOperation
from hr_kernel.selectors.base import BaseSelector
from hr_kernel.models.employee import Employee


@dataclass(frozen=True)
class AuditEntryInfo:
    id: int
    record_id: int
    operation: AuditOperation
    old_value: dict[str, Any] | None
    new_value: dict[str, Any] | None
    modified_by: str
    modified_at: datetime


class AuditSelector(BaseSelector):
    """Read-only audit queries."""

    def entries_for_employee(self, employee_id: int) -> list[AuditEntryInfo]:
        """Audit history of one employee, oldest first."""
        stmt = (
            select(AuditEntry)
            .where(
                AuditEntry.table_name == Employee.__tablename__,
                AuditEntry.record_id == employee_id,
            )
            .order_by(AuditEntry.id)
        )
        return [
            AuditEntryInfo(
                id=e.id,
                record_id=e.record_id,
                operation=AuditOperation(e.operation),
                old_value=e.old_value,
                new_value=e.new_value,
                modified_by=e.modified_by,
                modified_at=e.modified_at,
            )
            for e in self.session.execute(stmt).scalars()
        ]

    def count(self) -> int:
        return self.session.execute(select(func.count(AuditEntry.id))).scalar_one()
