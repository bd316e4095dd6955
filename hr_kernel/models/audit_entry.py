"""
Module: hr_kernel.models.audit_entry
Responsibility: ORM persistence for the employee audit log.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Append-only; no UPDATE or DELETE (ORM listener, see db/immutability.py).
    - One entry per committed salary/department change per employee row,
      written by AuditRecorder when the ledger store commits.

Audit relevance:
    AuditEntry IS the salary history.  old_value / new_value carry the
    employee's salary and department before and after the change.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from hr_kernel.db.base import Base


class AuditOperation(str, Enum):
    """Kind of row change captured."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditEntry(Base):
    """Immutable before/after record of an employee change."""

    __tablename__ = "audit_log"

    __table_args__ = (
        Index("idx_audit_record", "table_name", "record_id"),
        Index("idx_audit_modified_at", "modified_at"),
    )

    table_name: Mapped[str] = mapped_column(String(128), nullable=False)
    record_id: Mapped[int] = mapped_column(nullable=False)
    operation: Mapped[str] = mapped_column(String(10), nullable=False)
    old_value: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    new_value: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    modified_by: Mapped[str] = mapped_column(String(128), nullable=False)
    modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<AuditEntry {self.operation} on {self.table_name}:{self.record_id}>"
