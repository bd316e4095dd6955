"""
Module: hr_kernel.models.department
Responsibility: ORM persistence for departments -- the budget-holding unit
    that owns employees and projects.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - budget >= 0 (CHECK constraint; the ledger store validates first).
    - name is indexed for lookups by name.

Mutated only by administrative operations (StaffingService); the rule
engine reads departments but never writes them.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase


class Department(TrackedBase):
    """A department with a salary budget."""

    __tablename__ = "departments"

    __table_args__ = (
        Index("idx_department_name", "name"),
        CheckConstraint("budget >= 0", name="ck_department_budget_non_negative"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    budget: Mapped[Decimal] = mapped_column(nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)

    employees = relationship("Employee", back_populates="department")
    projects = relationship("Project", back_populates="department")

    def __repr__(self) -> str:
        return f"<Department {self.id}: {self.name}>"
