"""
Module: hr_kernel.models.employee
Responsibility: ORM persistence for employees.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - salary > 0 (CHECK constraint; the ledger store raises
      NonPositiveSalaryError before the database would).
    - email is unique.
    - salary and department_id change only through the LedgerStore, which
      registers the change for audit (see db/immutability.py).
    - Rows are never deleted; is_active=False is the logical delete.

Inactive employees stay in the table for audit history but are excluded
from every aggregate rule computation.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import TrackedBase


class Employee(TrackedBase):
    """An employee on the ledger."""

    __tablename__ = "employees"

    __table_args__ = (
        Index("idx_employee_name_department", "last_name", "first_name", "department_id"),
        Index(
            "idx_employee_active",
            "id",
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
        CheckConstraint("salary > 0", name="ck_employee_salary_positive"),
    )

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    salary: Mapped[Decimal] = mapped_column(nullable=False)
    department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id"),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    department = relationship("Department", back_populates="employees")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Employee {self.id}: {self.full_name} ({self.salary})>"
