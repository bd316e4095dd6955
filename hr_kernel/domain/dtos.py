"""
Data Transfer Objects for the employee ledger.

Responsibility:
    Frozen snapshots of ledger rows handed to engines and callers.  Engines
    never see ORM instances; the ledger store and selectors convert rows to
    these DTOs at the boundary.

Architecture position:
    Kernel > Domain -- pure data definitions, zero I/O.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class EmployeeSnapshot:
    """Point-in-time view of an employee row."""

    id: int
    first_name: str
    last_name: str
    email: str
    hire_date: date
    salary: Decimal
    department_id: int | None
    is_active: bool

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class DepartmentSnapshot:
    """Point-in-time view of a department row."""

    id: int
    name: str
    budget: Decimal
    location: str | None


@dataclass(frozen=True)
class ProjectSnapshot:
    """Point-in-time view of a project row."""

    id: int
    department_id: int | None
    name: str
    status: str


@dataclass(frozen=True)
class PayrollSnapshot:
    """Point-in-time view of a payroll record."""

    id: int
    employee_id: int
    pay_date: date
    base_salary: Decimal
    bonus: Decimal
    deductions: Decimal
    tax: Decimal

    @property
    def net_pay(self) -> Decimal:
        return self.base_salary + self.bonus - self.deductions - self.tax


@dataclass(frozen=True)
class EmployeeFilter:
    """
    Conjunctive selection over employees.

    ``None`` on any field means "no constraint".  ``salary_below`` and
    ``salary_above`` are strict comparisons.  ``min_tenure_years`` is
    evaluated at ``as_of`` (required when the tenure filter is set).
    """

    active_only: bool = True
    department_id: int | None = None
    salary_below: Decimal | None = None
    salary_above: Decimal | None = None
    min_tenure_years: int | None = None
    as_of: date | None = None

    def __post_init__(self):
        if self.min_tenure_years is not None and self.as_of is None:
            raise ValueError("as_of is required when min_tenure_years is set")
