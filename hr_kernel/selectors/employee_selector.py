"""
Module: hr_kernel.selectors.employee_selector
Responsibility: Read-only employee and department aggregates: the active
    employee directory, per-department active salary statistics and active
    project counts.
Architecture position: Kernel > Selectors.

Only active employees count toward any aggregate.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select

from hr_kernel.models.department import Department
from hr_kernel.models.employee import Employee
from hr_kernel.models.project import Project, ProjectStatus
from hr_kernel.selectors.base import BaseSelector, as_money


@dataclass(frozen=True)
class DirectoryEntry:
    """One row of the active employee directory."""

    employee_id: int
    full_name: str
    email: str
    department_name: str
    hire_date: date
    salary: Decimal


@dataclass(frozen=True)
class SalaryStats:
    """Active salary statistics for one department."""

    department_id: int
    headcount: int
    total_salary: Decimal

    @property
    def average_salary(self) -> Decimal | None:
        if self.headcount == 0:
            return None
        return as_money(self.total_salary / self.headcount)


class EmployeeSelector(BaseSelector):
    """Read-only employee queries."""

    def active_directory(self) -> list[DirectoryEntry]:
        """Active employees assigned to a department, ordered by id."""
        stmt = (
            select(Employee, Department.name)
            .join(Department, Employee.department_id == Department.id)
            .where(Employee.is_active.is_(True))
            .order_by(Employee.id)
        )
        return [
            DirectoryEntry(
                employee_id=emp.id,
                full_name=emp.full_name,
                email=emp.email,
                department_name=department_name,
                hire_date=emp.hire_date,
                salary=emp.salary,
            )
            for emp, department_name in self.session.execute(stmt)
        ]

    def active_salary_stats(self, department_id: int) -> SalaryStats:
        """Headcount and salary total of a department's active employees."""
        headcount, total = self.session.execute(
            select(func.count(Employee.id), func.sum(Employee.salary)).where(
                Employee.department_id == department_id,
                Employee.is_active.is_(True),
            )
        ).one()
        return SalaryStats(
            department_id=department_id,
            headcount=headcount or 0,
            total_salary=as_money(total),
        )

    def active_project_count(self, department_id: int | None = None) -> int:
        """Active projects, in one department or (``None``) across all."""
        stmt = select(func.count(Project.id)).where(
            Project.status == ProjectStatus.ACTIVE.value
        )
        if department_id is not None:
            stmt = stmt.where(Project.department_id == department_id)
        return self.session.execute(stmt).scalar_one()
