"""Snapshot builders shared by the engine and property tests."""

from datetime import date
from decimal import Decimal

from hr_kernel.domain.dtos import EmployeeSnapshot


def employee(
    id: int,
    salary: str | Decimal,
    department_id: int | None = 1,
    hire_date: date = date(2020, 1, 1),
    is_active: bool = True,
) -> EmployeeSnapshot:
    return EmployeeSnapshot(
        id=id,
        first_name="Emp",
        last_name=str(id),
        email=f"emp{id}@company.com",
        hire_date=hire_date,
        salary=Decimal(salary),
        department_id=department_id,
        is_active=is_active,
    )
