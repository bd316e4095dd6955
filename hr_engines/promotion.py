"""
Module: hr_engines.promotion
Responsibility:
    Seniority band and raise eligibility of active, department-assigned
    employees.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

    years >= 5  -> Senior
    years >= 2  -> Mid-Level
    otherwise   -> Junior

    Senior and salary < 80,000 -> "Eligible for Raise", else "No Action Needed"
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from hr_engines.tracer import traced_engine
from hr_kernel.domain.dtos import EmployeeSnapshot
from hr_kernel.domain.tenure import TenureMethod, tenure_years


class Seniority(str, Enum):
    SENIOR = "Senior"
    MID_LEVEL = "Mid-Level"
    JUNIOR = "Junior"


class PromotionStatus(str, Enum):
    ELIGIBLE_FOR_RAISE = "Eligible for Raise"
    NO_ACTION_NEEDED = "No Action Needed"


@dataclass(frozen=True)
class PromotionPolicy:
    senior_years: int = 5
    mid_level_years: int = 2
    raise_salary_ceiling: Decimal = Decimal("80000")

    def __post_init__(self) -> None:
        if not 0 <= self.mid_level_years <= self.senior_years:
            raise ValueError("seniority thresholds must satisfy 0 <= mid_level <= senior")


@dataclass(frozen=True)
class PromotionRow:
    employee_id: int
    full_name: str
    department_id: int
    department_name: str | None
    salary: Decimal
    years_of_service: int
    seniority: Seniority
    status: PromotionStatus


class PromotionEvaluator:
    def __init__(
        self,
        policy: PromotionPolicy | None = None,
        tenure_method: TenureMethod = TenureMethod.ELAPSED,
    ):
        self.policy = policy or PromotionPolicy()
        self.tenure_method = tenure_method

    def seniority(self, years: int) -> Seniority:
        if years >= self.policy.senior_years:
            return Seniority.SENIOR
        if years >= self.policy.mid_level_years:
            return Seniority.MID_LEVEL
        return Seniority.JUNIOR

    def status(self, seniority: Seniority, salary: Decimal) -> PromotionStatus:
        if seniority == Seniority.SENIOR and salary < self.policy.raise_salary_ceiling:
            return PromotionStatus.ELIGIBLE_FOR_RAISE
        return PromotionStatus.NO_ACTION_NEEDED

    @traced_engine("promotion", "1.0", fingerprint_fields=("employees", "as_of"))
    def evaluate(
        self,
        employees: Sequence[EmployeeSnapshot],
        as_of: date,
        department_names: Mapping[int, str] | None = None,
    ) -> list[PromotionRow]:
        """Rows for active employees with a department, ordered by id."""
        names = department_names or {}
        rows = []
        for e in sorted(employees, key=lambda x: x.id):
            if not e.is_active or e.department_id is None:
                continue
            years = tenure_years(e.hire_date, as_of, self.tenure_method)
            band = self.seniority(years)
            rows.append(
                PromotionRow(
                    employee_id=e.id,
                    full_name=e.full_name,
                    department_id=e.department_id,
                    department_name=names.get(e.department_id),
                    salary=e.salary,
                    years_of_service=years,
                    seniority=band,
                    status=self.status(band, e.salary),
                )
            )
        return rows
