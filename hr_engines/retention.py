"""
Module: hr_engines.retention
Responsibility:
    Retention risk tier of every active, department-assigned employee from
    their salary standing among department peers and their tenure.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Recomputed on demand;
    nothing is stored.

Inputs per employee:
    salary percentile   PERCENT_RANK among active peers in the department
    tenure months       whole months of service at the evaluation date
    transition window   tenure in [12, 24] or [36, 48] months

Tiers (first match wins):
    percentile < 0.3 and in window  -> "High Risk"
    percentile < 0.5 and in window  -> "Medium Risk"
    percentile < 0.3                -> "Potential Risk"
    otherwise                       -> "Low Risk"
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from hr_engines.statistics import percent_rank
from hr_engines.tracer import traced_engine
from hr_kernel.db.types import round_money
from hr_kernel.domain.dtos import EmployeeSnapshot
from hr_kernel.domain.tenure import TenureMethod, tenure_months
from hr_kernel.logging_config import get_logger

logger = get_logger("engines.retention")


class RiskTier(str, Enum):
    HIGH = "High Risk"
    MEDIUM = "Medium Risk"
    POTENTIAL = "Potential Risk"
    LOW = "Low Risk"


@dataclass(frozen=True)
class RetentionPolicy:
    high_risk_percentile: Decimal = Decimal("0.3")
    medium_risk_percentile: Decimal = Decimal("0.5")
    transition_windows: tuple[tuple[int, int], ...] = ((12, 24), (36, 48))

    def __post_init__(self) -> None:
        if self.high_risk_percentile > self.medium_risk_percentile:
            raise ValueError("high_risk_percentile must not exceed medium_risk_percentile")
        for low, high in self.transition_windows:
            if low > high:
                raise ValueError(f"Invalid transition window ({low}, {high})")


@dataclass(frozen=True)
class RetentionRiskRow:
    employee_id: int
    full_name: str
    department_id: int
    department_name: str | None
    hire_date: date
    salary: Decimal
    department_average_salary: Decimal
    salary_percentile: Decimal
    tenure_months: int
    in_transition_window: bool
    risk_tier: RiskTier


class RetentionRiskAnalyzer:
    """Pure retention risk classification."""

    def __init__(
        self,
        policy: RetentionPolicy | None = None,
        tenure_method: TenureMethod = TenureMethod.ELAPSED,
    ):
        self.policy = policy or RetentionPolicy()
        self.tenure_method = tenure_method

    def in_transition_window(self, months: int) -> bool:
        return any(low <= months <= high for low, high in self.policy.transition_windows)

    def classify(self, salary_percentile: Decimal, months: int) -> RiskTier:
        window = self.in_transition_window(months)
        if salary_percentile < self.policy.high_risk_percentile and window:
            return RiskTier.HIGH
        if salary_percentile < self.policy.medium_risk_percentile and window:
            return RiskTier.MEDIUM
        if salary_percentile < self.policy.high_risk_percentile:
            return RiskTier.POTENTIAL
        return RiskTier.LOW

    @traced_engine("retention", "1.0", fingerprint_fields=("employees", "as_of"))
    def assess(
        self,
        employees: Sequence[EmployeeSnapshot],
        as_of: date,
        department_names: Mapping[int, str] | None = None,
    ) -> list[RetentionRiskRow]:
        """
        Risk rows for active employees with a department, ordered by id.

        Inactive and unassigned employees neither appear nor count as peers.
        """
        names = department_names or {}
        by_department: dict[int, list[EmployeeSnapshot]] = {}
        for e in employees:
            if e.is_active and e.department_id is not None:
                by_department.setdefault(e.department_id, []).append(e)

        rows: list[RetentionRiskRow] = []
        for department_id, peers in by_department.items():
            ranks = percent_rank([p.salary for p in peers])
            average = round_money(sum((p.salary for p in peers), Decimal("0")) / len(peers))
            for peer, rank in zip(peers, ranks):
                months = tenure_months(peer.hire_date, as_of, self.tenure_method)
                rows.append(
                    RetentionRiskRow(
                        employee_id=peer.id,
                        full_name=peer.full_name,
                        department_id=department_id,
                        department_name=names.get(department_id),
                        hire_date=peer.hire_date,
                        salary=peer.salary,
                        department_average_salary=average,
                        salary_percentile=rank,
                        tenure_months=months,
                        in_transition_window=self.in_transition_window(months),
                        risk_tier=self.classify(rank, months),
                    )
                )

        rows.sort(key=lambda r: r.employee_id)
        logger.info(
            "retention_risk_assessed",
            extra={
                "employees": len(rows),
                "high_risk": sum(1 for r in rows if r.risk_tier == RiskTier.HIGH),
            },
        )
        return rows
