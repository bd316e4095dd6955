"""
Module: hr_engines.headcount
Responsibility:
    Recommend a department headcount from its project workload and salary
    budget.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Workload score (integer arithmetic):

    score = (active_projects * 10) // headcount,   or 100 with no staff

Tiers are evaluated in order and the first match wins:

    score > 150  -> min(current + 2, budget cap)    "Recommend Hiring"
    score > 120  -> min(current + 1, budget cap)    "Recommend Hiring"
    score < 80   -> max(current - 1, 1)             "Recommend Reducing Staff"
    score < 50   -> max(current - 2, 1)             "Recommend Reducing Staff"
    otherwise    -> current                          "HeadCount appears optimal"

    budget cap = floor(budget / (average_salary * 1.1))

Because ``< 80`` is tested before ``< 50`` the last reducing tier never
fires with the default tiers; the tier list is configurable.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from enum import Enum

from hr_engines.tracer import traced_engine
from hr_kernel.db.types import ZERO
from hr_kernel.logging_config import get_logger

logger = get_logger("engines.headcount")


class HeadcountRecommendation(str, Enum):
    HIRE = "Recommend Hiring"
    REDUCE = "Recommend Reducing Staff"
    OPTIMAL = "HeadCount appears optimal"


@dataclass(frozen=True)
class HeadcountTier:
    """
    One workload tier.

    ``comparison`` is ">" or "<" against ``threshold``; ``delta`` is added
    to the current headcount (positive deltas are capped by budget,
    negative ones floored at the minimum headcount).
    """

    comparison: str
    threshold: int
    delta: int

    def __post_init__(self) -> None:
        if self.comparison not in (">", "<"):
            raise ValueError(f"Unsupported comparison {self.comparison!r}")
        if self.delta == 0:
            raise ValueError("A headcount tier must change headcount")

    def matches(self, score: int) -> bool:
        if self.comparison == ">":
            return score > self.threshold
        return score < self.threshold


DEFAULT_TIERS: tuple[HeadcountTier, ...] = (
    HeadcountTier(">", 150, 2),
    HeadcountTier(">", 120, 1),
    HeadcountTier("<", 80, -1),
    HeadcountTier("<", 50, -2),
)


@dataclass(frozen=True)
class HeadcountPolicy:
    tiers: tuple[HeadcountTier, ...] = DEFAULT_TIERS
    workload_per_project: int = 10
    empty_department_score: int = 100
    salary_overhead: Decimal = Decimal("1.1")
    minimum_headcount: int = 1
    count_projects_across_all_departments: bool = True


@dataclass(frozen=True)
class HeadcountResult:
    department_id: int
    current_headcount: int
    average_salary: Decimal | None
    budget: Decimal
    active_projects: int
    workload_score: int
    budget_cap: int | None
    optimal_headcount: int
    recommendation: HeadcountRecommendation


class HeadcountPlanner:
    """Pure headcount recommendation."""

    def __init__(self, policy: HeadcountPolicy | None = None):
        self.policy = policy or HeadcountPolicy()

    def workload_score(self, active_projects: int, headcount: int) -> int:
        if headcount == 0:
            return self.policy.empty_department_score
        return (active_projects * self.policy.workload_per_project) // headcount

    def budget_cap(self, budget: Decimal, average_salary: Decimal | None) -> int | None:
        """Largest headcount the budget can carry; None without salary data."""
        if average_salary is None or average_salary <= ZERO:
            return None
        loaded = average_salary * self.policy.salary_overhead
        return int((budget / loaded).to_integral_value(rounding=ROUND_FLOOR))

    @traced_engine(
        "headcount",
        "1.0",
        fingerprint_fields=("department_id", "current_headcount", "average_salary", "budget", "active_projects"),
    )
    def recommend(
        self,
        department_id: int,
        current_headcount: int,
        average_salary: Decimal | None,
        budget: Decimal,
        active_projects: int,
    ) -> HeadcountResult:
        score = self.workload_score(active_projects, current_headcount)
        cap = self.budget_cap(budget, average_salary)

        optimal = current_headcount
        for tier in self.policy.tiers:
            if not tier.matches(score):
                continue
            if tier.delta > 0:
                target = current_headcount + tier.delta
                optimal = target if cap is None else min(target, cap)
            else:
                optimal = max(current_headcount + tier.delta, self.policy.minimum_headcount)
            break

        if optimal > current_headcount:
            recommendation = HeadcountRecommendation.HIRE
        elif optimal < current_headcount:
            recommendation = HeadcountRecommendation.REDUCE
        else:
            recommendation = HeadcountRecommendation.OPTIMAL

        logger.debug(
            "headcount_recommended",
            extra={
                "department_id": department_id,
                "workload_score": score,
                "optimal_headcount": optimal,
            },
        )
        return HeadcountResult(
            department_id=department_id,
            current_headcount=current_headcount,
            average_salary=average_salary,
            budget=budget,
            active_projects=active_projects,
            workload_score=score,
            budget_cap=cap,
            optimal_headcount=optimal,
            recommendation=recommendation,
        )
