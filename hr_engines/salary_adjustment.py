"""
Module: hr_engines.salary_adjustment
Responsibility:
    Decide the new salary of every employee targeted by a salary
    adjustment run.  Produces a plan; the compensation module applies it
    through the ledger store.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import hr_kernel domain types, db.types and exceptions.

Eligibility (all set constraints must hold):
    active; department matches; salary < min threshold; salary > max
    threshold; tenure years >= required tenure.

Rule cascade (first match wins):

    Rule                  | Condition                          | New salary
    ----------------------|------------------------------------|------------------------------
    capped                | cap set and salary*pct/100 > cap   | salary + cap
    underpaid_boost       | min threshold set, salary < min    | salary * 1.15
    high_earner_dampened  | max threshold set, salary > max    | salary * 1.02
    tenure_bonus          | tenure set, tenure >= requirement  | salary * (1 + (pct + 2)/100)
    standard              | otherwise                          | salary * (1 + pct/100)

The threshold and tenure conditions repeat the eligibility filter on
purpose, so a rule fires for every eligible employee whose constraint was
set.  Multipliers come from ``AdjustmentPolicy``.  New salaries are
rounded half-up to cents.

A plan may contain non-positive salaries (e.g. a negative cap); the ledger
store rejects them when the plan is applied, which fails the whole run.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from hr_engines.tracer import traced_engine
from hr_kernel.db.types import round_money, to_decimal
from hr_kernel.domain.dtos import EmployeeSnapshot
from hr_kernel.domain.tenure import TenureMethod, tenure_years
from hr_kernel.exceptions import InvalidParameterError
from hr_kernel.logging_config import get_logger

logger = get_logger("engines.salary_adjustment")

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class AdjustmentPolicy:
    """Configurable multipliers of the rule cascade."""

    underpaid_multiplier: Decimal = Decimal("1.15")
    high_earner_multiplier: Decimal = Decimal("1.02")
    tenure_bonus_points: Decimal = Decimal("2")

    def __post_init__(self) -> None:
        if self.underpaid_multiplier <= 0 or self.high_earner_multiplier <= 0:
            raise ValueError("adjustment multipliers must be positive")


@dataclass(frozen=True)
class AdjustmentParameters:
    """
    Parameters of one adjustment run.

    ``None`` on any optional field means "no constraint".
    """

    percentage_increase: Decimal
    max_adjustment: Decimal | None = None
    min_salary_threshold: Decimal | None = None
    max_salary_threshold: Decimal | None = None
    tenure_years: int | None = None
    department_id: int | None = None

    def __post_init__(self) -> None:
        for name in (
            "percentage_increase",
            "max_adjustment",
            "min_salary_threshold",
            "max_salary_threshold",
        ):
            value = getattr(self, name)
            if value is None:
                continue
            try:
                object.__setattr__(self, name, to_decimal(value))
            except TypeError as exc:
                raise InvalidParameterError(name, repr(value), str(exc)) from exc
        if self.percentage_increase is None:
            raise InvalidParameterError("percentage_increase", "None", "required")
        if self.tenure_years is not None and self.tenure_years < 0:
            raise InvalidParameterError(
                "tenure_years", str(self.tenure_years), "must be >= 0"
            )


class AdjustmentRule(str, Enum):
    """Which branch of the cascade produced a salary."""

    CAPPED = "capped"
    UNDERPAID_BOOST = "underpaid_boost"
    HIGH_EARNER_DAMPENED = "high_earner_dampened"
    TENURE_BONUS = "tenure_bonus"
    STANDARD = "standard"


@dataclass(frozen=True)
class SalaryDecision:
    """New salary for one employee and the rule that produced it."""

    employee_id: int
    department_id: int | None
    old_salary: Decimal
    new_salary: Decimal
    rule: AdjustmentRule

    @property
    def delta(self) -> Decimal:
        return self.new_salary - self.old_salary


@dataclass(frozen=True)
class AdjustmentPlan:
    """All decisions of one run plus the employees the filter skipped."""

    as_of: date
    parameters: AdjustmentParameters
    decisions: tuple[SalaryDecision, ...]
    skipped_employee_ids: tuple[int, ...] = ()

    @property
    def total_increase(self) -> Decimal:
        return sum((d.delta for d in self.decisions), Decimal("0"))

    @property
    def department_ids(self) -> tuple[int, ...]:
        return tuple(sorted({
            d.department_id for d in self.decisions if d.department_id is not None
        }))

    def rule_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for d in self.decisions:
            counts[d.rule.value] = counts.get(d.rule.value, 0) + 1
        return counts


class SalaryAdjustmentEngine:
    """
    Pure salary adjustment calculator.

    Contract:
        No I/O; the evaluation date is passed in.  Identical inputs give
        identical plans.
    """

    def __init__(
        self,
        policy: AdjustmentPolicy | None = None,
        tenure_method: TenureMethod = TenureMethod.ELAPSED,
    ):
        self.policy = policy or AdjustmentPolicy()
        self.tenure_method = tenure_method

    def is_eligible(
        self,
        employee: EmployeeSnapshot,
        parameters: AdjustmentParameters,
        as_of: date,
    ) -> bool:
        p = parameters
        if not employee.is_active:
            return False
        if p.department_id is not None and employee.department_id != p.department_id:
            return False
        if p.min_salary_threshold is not None and not employee.salary < p.min_salary_threshold:
            return False
        if p.max_salary_threshold is not None and not employee.salary > p.max_salary_threshold:
            return False
        if p.tenure_years is not None and (
            tenure_years(employee.hire_date, as_of, self.tenure_method) < p.tenure_years
        ):
            return False
        return True

    def decide(
        self,
        employee: EmployeeSnapshot,
        parameters: AdjustmentParameters,
        as_of: date,
    ) -> SalaryDecision:
        """Apply the rule cascade to one (eligible) employee."""
        p = parameters
        salary = employee.salary
        pct = p.percentage_increase

        if p.max_adjustment is not None and salary * pct / HUNDRED > p.max_adjustment:
            rule = AdjustmentRule.CAPPED
            new_salary = salary + p.max_adjustment
        elif p.min_salary_threshold is not None and salary < p.min_salary_threshold:
            rule = AdjustmentRule.UNDERPAID_BOOST
            new_salary = salary * self.policy.underpaid_multiplier
        elif p.max_salary_threshold is not None and salary > p.max_salary_threshold:
            rule = AdjustmentRule.HIGH_EARNER_DAMPENED
            new_salary = salary * self.policy.high_earner_multiplier
        elif p.tenure_years is not None and (
            tenure_years(employee.hire_date, as_of, self.tenure_method) >= p.tenure_years
        ):
            rule = AdjustmentRule.TENURE_BONUS
            new_salary = salary * (1 + (pct + self.policy.tenure_bonus_points) / HUNDRED)
        else:
            rule = AdjustmentRule.STANDARD
            new_salary = salary * (1 + pct / HUNDRED)

        return SalaryDecision(
            employee_id=employee.id,
            department_id=employee.department_id,
            old_salary=salary,
            new_salary=round_money(new_salary),
            rule=rule,
        )

    @traced_engine("salary_adjustment", "1.0", fingerprint_fields=("employees", "parameters", "as_of"))
    def plan(
        self,
        employees: Sequence[EmployeeSnapshot],
        parameters: AdjustmentParameters,
        as_of: date,
    ) -> AdjustmentPlan:
        """Filter ``employees`` and decide a new salary for each eligible one."""
        decisions: list[SalaryDecision] = []
        skipped: list[int] = []
        for employee in employees:
            if self.is_eligible(employee, parameters, as_of):
                decisions.append(self.decide(employee, parameters, as_of))
            else:
                skipped.append(employee.id)

        result = AdjustmentPlan(
            as_of=as_of,
            parameters=parameters,
            decisions=tuple(decisions),
            skipped_employee_ids=tuple(skipped),
        )
        logger.info(
            "salary_adjustment_planned",
            extra={
                "eligible": len(decisions),
                "skipped": len(skipped),
                "rules": result.rule_counts(),
            },
        )
        return result
