"""
Module: hr_engines.budget_compliance
Responsibility:
    Project a department's active salary total after a proposed
    percentage increase and classify it against the department budget.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

    proposed = current * (1 + pct / 100)

    proposed > 90% of budget  -> "Warning: Exceeds 90% of Budget"
    proposed > 80% of budget  -> "Caution: Exceeds 80% of Budget"
    otherwise                 -> "Within Safe Limits"

    is_within_budget = proposed <= budget

A projection over 100% still reports the warning status; callers read
``is_within_budget`` for the hard limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from hr_engines.tracer import traced_engine
from hr_kernel.db.types import ZERO, round_money, to_decimal
from hr_kernel.logging_config import get_logger

logger = get_logger("engines.budget_compliance")

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class BudgetPolicy:
    warning_ratio: Decimal = Decimal("0.90")
    caution_ratio: Decimal = Decimal("0.80")
    enforce_budget: bool = False

    def __post_init__(self) -> None:
        if not ZERO < self.caution_ratio <= self.warning_ratio:
            raise ValueError("budget ratios must satisfy 0 < caution_ratio <= warning_ratio")


class BudgetStatus(str, Enum):
    WARNING = "Warning: Exceeds 90% of Budget"
    CAUTION = "Caution: Exceeds 80% of Budget"
    WITHIN_SAFE_LIMITS = "Within Safe Limits"


@dataclass(frozen=True)
class BudgetComplianceResult:
    department_id: int
    current_total: Decimal
    budget: Decimal
    proposed_percentage: Decimal
    proposed_total: Decimal
    status: BudgetStatus
    is_within_budget: bool

    @property
    def utilization(self) -> Decimal | None:
        """Proposed total as a fraction of budget (None for a zero budget)."""
        if self.budget == ZERO:
            return None
        return self.proposed_total / self.budget


class BudgetComplianceChecker:
    """Pure budget projection."""

    def __init__(self, policy: BudgetPolicy | None = None):
        self.policy = policy or BudgetPolicy()

    def classify(self, proposed_total: Decimal, budget: Decimal) -> BudgetStatus:
        if proposed_total > budget * self.policy.warning_ratio:
            return BudgetStatus.WARNING
        if proposed_total > budget * self.policy.caution_ratio:
            return BudgetStatus.CAUTION
        return BudgetStatus.WITHIN_SAFE_LIMITS

    @traced_engine(
        "budget_compliance",
        "1.0",
        fingerprint_fields=("department_id", "current_total", "budget", "proposed_percentage"),
    )
    def check(
        self,
        department_id: int,
        current_total: Decimal,
        budget: Decimal,
        proposed_percentage: Decimal,
    ) -> BudgetComplianceResult:
        current = to_decimal(current_total)
        limit = to_decimal(budget)
        pct = to_decimal(proposed_percentage)
        proposed = round_money(current * (1 + pct / HUNDRED))

        result = BudgetComplianceResult(
            department_id=department_id,
            current_total=current,
            budget=limit,
            proposed_percentage=pct,
            proposed_total=proposed,
            status=self.classify(proposed, limit),
            is_within_budget=proposed <= limit,
        )
        logger.debug(
            "budget_compliance_checked",
            extra={
                "department_id": department_id,
                "proposed_total": proposed,
                "budget_status": result.status.value,
            },
        )
        return result
