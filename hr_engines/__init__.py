"""
Module: hr_engines
Responsibility:
    Package entrypoint re-exporting the pure HR rule engines.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import hr_kernel domain types, db.types, exceptions and
    logging.  MUST NOT import hr_modules.

Invariants enforced:
    - Purity: engines never read the clock; the evaluation date is a
      parameter.
    - Decimal-only arithmetic for salaries, budgets and bonuses.
    - Determinism: identical inputs always produce identical outputs.

Every engine entry point is traced via ``@traced_engine`` (see
``hr_engines.tracer``), emitting HR_ENGINE_TRACE log records.
"""

from hr_engines.bonus import BonusCalculator, BonusPolicy, BonusResult, BonusStatus
from hr_engines.budget_compliance import (
    BudgetComplianceChecker,
    BudgetComplianceResult,
    BudgetPolicy,
    BudgetStatus,
)
from hr_engines.headcount import (
    DEFAULT_TIERS,
    HeadcountPlanner,
    HeadcountPolicy,
    HeadcountRecommendation,
    HeadcountResult,
    HeadcountTier,
)
from hr_engines.promotion import (
    PromotionEvaluator,
    PromotionPolicy,
    PromotionRow,
    PromotionStatus,
    Seniority,
)
from hr_engines.retention import (
    RetentionPolicy,
    RetentionRiskAnalyzer,
    RetentionRiskRow,
    RiskTier,
)
from hr_engines.salary_adjustment import (
    AdjustmentParameters,
    AdjustmentPlan,
    AdjustmentPolicy,
    AdjustmentRule,
    SalaryAdjustmentEngine,
    SalaryDecision,
)
from hr_engines.statistics import percent_rank

__all__ = [
    "AdjustmentParameters",
    "AdjustmentPlan",
    "AdjustmentPolicy",
    "AdjustmentRule",
    "BonusCalculator",
    "BonusPolicy",
    "BonusResult",
    "BonusStatus",
    "BudgetComplianceChecker",
    "BudgetComplianceResult",
    "BudgetPolicy",
    "BudgetStatus",
    "DEFAULT_TIERS",
    "HeadcountPlanner",
    "HeadcountPolicy",
    "HeadcountRecommendation",
    "HeadcountResult",
    "HeadcountTier",
    "PromotionEvaluator",
    "PromotionPolicy",
    "PromotionRow",
    "PromotionStatus",
    "RetentionPolicy",
    "RetentionRiskAnalyzer",
    "RetentionRiskRow",
    "RiskTier",
    "SalaryAdjustmentEngine",
    "SalaryDecision",
    "Seniority",
    "percent_rank",
]
