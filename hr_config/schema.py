"""
HRConfig schema.

The typed, frozen form of an HR configuration set.  YAML files are parsed
into these types by ``hr_config.loader``; runtime code obtains them only
through ``hr_config.get_active_config()``.

Rule policies (adjustment, bonus, budget, headcount, retention, promotion)
are the engines' own policy dataclasses, so a parsed configuration is
handed to an engine without translation.  Every default equals the shipped
``sets/default.yaml``, so engines built without configuration behave the
same as engines built from the default set.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hr_engines.bonus import BonusPolicy
from hr_engines.budget_compliance import BudgetPolicy
from hr_engines.headcount import HeadcountPolicy
from hr_engines.promotion import PromotionPolicy
from hr_engines.retention import RetentionPolicy
from hr_engines.salary_adjustment import AdjustmentPolicy
from hr_kernel.domain.tenure import TenureMethod

DEFAULT_DATABASE_URL = "sqlite:///hr_ledger.db"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("database url must not be empty")
        if self.pool_size < 1 or self.max_overflow < 0:
            raise ValueError("pool_size must be >= 1 and max_overflow >= 0")


@dataclass(frozen=True)
class TenurePolicy:
    """How years / months of service are counted."""

    method: TenureMethod = TenureMethod.ELAPSED


@dataclass(frozen=True)
class HRConfig:
    """A complete, validated HR configuration set."""

    config_id: str = "default"
    version: int = 1
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    tenure: TenurePolicy = field(default_factory=TenurePolicy)
    adjustment: AdjustmentPolicy = field(default_factory=AdjustmentPolicy)
    bonus: BonusPolicy = field(default_factory=BonusPolicy)
    budget: BudgetPolicy = field(default_factory=BudgetPolicy)
    headcount: HeadcountPolicy = field(default_factory=HeadcountPolicy)
    retention: RetentionPolicy = field(default_factory=RetentionPolicy)
    promotion: PromotionPolicy = field(default_factory=PromotionPolicy)
