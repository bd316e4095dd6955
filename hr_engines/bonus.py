"""
Module: hr_engines.bonus
Responsibility:
    Performance bonus for one employee from salary, tenure and a 1-5
    performance rating.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Calculation:
    1. Tier percentage from the rating (base = base bonus percentage):

           rating 5 -> base + 5     rating 4 -> base + 2.5
           rating 3 -> base         rating 2 -> base - 2
           anything else -> 0

       A negative tier percentage counts as 0.
    2. Tenure multiplier: >= 10 years x1.2, >= 5 x1.1, >= 2 x1.05, else x1.
    3. Cap at 20% of salary.

Status:
    "No bonus - Poor Performance"  bonus is 0
    "Maximum Bonus Reached"        the cap applied
    "Standard Bonus Calculation"   otherwise
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from hr_engines.tracer import traced_engine
from hr_kernel.db.types import ZERO, round_money, to_decimal
from hr_kernel.domain.tenure import TenureMethod, tenure_years
from hr_kernel.exceptions import InvalidParameterError
from hr_kernel.logging_config import get_logger

logger = get_logger("engines.bonus")

HUNDRED = Decimal("100")
ONE = Decimal("1")


@dataclass(frozen=True)
class BonusPolicy:
    """
    Tier offsets, tenure multipliers and the cap.

    ``rating_offsets`` maps a rating to the points added to the base
    percentage; ratings not listed earn nothing.  ``tenure_multipliers``
    is (minimum years, multiplier), checked in descending order of years.
    """

    rating_offsets: tuple[tuple[int, Decimal], ...] = (
        (5, Decimal("5")),
        (4, Decimal("2.5")),
        (3, Decimal("0")),
        (2, Decimal("-2")),
    )
    tenure_multipliers: tuple[tuple[int, Decimal], ...] = (
        (10, Decimal("1.2")),
        (5, Decimal("1.1")),
        (2, Decimal("1.05")),
    )
    max_bonus_fraction: Decimal = Decimal("0.20")
    default_base_percentage: Decimal = Decimal("5.0")

    def __post_init__(self) -> None:
        if not ZERO <= self.max_bonus_fraction <= ONE:
            raise ValueError("max_bonus_fraction must be between 0 and 1")
        if any(m <= 0 for _, m in self.tenure_multipliers):
            raise ValueError("tenure multipliers must be positive")

    def tier_offset(self, rating: int) -> Decimal | None:
        for tier_rating, offset in self.rating_offsets:
            if tier_rating == rating:
                return offset
        return None

    def tenure_multiplier(self, years: int) -> Decimal:
        for min_years, multiplier in sorted(self.tenure_multipliers, reverse=True):
            if years >= min_years:
                return multiplier
        return ONE


class BonusStatus(str, Enum):
    NO_BONUS = "No bonus - Poor Performance"
    MAXIMUM_REACHED = "Maximum Bonus Reached"
    STANDARD = "Standard Bonus Calculation"


@dataclass(frozen=True)
class BonusResult:
    """Bonus for one employee with every intermediate value."""

    salary: Decimal
    performance_rating: int
    tenure_years: int
    base_percentage: Decimal
    tier_percentage: Decimal
    tier_amount: Decimal
    tenure_multiplier: Decimal
    max_bonus: Decimal
    bonus: Decimal
    status: BonusStatus
    employee_id: int | None = None


class BonusCalculator:
    """Pure performance bonus calculator."""

    def __init__(
        self,
        policy: BonusPolicy | None = None,
        tenure_method: TenureMethod = TenureMethod.ELAPSED,
    ):
        self.policy = policy or BonusPolicy()
        self.tenure_method = tenure_method

    def tier_percentage(self, performance_rating: int, base_percentage: Decimal) -> Decimal:
        offset = self.policy.tier_offset(performance_rating)
        if offset is None:
            return ZERO
        return max(base_percentage + offset, ZERO)

    @traced_engine(
        "bonus",
        "1.0",
        fingerprint_fields=("salary", "hire_date", "as_of", "performance_rating", "base_percentage"),
    )
    def calculate(
        self,
        salary: Decimal,
        hire_date: date,
        as_of: date,
        performance_rating: int,
        base_percentage: Decimal | None = None,
        employee_id: int | None = None,
    ) -> BonusResult:
        """
        Raises:
            InvalidParameterError: negative base percentage or
                non-positive salary.
        """
        salary = to_decimal(salary)
        base = (
            self.policy.default_base_percentage
            if base_percentage is None
            else to_decimal(base_percentage)
        )
        if base < ZERO:
            raise InvalidParameterError("base_bonus_percentage", str(base), "must be >= 0")
        if salary <= ZERO:
            raise InvalidParameterError("salary", str(salary), "must be > 0")

        years = tenure_years(hire_date, as_of, self.tenure_method)
        tier_pct = self.tier_percentage(performance_rating, base)
        tier_amount = salary * tier_pct / HUNDRED
        multiplier = self.policy.tenure_multiplier(years)
        raw = tier_amount * multiplier
        max_bonus = round_money(salary * self.policy.max_bonus_fraction)

        capped = raw > max_bonus
        bonus = max_bonus if capped else round_money(raw)

        if bonus == ZERO:
            status = BonusStatus.NO_BONUS
        elif capped or bonus == max_bonus:
            status = BonusStatus.MAXIMUM_REACHED
        else:
            status = BonusStatus.STANDARD

        logger.debug(
            "bonus_calculated",
            extra={
                "employee_id": employee_id,
                "performance_rating": performance_rating,
                "tenure_years": years,
                "bonus": bonus,
                "bonus_status": status.value,
            },
        )
        return BonusResult(
            salary=salary,
            performance_rating=performance_rating,
            tenure_years=years,
            base_percentage=base,
            tier_percentage=tier_pct,
            tier_amount=round_money(tier_amount),
            tenure_multiplier=multiplier,
            max_bonus=max_bonus,
            bonus=bonus,
            status=status,
            employee_id=employee_id,
        )
