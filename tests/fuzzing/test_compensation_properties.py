"""
Property-based tests for the compensation engines.

Boundaries fuzzed here:
- Bonus: salary 0.01-10M, ratings -2..8, hire dates over 40 years
- Percent rank: partitions of 1-30 salaries with ties
- Salary adjustment: standard raises and the max-adjustment cap
"""

from datetime import date
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from hr_engines.bonus import BonusCalculator, BonusStatus
from hr_engines.salary_adjustment import (
    AdjustmentParameters,
    AdjustmentRule,
    SalaryAdjustmentEngine,
)
from hr_engines.statistics import percent_rank
from tests.helpers import employee

AS_OF = date(2024, 6, 15)

salaries = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("10000000"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
percentages = st.decimals(
    min_value=Decimal("0"),
    max_value=Decimal("100"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)
hire_dates = st.dates(min_value=date(1984, 1, 1), max_value=AS_OF)


@composite
def staff(draw, min_size=1, max_size=20):
    amounts = draw(st.lists(salaries, min_size=min_size, max_size=max_size))
    return [
        employee(i + 1, amount, hire_date=draw(hire_dates))
        for i, amount in enumerate(amounts)
    ]


class TestBonusProperties:

    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    @given(
        salary=salaries,
        hire_date=hire_dates,
        rating=st.integers(min_value=-2, max_value=8),
        base=percentages,
    )
    def test_bonus_within_cap(self, salary, hire_date, rating, base):
        result = BonusCalculator().calculate(
            salary=salary,
            hire_date=hire_date,
            as_of=AS_OF,
            performance_rating=rating,
            base_percentage=base,
        )

        assert Decimal("0") <= result.bonus <= result.max_bonus
        assert result.max_bonus <= salary * Decimal("0.20") + Decimal("0.005")

    @settings(max_examples=200)
    @given(
        salary=salaries,
        hire_date=hire_dates,
        rating=st.integers(min_value=-2, max_value=8),
        base=percentages,
    )
    def test_status_agrees_with_amount(self, salary, hire_date, rating, base):
        result = BonusCalculator().calculate(
            salary=salary,
            hire_date=hire_date,
            as_of=AS_OF,
            performance_rating=rating,
            base_percentage=base,
        )

        if result.bonus == 0:
            assert result.status == BonusStatus.NO_BONUS
        elif result.status == BonusStatus.MAXIMUM_REACHED:
            assert result.bonus == result.max_bonus
        else:
            assert result.status == BonusStatus.STANDARD
            assert result.bonus < result.max_bonus

    @given(salary=salaries, hire_date=hire_dates, rating=st.integers(max_value=1))
    def test_low_ratings_earn_nothing(self, salary, hire_date, rating):
        result = BonusCalculator().calculate(
            salary=salary,
            hire_date=hire_date,
            as_of=AS_OF,
            performance_rating=rating,
        )

        assert result.bonus == 0
        assert result.status == BonusStatus.NO_BONUS


class TestPercentRankProperties:

    @given(values=st.lists(salaries, min_size=1, max_size=30))
    def test_ranks_in_unit_interval(self, values):
        ranks = percent_rank(values)

        assert len(ranks) == len(values)
        assert all(Decimal("0") <= r <= Decimal("1") for r in ranks)

    @given(values=st.lists(salaries, min_size=1, max_size=30))
    def test_lowest_ranks_zero_and_ties_share_rank(self, values):
        ranks = percent_rank(values)

        assert ranks[values.index(min(values))] == 0
        by_value: dict[Decimal, set[Decimal]] = {}
        for value, rank in zip(values, ranks):
            by_value.setdefault(value, set()).add(rank)
        assert all(len(r) == 1 for r in by_value.values())

    @given(values=st.lists(salaries, min_size=2, max_size=30, unique=True))
    def test_order_preserved(self, values):
        ranks = percent_rank(values)

        pairs = sorted(zip(values, ranks))
        assert [r for _, r in pairs] == sorted(ranks)
        assert pairs[-1][1] == 1


class TestSalaryAdjustmentProperties:

    def setup_method(self):
        self.engine = SalaryAdjustmentEngine()

    @settings(max_examples=100)
    @given(employees=staff(), pct=percentages)
    def test_standard_raise_never_lowers_salary(self, employees, pct):
        plan = self.engine.plan(
            employees=employees,
            parameters=AdjustmentParameters(percentage_increase=pct),
            as_of=AS_OF,
        )

        assert len(plan.decisions) == len(employees)
        for decision in plan.decisions:
            assert decision.rule == AdjustmentRule.STANDARD
            assert decision.new_salary >= decision.old_salary

    @settings(max_examples=100)
    @given(employees=staff(), pct=percentages, cap=salaries)
    def test_increase_never_exceeds_cap(self, employees, pct, cap):
        plan = self.engine.plan(
            employees=employees,
            parameters=AdjustmentParameters(percentage_increase=pct, max_adjustment=cap),
            as_of=AS_OF,
        )

        for decision in plan.decisions:
            assert decision.new_salary - decision.old_salary <= cap
        assert plan.total_increase <= cap * len(employees)

    @settings(max_examples=50)
    @given(employees=staff(), pct=percentages)
    def test_plan_is_deterministic(self, employees, pct):
        parameters = AdjustmentParameters(percentage_increase=pct)

        first = self.engine.plan(employees=employees, parameters=parameters, as_of=AS_OF)
        second = self.engine.plan(employees=employees, parameters=parameters, as_of=AS_OF)

        assert first.decisions == second.decisions
