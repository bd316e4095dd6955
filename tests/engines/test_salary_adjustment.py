"""
Tests for the salary adjustment engine.

Covers:
- Eligibility filter (department, thresholds, tenure, active flag)
- Rule cascade order and each rule's formula
- Half-up rounding to cents
- Parameter validation
"""

from datetime import date
from decimal import Decimal

import pytest

from hr_engines.salary_adjustment import (
    AdjustmentParameters,
    AdjustmentPolicy,
    AdjustmentRule,
    SalaryAdjustmentEngine,
)
from hr_kernel.domain.tenure import TenureMethod
from hr_kernel.exceptions import InvalidParameterError

from tests.helpers import employee

AS_OF = date(2024, 6, 15)


def params(pct="10", **kwargs) -> AdjustmentParameters:
    return AdjustmentParameters(percentage_increase=Decimal(pct), **kwargs)


class TestRuleCascade:
    """Each rule and the order they are tried in."""

    def setup_method(self):
        self.engine = SalaryAdjustmentEngine()

    def test_standard_increase(self):
        decision = self.engine.decide(employee(1, "50000"), params("10"), AS_OF)

        assert decision.rule == AdjustmentRule.STANDARD
        assert decision.new_salary == Decimal("55000.00")
        assert decision.delta == Decimal("5000.00")

    def test_cap_applies_when_raise_exceeds_it(self):
        decision = self.engine.decide(
            employee(1, "100000"), params("10", max_adjustment=Decimal("5000")), AS_OF,
        )

        assert decision.rule == AdjustmentRule.CAPPED
        assert decision.new_salary == Decimal("105000.00")

    def test_cap_ignored_when_raise_is_below_it(self):
        decision = self.engine.decide(
            employee(1, "40000"), params("10", max_adjustment=Decimal("5000")), AS_OF,
        )

        assert decision.rule == AdjustmentRule.STANDARD
        assert decision.new_salary == Decimal("44000.00")

    def test_raise_equal_to_cap_is_not_capped(self):
        decision = self.engine.decide(
            employee(1, "50000"), params("10", max_adjustment=Decimal("5000")), AS_OF,
        )

        assert decision.rule == AdjustmentRule.STANDARD
        assert decision.new_salary == Decimal("55000.00")

    def test_underpaid_boost(self):
        decision = self.engine.decide(
            employee(1, "40000"), params("10", min_salary_threshold=Decimal("50000")), AS_OF,
        )

        assert decision.rule == AdjustmentRule.UNDERPAID_BOOST
        assert decision.new_salary == Decimal("46000.00")

    def test_cap_wins_over_underpaid_boost(self):
        decision = self.engine.decide(
            employee(1, "40000"),
            params("20", max_adjustment=Decimal("1000"), min_salary_threshold=Decimal("50000")),
            AS_OF,
        )

        assert decision.rule == AdjustmentRule.CAPPED
        assert decision.new_salary == Decimal("41000.00")

    def test_high_earner_dampened(self):
        decision = self.engine.decide(
            employee(1, "100000"), params("10", max_salary_threshold=Decimal("90000")), AS_OF,
        )

        assert decision.rule == AdjustmentRule.HIGH_EARNER_DAMPENED
        assert decision.new_salary == Decimal("102000.00")

    def test_tenure_bonus_adds_two_points(self):
        decision = self.engine.decide(
            employee(1, "50000", hire_date=date(2020, 1, 1)), params("10", tenure_years=3), AS_OF,
        )

        assert decision.rule == AdjustmentRule.TENURE_BONUS
        assert decision.new_salary == Decimal("56000.00")

    def test_policy_multipliers_are_used(self):
        engine = SalaryAdjustmentEngine(AdjustmentPolicy(underpaid_multiplier=Decimal("1.5")))

        decision = engine.decide(
            employee(1, "40000"), params("10", min_salary_threshold=Decimal("50000")), AS_OF,
        )

        assert decision.new_salary == Decimal("60000.00")

    def test_negative_cap_produces_a_pay_cut(self):
        decision = self.engine.decide(
            employee(1, "60000"), params("10", max_adjustment=Decimal("-5000")), AS_OF,
        )

        assert decision.rule == AdjustmentRule.CAPPED
        assert decision.new_salary == Decimal("55000.00")


class TestRounding:

    def setup_method(self):
        self.engine = SalaryAdjustmentEngine()

    def test_half_cent_rounds_up(self):
        # 100.10 * 1.05 = 105.105
        decision = self.engine.decide(employee(1, "100.10"), params("5"), AS_OF)

        assert decision.new_salary == Decimal("105.11")

    def test_rounds_to_cents(self):
        decision = self.engine.decide(employee(1, "33333.33"), params("10"), AS_OF)

        assert decision.new_salary == Decimal("36666.66")


class TestEligibility:

    def setup_method(self):
        self.engine = SalaryAdjustmentEngine()

    def test_inactive_employee_is_skipped(self):
        assert not self.engine.is_eligible(employee(1, "50000", is_active=False), params(), AS_OF)

    def test_department_filter(self):
        p = params(department_id=2)

        assert self.engine.is_eligible(employee(1, "50000", department_id=2), p, AS_OF)
        assert not self.engine.is_eligible(employee(2, "50000", department_id=3), p, AS_OF)

    def test_min_threshold_is_strict(self):
        p = params(min_salary_threshold=Decimal("50000"))

        assert not self.engine.is_eligible(employee(1, "50000"), p, AS_OF)
        assert self.engine.is_eligible(employee(1, "49999.99"), p, AS_OF)

    def test_max_threshold_is_strict(self):
        p = params(max_salary_threshold=Decimal("90000"))

        assert not self.engine.is_eligible(employee(1, "90000"), p, AS_OF)
        assert self.engine.is_eligible(employee(1, "90000.01"), p, AS_OF)

    def test_tenure_requirement(self):
        p = params(tenure_years=5)

        assert self.engine.is_eligible(employee(1, "50000", hire_date=date(2019, 6, 15)), p, AS_OF)
        assert not self.engine.is_eligible(employee(1, "50000", hire_date=date(2019, 6, 16)), p, AS_OF)

    def test_calendar_tenure_counts_year_boundaries(self):
        engine = SalaryAdjustmentEngine(tenure_method=TenureMethod.CALENDAR)

        assert engine.is_eligible(
            employee(1, "50000", hire_date=date(2019, 12, 31)), params(tenure_years=5), AS_OF,
        )


class TestPlan:

    def setup_method(self):
        self.engine = SalaryAdjustmentEngine()

    def test_plan_splits_eligible_and_skipped(self):
        employees = [
            employee(1, "40000", department_id=1),
            employee(2, "60000", department_id=2),
            employee(3, "45000", department_id=1, is_active=False),
        ]

        plan = self.engine.plan(
            employees=employees, parameters=params("10", department_id=1), as_of=AS_OF,
        )

        assert [d.employee_id for d in plan.decisions] == [1]
        assert plan.skipped_employee_ids == (2, 3)
        assert plan.total_increase == Decimal("4000.00")
        assert plan.department_ids == (1,)

    def test_rule_counts(self):
        employees = [employee(1, "40000"), employee(2, "100000"), employee(3, "60000")]

        plan = self.engine.plan(
            employees=employees,
            parameters=params("10", max_adjustment=Decimal("8000")),
            as_of=AS_OF,
        )

        assert plan.rule_counts() == {"standard": 2, "capped": 1}

    def test_plan_is_deterministic(self):
        employees = [employee(i, str(40000 + i * 1000)) for i in range(1, 6)]
        p = params("7.5")

        first = self.engine.plan(employees=employees, parameters=p, as_of=AS_OF)
        second = self.engine.plan(employees=employees, parameters=p, as_of=AS_OF)

        assert first == second


class TestParameters:

    def test_float_percentage_rejected(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            AdjustmentParameters(percentage_increase=10.0)

        assert exc_info.value.parameter == "percentage_increase"

    def test_string_values_coerced(self):
        p = AdjustmentParameters(percentage_increase="10", max_adjustment="500")

        assert p.percentage_increase == Decimal("10")
        assert p.max_adjustment == Decimal("500")

    def test_negative_tenure_rejected(self):
        with pytest.raises(InvalidParameterError):
            AdjustmentParameters(percentage_increase=Decimal("5"), tenure_years=-1)

    def test_non_positive_multiplier_rejected(self):
        with pytest.raises(ValueError):
            AdjustmentPolicy(underpaid_multiplier=Decimal("0"))
