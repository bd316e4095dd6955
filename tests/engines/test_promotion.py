"""Tests for seniority bands and raise eligibility."""

from datetime import date
from decimal import Decimal

from hr_engines.promotion import (
    PromotionEvaluator,
    PromotionPolicy,
    PromotionStatus,
    Seniority,
)
from tests.helpers import employee

AS_OF = date(2024, 6, 15)


class TestSeniority:

    def setup_method(self):
        self.evaluator = PromotionEvaluator()

    def test_bands(self):
        assert self.evaluator.seniority(0) == Seniority.JUNIOR
        assert self.evaluator.seniority(1) == Seniority.JUNIOR
        assert self.evaluator.seniority(2) == Seniority.MID_LEVEL
        assert self.evaluator.seniority(4) == Seniority.MID_LEVEL
        assert self.evaluator.seniority(5) == Seniority.SENIOR

    def test_band_strings(self):
        assert [s.value for s in Seniority] == ["Senior", "Mid-Level", "Junior"]


class TestEvaluate:

    def setup_method(self):
        self.evaluator = PromotionEvaluator()

    def test_underpaid_senior_eligible(self):
        rows = self.evaluator.evaluate(
            employees=[employee(1, "68000", hire_date=date(2018, 3, 15))], as_of=AS_OF,
        )

        assert rows[0].years_of_service == 6
        assert rows[0].seniority == Seniority.SENIOR
        assert rows[0].status == PromotionStatus.ELIGIBLE_FOR_RAISE
        assert rows[0].status.value == "Eligible for Raise"

    def test_well_paid_senior_needs_no_action(self):
        rows = self.evaluator.evaluate(
            employees=[employee(1, "85000", hire_date=date(2018, 3, 15))], as_of=AS_OF,
        )

        assert rows[0].status == PromotionStatus.NO_ACTION_NEEDED

    def test_ceiling_is_strict(self):
        rows = self.evaluator.evaluate(
            employees=[employee(1, "80000", hire_date=date(2010, 1, 1))], as_of=AS_OF,
        )

        assert rows[0].status.value == "No Action Needed"

    def test_five_year_anniversary(self):
        rows = self.evaluator.evaluate(
            employees=[
                employee(1, "60000", hire_date=date(2019, 6, 15)),
                employee(2, "60000", hire_date=date(2019, 6, 16)),
            ],
            as_of=AS_OF,
        )

        assert [r.seniority for r in rows] == [Seniority.SENIOR, Seniority.MID_LEVEL]

    def test_junior_underpaid_not_eligible(self):
        rows = self.evaluator.evaluate(
            employees=[employee(1, "30000", hire_date=date(2024, 1, 1))], as_of=AS_OF,
        )

        assert rows[0].seniority == Seniority.JUNIOR
        assert rows[0].status == PromotionStatus.NO_ACTION_NEEDED

    def test_inactive_and_unassigned_excluded(self):
        rows = self.evaluator.evaluate(
            employees=[
                employee(3, "60000"),
                employee(1, "60000", is_active=False),
                employee(2, "60000", department_id=None),
            ],
            as_of=AS_OF,
            department_names={1: "Finance"},
        )

        assert [r.employee_id for r in rows] == [3]
        assert rows[0].department_name == "Finance"

    def test_custom_policy(self):
        evaluator = PromotionEvaluator(
            PromotionPolicy(senior_years=3, raise_salary_ceiling=Decimal("100000"))
        )

        rows = evaluator.evaluate(
            employees=[employee(1, "90000", hire_date=date(2021, 1, 1))], as_of=AS_OF,
        )

        assert rows[0].seniority == Seniority.SENIOR
        assert rows[0].status == PromotionStatus.ELIGIBLE_FOR_RAISE
