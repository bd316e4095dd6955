"""
Tests for the headcount planner.

Covers:
- Workload score (integer division, empty department)
- Tier selection and the budget cap
- The minimum headcount floor
"""

from decimal import Decimal

import pytest

from hr_engines.headcount import (
    HeadcountPlanner,
    HeadcountPolicy,
    HeadcountRecommendation,
    HeadcountTier,
)


class TestWorkloadScore:

    def setup_method(self):
        self.planner = HeadcountPlanner()

    def test_integer_division(self):
        assert self.planner.workload_score(active_projects=7, headcount=3) == 23

    def test_empty_department_scores_one_hundred(self):
        assert self.planner.workload_score(active_projects=50, headcount=0) == 100


class TestBudgetCap:

    def setup_method(self):
        self.planner = HeadcountPlanner()

    def test_cap_floors(self):
        # 500000 / (68000 * 1.1) = 6.68
        assert self.planner.budget_cap(Decimal("500000"), Decimal("68000")) == 6

    def test_no_cap_without_salary_data(self):
        assert self.planner.budget_cap(Decimal("500000"), None) is None


class TestRecommendation:

    def setup_method(self):
        self.planner = HeadcountPlanner()

    def recommend(self, headcount, projects, avg="68000", budget="500000"):
        return self.planner.recommend(
            department_id=1,
            current_headcount=headcount,
            average_salary=Decimal(avg) if avg is not None else None,
            budget=Decimal(budget),
            active_projects=projects,
        )

    def test_heavy_workload_hires_two(self):
        result = self.recommend(1, 16)

        assert result.workload_score == 160
        assert result.optimal_headcount == 3
        assert result.recommendation == HeadcountRecommendation.HIRE
        assert result.recommendation.value == "Recommend Hiring"

    def test_high_workload_hires_one(self):
        result = self.recommend(1, 13)

        assert result.workload_score == 130
        assert result.optimal_headcount == 2

    def test_hiring_limited_by_budget_is_optimal(self):
        result = self.recommend(1, 16, budget="100000")

        assert result.budget_cap == 1
        assert result.optimal_headcount == 1
        assert result.recommendation == HeadcountRecommendation.OPTIMAL

    def test_budget_below_current_headcount_reduces(self):
        result = self.recommend(1, 16, budget="50000")

        assert result.workload_score == 160
        assert result.budget_cap == 0
        assert result.optimal_headcount == 0
        assert result.recommendation == HeadcountRecommendation.REDUCE

    def test_partial_hire_within_budget(self):
        # 150000 / 74800 = 2.005
        result = self.recommend(1, 16, budget="150000")

        assert result.optimal_headcount == 2
        assert result.recommendation == HeadcountRecommendation.HIRE

    def test_balanced_workload_is_optimal(self):
        result = self.recommend(1, 10)

        assert result.workload_score == 100
        assert result.optimal_headcount == 1
        assert result.recommendation.value == "HeadCount appears optimal"

    def test_low_workload_reduces_by_one(self):
        result = self.recommend(4, 1)

        # score 2 also satisfies "< 50" but "< 80" is tested first
        assert result.workload_score == 2
        assert result.optimal_headcount == 3
        assert result.recommendation.value == "Recommend Reducing Staff"

    def test_reduction_floored_at_current_is_optimal(self):
        result = self.recommend(1, 0)

        assert result.optimal_headcount == 1
        assert result.recommendation == HeadcountRecommendation.OPTIMAL

    def test_empty_department(self):
        result = self.recommend(0, 0, avg=None)

        assert result.workload_score == 100
        assert result.optimal_headcount == 0
        assert result.recommendation == HeadcountRecommendation.OPTIMAL

    def test_custom_tier_order(self):
        planner = HeadcountPlanner(HeadcountPolicy(tiers=(
            HeadcountTier("<", 50, -2),
            HeadcountTier("<", 80, -1),
        )))

        result = planner.recommend(
            department_id=1,
            current_headcount=5,
            average_salary=Decimal("60000"),
            budget=Decimal("1000000"),
            active_projects=1,
        )

        assert result.optimal_headcount == 3


class TestTierValidation:

    def test_unknown_comparison_rejected(self):
        with pytest.raises(ValueError):
            HeadcountTier(">=", 100, 1)

    def test_zero_delta_rejected(self):
        with pytest.raises(ValueError):
            HeadcountTier(">", 100, 0)
