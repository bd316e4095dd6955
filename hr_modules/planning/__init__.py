"""Planning: budget compliance, headcount, retention risk, promotions."""

from hr_modules.planning.service import PlanningService

__all__ = ["PlanningService"]
