"""Compensation: salary adjustment runs and performance bonuses."""

from hr_modules.compensation.service import CompensationService

__all__ = ["CompensationService"]
