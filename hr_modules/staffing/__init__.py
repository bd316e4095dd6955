"""Staffing: departments, projects, employee lifecycle, payroll records."""

from hr_modules.staffing.service import StaffingService

__all__ = ["StaffingService"]
