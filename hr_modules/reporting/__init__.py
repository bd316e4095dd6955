"""Reporting: monthly payroll report, directory, department summary."""

from hr_modules.reporting.service import ReportingService

__all__ = ["ReportingService"]
