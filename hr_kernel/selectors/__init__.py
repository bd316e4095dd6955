"""Read-only selectors over the employee ledger."""

from hr_kernel.selectors.audit_selector import AuditEntryInfo, AuditSelector
from hr_kernel.selectors.base import BaseSelector
from hr_kernel.selectors.employee_selector import DirectoryEntry, EmployeeSelector, SalaryStats
from hr_kernel.selectors.payroll_selector import (
    DepartmentPayrollSummaryRow,
    MonthlyPayrollRow,
    PayrollSelector,
)

__all__ = [
    "AuditEntryInfo",
    "AuditSelector",
    "BaseSelector",
    "DepartmentPayrollSummaryRow",
    "DirectoryEntry",
    "EmployeeSelector",
    "MonthlyPayrollRow",
    "PayrollSelector",
    "SalaryStats",
]
