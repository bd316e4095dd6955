"""ORM models for the employee ledger."""

from hr_kernel.models.audit_entry import AuditEntry, AuditOperation
from hr_kernel.models.department import Department
from hr_kernel.models.employee import Employee
from hr_kernel.models.payroll import PayrollRecord
from hr_kernel.models.project import Project, ProjectStatus

__all__ = [
    "AuditEntry",
    "AuditOperation",
    "Department",
    "Employee",
    "PayrollRecord",
    "Project",
    "ProjectStatus",
]
