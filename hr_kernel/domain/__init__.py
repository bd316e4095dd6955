"""Domain layer - pure value types, DTOs, results and the capability hook."""

from hr_kernel.domain.capabilities import (
    ROLE_CAPABILITIES,
    Capability,
    CapabilityCheck,
    Role,
    RoleCapabilityCheck,
    allow_all,
    require_capability,
)
from hr_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from hr_kernel.domain.dtos import (
    DepartmentSnapshot,
    EmployeeFilter,
    EmployeeSnapshot,
    PayrollSnapshot,
    ProjectSnapshot,
)
from hr_kernel.domain.results import OperationResult, OperationStatus
from hr_kernel.domain.tenure import TenureMethod, tenure_months, tenure_years

__all__ = [
    "Capability",
    "CapabilityCheck",
    "Clock",
    "DepartmentSnapshot",
    "DeterministicClock",
    "EmployeeFilter",
    "EmployeeSnapshot",
    "OperationResult",
    "OperationStatus",
    "PayrollSnapshot",
    "ProjectSnapshot",
    "ROLE_CAPABILITIES",
    "Role",
    "RoleCapabilityCheck",
    "SystemClock",
    "TenureMethod",
    "allow_all",
    "require_capability",
    "tenure_months",
    "tenure_years",
]
