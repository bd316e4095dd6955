"""
Capabilities -- the access-control hook for exposed operations.

Responsibility:
    Names the capabilities that HR operations require, maps the standard
    roles to them, and defines the ``CapabilityCheck`` hook that every
    module service consults before touching the ledger.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  Where actors and roles are stored
    is outside the kernel; a deployment injects any callable that answers
    "may this actor do this?".

Role matrix:

    Role               | Capabilities
    -------------------|----------------------------------------------------
    HR_Administrator   | READ_EMPLOYEES, WRITE_EMPLOYEES,
                       | RUN_SALARY_ADJUSTMENT, MANAGE_ORGANIZATION
    Payroll_Manager    | READ_PAYROLL, WRITE_PAYROLL, RUN_PAYROLL_REPORT
    Department_Lead    | READ_DEPARTMENT_SUMMARY
"""

from collections.abc import Mapping
from enum import Enum
from typing import Protocol

from hr_kernel.exceptions import AccessDeniedError


class Capability(str, Enum):
    """Permissions checked by module services."""

    READ_EMPLOYEES = "read_employees"
    WRITE_EMPLOYEES = "write_employees"
    READ_PAYROLL = "read_payroll"
    WRITE_PAYROLL = "write_payroll"
    RUN_SALARY_ADJUSTMENT = "run_salary_adjustment"
    RUN_PAYROLL_REPORT = "run_payroll_report"
    READ_DEPARTMENT_SUMMARY = "read_department_summary"
    MANAGE_ORGANIZATION = "manage_organization"


class Role(str, Enum):
    HR_ADMINISTRATOR = "HR_Administrator"
    PAYROLL_MANAGER = "Payroll_Manager"
    DEPARTMENT_LEAD = "Department_Lead"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.HR_ADMINISTRATOR: frozenset({
        Capability.READ_EMPLOYEES,
        Capability.WRITE_EMPLOYEES,
        Capability.RUN_SALARY_ADJUSTMENT,
        Capability.MANAGE_ORGANIZATION,
    }),
    Role.PAYROLL_MANAGER: frozenset({
        Capability.READ_PAYROLL,
        Capability.WRITE_PAYROLL,
        Capability.RUN_PAYROLL_REPORT,
    }),
    Role.DEPARTMENT_LEAD: frozenset({
        Capability.READ_DEPARTMENT_SUMMARY,
    }),
}


class CapabilityCheck(Protocol):
    """Answers whether ``actor_id`` holds ``capability``."""

    def __call__(self, actor_id: str, capability: Capability) -> bool: ...


class RoleCapabilityCheck:
    """
    CapabilityCheck backed by an actor -> roles mapping.

    Actors missing from the mapping hold no capabilities.
    """

    def __init__(
        self,
        actor_roles: Mapping[str, Role | frozenset[Role] | set[Role] | tuple[Role, ...]],
        role_capabilities: Mapping[Role, frozenset[Capability]] = ROLE_CAPABILITIES,
    ):
        self._actor_roles: dict[str, frozenset[Role]] = {}
        for actor_id, roles in actor_roles.items():
            if isinstance(roles, Role):
                roles = (roles,)
            self._actor_roles[actor_id] = frozenset(roles)
        self._role_capabilities = role_capabilities

    def roles_for(self, actor_id: str) -> frozenset[Role]:
        return self._actor_roles.get(actor_id, frozenset())

    def __call__(self, actor_id: str, capability: Capability) -> bool:
        return any(
            capability in self._role_capabilities.get(role, frozenset())
            for role in self.roles_for(actor_id)
        )


def allow_all(actor_id: str, capability: Capability) -> bool:
    """CapabilityCheck that grants everything (local scripts)."""
    return True


def require_capability(
    check: CapabilityCheck,
    actor_id: str,
    capability: Capability,
) -> None:
    """Raise AccessDeniedError unless ``check`` grants ``capability``."""
    if not check(actor_id, capability):
        raise AccessDeniedError(actor_id=actor_id, capability=capability.value)
