"""
Staffing Module Service (``hr_modules.staffing.service``).

Responsibility
--------------
Administrative ledger writes: departments, projects, hiring, transfers,
deactivation and payroll disbursements.  Each public method owns one
ledger transaction.

Invariants enforced
-------------------
* Hires and transfers are audited (INSERT / UPDATE) at commit.
* Employees are deactivated, never deleted.
* Payroll records are append-only; amounts are non-negative.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from hr_config.schema import HRConfig
from hr_kernel.domain.capabilities import Capability, CapabilityCheck
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.domain.dtos import (
    DepartmentSnapshot,
    EmployeeSnapshot,
    PayrollSnapshot,
    ProjectSnapshot,
)
from hr_kernel.domain.results import OperationResult
from hr_kernel.models.project import ProjectStatus
from hr_kernel.services.ledger_store import LedgerStore
from hr_modules._transaction_helpers import access_denied_result, run_atomic


class StaffingService:
    """Organization, employee lifecycle and payroll writes."""

    def __init__(
        self,
        session: Session,
        capability_check: CapabilityCheck,
        clock: Clock | None = None,
        config: HRConfig | None = None,
    ):
        self._session = session
        self._check = capability_check
        config = config or HRConfig()
        self._store = LedgerStore(
            session,
            clock=clock or SystemClock(),
            tenure_method=config.tenure.method,
        )

    def _write(
        self, capability: Capability, operation: str, actor_id: str, work, **scope: int | None,
    ) -> OperationResult:
        denied = access_denied_result(self._check, actor_id, capability, operation)
        if denied is not None:
            return denied
        return run_atomic(self._store, operation, actor_id, work, **scope)

    # =========================================================================
    # Organization
    # =========================================================================

    def create_department(
        self,
        actor_id: str,
        name: str,
        budget: Decimal,
        location: str | None = None,
    ) -> OperationResult[DepartmentSnapshot]:
        return self._write(
            Capability.MANAGE_ORGANIZATION,
            "create_department",
            actor_id,
            lambda: self._store.create_department(name, budget, location),
        )

    def create_project(
        self,
        actor_id: str,
        name: str,
        department_id: int | None,
        status: ProjectStatus | str = ProjectStatus.ACTIVE,
    ) -> OperationResult[ProjectSnapshot]:
        return self._write(
            Capability.MANAGE_ORGANIZATION,
            "create_project",
            actor_id,
            lambda: self._store.create_project(name, department_id, status),
            department_id=department_id,
        )

    def set_project_status(
        self,
        actor_id: str,
        project_id: int,
        status: ProjectStatus | str,
    ) -> OperationResult[ProjectSnapshot]:
        return self._write(
            Capability.MANAGE_ORGANIZATION,
            "set_project_status",
            actor_id,
            lambda: self._store.set_project_status(project_id, status),
        )

    # =========================================================================
    # Employee lifecycle
    # =========================================================================

    def hire_employee(
        self,
        actor_id: str,
        first_name: str,
        last_name: str,
        email: str,
        hire_date: date,
        salary: Decimal,
        department_id: int | None = None,
    ) -> OperationResult[EmployeeSnapshot]:
        return self._write(
            Capability.WRITE_EMPLOYEES,
            "hire_employee",
            actor_id,
            lambda: self._store.hire_employee(
                first_name=first_name,
                last_name=last_name,
                email=email,
                hire_date=hire_date,
                salary=salary,
                department_id=department_id,
            ),
            department_id=department_id,
        )

    def transfer_employee(
        self,
        actor_id: str,
        employee_id: int,
        new_department_id: int | None,
    ) -> OperationResult[EmployeeSnapshot]:
        return self._write(
            Capability.WRITE_EMPLOYEES,
            "transfer_employee",
            actor_id,
            lambda: self._store.apply_transfer(employee_id, new_department_id),
            employee_id=employee_id,
        )

    def deactivate_employee(
        self,
        actor_id: str,
        employee_id: int,
    ) -> OperationResult[EmployeeSnapshot]:
        return self._write(
            Capability.WRITE_EMPLOYEES,
            "deactivate_employee",
            actor_id,
            lambda: self._store.deactivate_employee(employee_id),
            employee_id=employee_id,
        )

    # =========================================================================
    # Payroll
    # =========================================================================

    def record_payroll(
        self,
        actor_id: str,
        employee_id: int,
        pay_date: date,
        base_salary: Decimal,
        tax: Decimal,
        bonus: Decimal = Decimal("0"),
        deductions: Decimal = Decimal("0"),
    ) -> OperationResult[PayrollSnapshot]:
        return self._write(
            Capability.WRITE_PAYROLL,
            "record_payroll",
            actor_id,
            lambda: self._store.record_payroll(
                employee_id=employee_id,
                pay_date=pay_date,
                base_salary=base_salary,
                tax=tax,
                bonus=bonus,
                deductions=deductions,
            ),
            employee_id=employee_id,
        )
