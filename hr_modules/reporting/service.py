"""
Reporting Module Service (``hr_modules.reporting.service``).

Responsibility
--------------
Payroll and directory reports: the monthly payroll report, the active
employee directory and the department payroll summary.  Aggregation runs
in ``hr_kernel.selectors``; this service checks access, validates the
reporting period and reads inside a snapshot.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from hr_kernel.domain.capabilities import Capability, CapabilityCheck
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.domain.results import OperationResult
from hr_kernel.exceptions import InvalidDateRangeError
from hr_kernel.logging_config import get_logger
from hr_kernel.selectors.employee_selector import DirectoryEntry, EmployeeSelector
from hr_kernel.selectors.payroll_selector import (
    DepartmentPayrollSummaryRow,
    MonthlyPayrollRow,
    PayrollSelector,
)
from hr_kernel.services.ledger_store import LedgerStore
from hr_modules._transaction_helpers import access_denied_result, run_read

logger = get_logger("modules.reporting.service")

MIN_YEAR = 1
MAX_YEAR = 9999


class ReportingService:
    """Read-only payroll reports."""

    def __init__(
        self,
        session: Session,
        capability_check: CapabilityCheck,
        clock: Clock | None = None,
    ):
        self._session = session
        self._check = capability_check
        self._store = LedgerStore(session, clock=clock or SystemClock())
        self._employees = EmployeeSelector(session)
        self._payroll = PayrollSelector(session)

    def generate_monthly_payroll_report(
        self,
        actor_id: str,
        year: int,
        month: int,
    ) -> OperationResult[list[MonthlyPayrollRow]]:
        """
        Per-department payroll totals for one calendar month.

        A month outside 1..12 is ``INVALID_STATE`` (InvalidDateRangeError).
        """
        denied = access_denied_result(
            self._check, actor_id, Capability.RUN_PAYROLL_REPORT, "generate_monthly_payroll_report",
        )
        if denied is not None:
            return denied

        def work() -> list[MonthlyPayrollRow]:
            if not 1 <= month <= 12:
                raise InvalidDateRangeError(year, month, "month must be between 1 and 12")
            if not MIN_YEAR <= year <= MAX_YEAR:
                raise InvalidDateRangeError(year, month, "year out of range")
            rows = self._payroll.monthly_report(year, month)
            logger.info(
                "monthly_payroll_report_generated",
                extra={"year": year, "month": month, "departments": len(rows)},
            )
            return rows

        return run_read(self._store, "generate_monthly_payroll_report", actor_id, work)

    def get_active_employee_directory(
        self,
        actor_id: str,
    ) -> OperationResult[list[DirectoryEntry]]:
        denied = access_denied_result(
            self._check, actor_id, Capability.READ_EMPLOYEES, "get_active_employee_directory",
        )
        if denied is not None:
            return denied
        return run_read(
            self._store,
            "get_active_employee_directory",
            actor_id,
            self._employees.active_directory,
        )

    def get_department_payroll_summary(
        self,
        actor_id: str,
    ) -> OperationResult[list[DepartmentPayrollSummaryRow]]:
        denied = access_denied_result(
            self._check, actor_id, Capability.READ_DEPARTMENT_SUMMARY, "get_department_payroll_summary",
        )
        if denied is not None:
            return denied
        return run_read(
            self._store,
            "get_department_payroll_summary",
            actor_id,
            self._payroll.department_summary,
        )
