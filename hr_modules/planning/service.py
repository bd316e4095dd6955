"""
Planning Module Service (``hr_modules.planning.service``).

Responsibility
--------------
Read-only workforce analytics: budget compliance projection, optimal
headcount, retention risk and promotion eligibility.  Reads the ledger
inside a snapshot and delegates every decision to ``hr_engines``.

Architecture position
---------------------
**Modules layer** -- thin orchestration over selectors and pure engines.

Invariants enforced
-------------------
* Never writes: every method runs in ``LedgerStore.snapshot()``, which is
  rolled back on exit.  Called inside a transaction the caller opened, the
  reads join it and leave it open.
* Only active employees count toward any aggregate.
* An unknown department is ``NOT_FOUND``, never a defaulted number.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from hr_config.schema import HRConfig
from hr_engines.budget_compliance import BudgetComplianceChecker, BudgetComplianceResult
from hr_engines.headcount import HeadcountPlanner, HeadcountResult
from hr_engines.promotion import PromotionEvaluator, PromotionRow
from hr_engines.retention import RetentionRiskAnalyzer, RetentionRiskRow
from hr_kernel.domain.capabilities import Capability, CapabilityCheck
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.domain.dtos import EmployeeFilter
from hr_kernel.domain.results import OperationResult
from hr_kernel.logging_config import get_logger
from hr_kernel.selectors.employee_selector import EmployeeSelector
from hr_kernel.services.ledger_store import LedgerStore
from hr_modules._transaction_helpers import access_denied_result, run_read

logger = get_logger("modules.planning.service")


class PlanningService:
    """Workforce analytics over a read-only ledger snapshot."""

    def __init__(
        self,
        session: Session,
        capability_check: CapabilityCheck,
        clock: Clock | None = None,
        config: HRConfig | None = None,
    ):
        self._session = session
        self._check = capability_check
        self._clock = clock or SystemClock()
        self._config = config or HRConfig()

        method = self._config.tenure.method
        self._store = LedgerStore(session, clock=self._clock, tenure_method=method)
        self._employees = EmployeeSelector(session)

        self._budget = BudgetComplianceChecker(self._config.budget)
        self._headcount = HeadcountPlanner(self._config.headcount)
        self._retention = RetentionRiskAnalyzer(self._config.retention, tenure_method=method)
        self._promotion = PromotionEvaluator(self._config.promotion, tenure_method=method)

    def _read(
        self, operation: str, actor_id: str, work, department_id: int | None = None,
    ) -> OperationResult:
        denied = access_denied_result(self._check, actor_id, Capability.READ_EMPLOYEES, operation)
        if denied is not None:
            return denied
        return run_read(self._store, operation, actor_id, work, department_id=department_id)

    def _department_names(self) -> dict[int, str]:
        return {d.id: d.name for d in self._store.list_departments()}

    def check_budget_compliance(
        self,
        actor_id: str,
        department_id: int,
        proposed_percentage: Decimal,
    ) -> OperationResult[BudgetComplianceResult]:
        """Project the department's active salary total after a raise."""

        def work() -> BudgetComplianceResult:
            department = self._store.get_department(department_id)
            stats = self._employees.active_salary_stats(department_id)
            return self._budget.check(
                department_id=department_id,
                current_total=stats.total_salary,
                budget=department.budget,
                proposed_percentage=proposed_percentage,
            )

        return self._read("check_budget_compliance", actor_id, work, department_id)

    def calculate_optimal_headcount(
        self,
        actor_id: str,
        department_id: int,
    ) -> OperationResult[HeadcountResult]:
        """
        Headcount recommendation from workload and budget.

        With ``headcount.count_projects_across_all_departments`` (the
        default) the workload counts every Active project in the ledger.
        """

        def work() -> HeadcountResult:
            department = self._store.get_department(department_id)
            stats = self._employees.active_salary_stats(department_id)
            scope = (
                None
                if self._config.headcount.count_projects_across_all_departments
                else department_id
            )
            projects = self._employees.active_project_count(scope)
            return self._headcount.recommend(
                department_id=department_id,
                current_headcount=stats.headcount,
                average_salary=stats.average_salary,
                budget=department.budget,
                active_projects=projects,
            )

        return self._read("calculate_optimal_headcount", actor_id, work, department_id)

    def get_retention_risk(
        self,
        actor_id: str,
        department_id: int | None = None,
        as_of: date | None = None,
    ) -> OperationResult[list[RetentionRiskRow]]:
        """Retention risk rows, for one department or (``None``) all."""

        def work() -> list[RetentionRiskRow]:
            if department_id is not None:
                self._store.get_department(department_id)
            employees = self._store.read_employees(
                EmployeeFilter(active_only=True, department_id=department_id)
            )
            return self._retention.assess(
                employees=employees,
                as_of=as_of or self._clock.today(),
                department_names=self._department_names(),
            )

        return self._read("get_retention_risk", actor_id, work, department_id)

    def get_promotion_eligibility(
        self,
        actor_id: str,
        department_id: int | None = None,
        as_of: date | None = None,
    ) -> OperationResult[list[PromotionRow]]:
        """Seniority band and raise eligibility per active employee."""

        def work() -> list[PromotionRow]:
            if department_id is not None:
                self._store.get_department(department_id)
            employees = self._store.read_employees(
                EmployeeFilter(active_only=True, department_id=department_id)
            )
            return self._promotion.evaluate(
                employees=employees,
                as_of=as_of or self._clock.today(),
                department_names=self._department_names(),
            )

        return self._read("get_promotion_eligibility", actor_id, work, department_id)
