"""
Compensation Module Service (``hr_modules.compensation.service``).

Responsibility
--------------
Salary adjustment runs and performance bonus calculation.  Pure decisions
come from ``hr_engines.salary_adjustment`` and ``hr_engines.bonus``;
persistence goes through ``hr_kernel.services.ledger_store``.

Architecture position
---------------------
**Modules layer** -- thin orchestration.  ``CompensationService`` is the
sole public entry point for compensation operations.

Invariants enforced
-------------------
* Each adjustment run owns one ledger transaction: selection (with row
  locks), computation and every salary write commit together or not at
  all.  A failure on any employee leaves every salary unchanged.
* Every committed salary change carries exactly one audit entry per
  employee (recorded by the ledger store at commit).
* Strict budget mode: when enabled, a run that would leave any affected
  department's active salary total above its budget fails with
  ``BudgetExceededError`` and rolls back.
* Capability check before any ledger access.

Failure modes
-------------
* Kernel errors (unknown department, inactive employee, non-positive
  salary, budget exceeded, commit failure) -> failed ``OperationResult``;
  transaction rolled back.
* Unexpected exception -> transaction rolled back, exception re-raised.

Usage::

    service = CompensationService(session, capability_check, clock=clock)
    result = service.adjust_salaries(
        actor_id="hr-admin", percentage_increase=Decimal("10"), department_id=2,
    )
    if result.is_success:
        plan = result.value
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from hr_config.schema import HRConfig
from hr_engines.bonus import BonusCalculator, BonusResult
from hr_engines.salary_adjustment import (
    AdjustmentParameters,
    AdjustmentPlan,
    SalaryAdjustmentEngine,
)
from hr_kernel.domain.capabilities import Capability, CapabilityCheck
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.domain.dtos import EmployeeFilter
from hr_kernel.domain.results import OperationResult
from hr_kernel.exceptions import BudgetExceededError, InactiveEmployeeError
from hr_kernel.logging_config import get_logger
from hr_kernel.selectors.employee_selector import EmployeeSelector
from hr_kernel.services.ledger_store import LedgerStore
from hr_modules._transaction_helpers import access_denied_result, run_atomic, run_read

logger = get_logger("modules.compensation.service")


class CompensationService:
    """
    Orchestrates salary adjustments and bonus calculation.

    Contract
    --------
    * Every public method returns ``OperationResult``; callers inspect
      ``result.is_success`` / ``result.status``.

    Non-goals
    ---------
    * Does NOT pay bonuses; ``calculate_bonus`` is a read-only projection.
      Disbursements are recorded through ``StaffingService.record_payroll``.
    """

    def __init__(
        self,
        session: Session,
        capability_check: CapabilityCheck,
        clock: Clock | None = None,
        config: HRConfig | None = None,
    ):
        self._session = session
        self._check = capability_check  # Required: access always checked
        self._clock = clock or SystemClock()
        self._config = config or HRConfig()

        self._store = LedgerStore(
            session,
            clock=self._clock,
            tenure_method=self._config.tenure.method,
        )
        self._employees = EmployeeSelector(session)

        # Stateless engines
        self._adjustment = SalaryAdjustmentEngine(
            self._config.adjustment, tenure_method=self._config.tenure.method,
        )
        self._bonus = BonusCalculator(
            self._config.bonus, tenure_method=self._config.tenure.method,
        )

    # =========================================================================
    # Salary adjustment
    # =========================================================================

    def adjust_salaries(
        self,
        actor_id: str,
        percentage_increase: Decimal,
        max_adjustment: Decimal | None = None,
        department_id: int | None = None,
        enforce_budget: bool | None = None,
    ) -> OperationResult[AdjustmentPlan]:
        """
        Raise salaries by a percentage, optionally capped and limited to
        one department.
        """
        return self.enhanced_adjust_salaries(
            actor_id=actor_id,
            percentage_increase=percentage_increase,
            max_adjustment=max_adjustment,
            department_id=department_id,
            enforce_budget=enforce_budget,
            operation="adjust_salaries",
        )

    def enhanced_adjust_salaries(
        self,
        actor_id: str,
        percentage_increase: Decimal,
        max_adjustment: Decimal | None = None,
        min_salary_threshold: Decimal | None = None,
        max_salary_threshold: Decimal | None = None,
        tenure_years: int | None = None,
        department_id: int | None = None,
        enforce_budget: bool | None = None,
        operation: str = "enhanced_adjust_salaries",
    ) -> OperationResult[AdjustmentPlan]:
        """
        Rule-based salary adjustment (see ``hr_engines.salary_adjustment``).

        ``enforce_budget`` defaults to the configured budget policy.
        """
        denied = access_denied_result(
            self._check, actor_id, Capability.RUN_SALARY_ADJUSTMENT, operation,
        )
        if denied is not None:
            return denied

        strict = self._config.budget.enforce_budget if enforce_budget is None else enforce_budget

        def work() -> AdjustmentPlan:
            parameters = AdjustmentParameters(
                percentage_increase=percentage_increase,
                max_adjustment=max_adjustment,
                min_salary_threshold=min_salary_threshold,
                max_salary_threshold=max_salary_threshold,
                tenure_years=tenure_years,
                department_id=department_id,
            )
            if department_id is not None:
                self._store.get_department(department_id)

            as_of = self._clock.today()
            candidates = self._store.read_employees(
                EmployeeFilter(active_only=True, department_id=department_id),
                for_update=True,
            )
            plan = self._adjustment.plan(
                employees=candidates, parameters=parameters, as_of=as_of,
            )

            logger.info("salary_adjustment_started", extra={
                "eligible": len(plan.decisions),
                "percentage_increase": str(parameters.percentage_increase),
                "enforce_budget": strict,
            })

            for decision in plan.decisions:
                self._store.apply_update(decision.employee_id, decision.new_salary)

            if strict:
                self._enforce_budgets(plan)

            return plan

        return run_atomic(self._store, operation, actor_id, work, department_id=department_id)

    def _enforce_budgets(self, plan: AdjustmentPlan) -> None:
        """Raise BudgetExceededError for the first department over budget."""
        for department_id in plan.department_ids:
            department = self._store.get_department(department_id)
            stats = self._employees.active_salary_stats(department_id)
            if stats.total_salary > department.budget:
                raise BudgetExceededError(
                    department_id=department_id,
                    proposed_total=str(stats.total_salary),
                    budget=str(department.budget),
                )

    # =========================================================================
    # Bonus
    # =========================================================================

    def calculate_bonus(
        self,
        actor_id: str,
        employee_id: int,
        performance_rating: int,
        base_bonus_percentage: Decimal | None = None,
        as_of: date | None = None,
    ) -> OperationResult[BonusResult]:
        """Performance bonus projection for one active employee."""
        denied = access_denied_result(
            self._check, actor_id, Capability.READ_EMPLOYEES, "calculate_bonus",
        )
        if denied is not None:
            return denied

        def work() -> BonusResult:
            employee = self._store.get_employee(employee_id)
            if not employee.is_active:
                raise InactiveEmployeeError(employee_id)
            return self._bonus.calculate(
                salary=employee.salary,
                hire_date=employee.hire_date,
                as_of=as_of or self._clock.today(),
                performance_rating=performance_rating,
                base_percentage=base_bonus_percentage,
                employee_id=employee_id,
            )

        return run_read(self._store, "calculate_bonus", actor_id, work, employee_id=employee_id)
