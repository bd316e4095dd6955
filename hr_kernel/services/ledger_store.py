"""
LedgerStore -- the transactional employee ledger.

Responsibility:
    The only component that writes employees, departments, projects and
    payroll records.  Owns the transaction boundary for every mutating HR
    operation: begin, read (optionally locking), apply, commit or roll back.

Architecture position:
    Kernel > Services -- imperative shell.  Module services
    (``hr_modules/*``) drive a LedgerStore; pure engines never see it.

Invariants enforced:
    - All-or-nothing: a batch of salary updates either commits as a whole
      or leaves every row untouched.  Any error inside ``transaction()``
      rolls the whole transaction back.
    - Writes are invisible to other transactions until commit (PostgreSQL
      engines run at REPEATABLE READ; SQLite is serialisable).
    - Every committed salary / department change has exactly one
      AuditEntry per employee row (first old value, last new value),
      written by AuditRecorder inside the committing transaction.  The
      flush-time guard in ``db/immutability.py`` rejects changes that did
      not pass through ``apply_update`` / ``apply_transfer``.
    - Salary stays strictly positive; payroll amounts stay non-negative.

Failure modes:
    - EmployeeNotFoundError / DepartmentNotFoundError / ProjectNotFoundError
      for unknown ids.
    - InactiveEmployeeError when mutating a deactivated employee.
    - NonPositiveSalaryError, NegativeAmountError, DuplicateEmailError for
      constraint violations.
    - TransactionFailureError when the database rejects the commit.

Usage:
    store = LedgerStore(session, clock=clock)
    with store.transaction(actor_id="hr-admin"):
        for emp in store.read_employees(EmployeeFilter(department_id=2), for_update=True):
            store.apply_update(emp.id, emp.salary + Decimal("1000"))
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hr_kernel.db.immutability import OPEN_TRANSACTION_KEY, PENDING_AUDIT_KEY
from hr_kernel.db.types import ZERO, round_money, to_decimal
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.domain.dtos import (
    DepartmentSnapshot,
    EmployeeFilter,
    EmployeeSnapshot,
    PayrollSnapshot,
    ProjectSnapshot,
)
from hr_kernel.domain.tenure import TenureMethod, tenure_years
from hr_kernel.exceptions import (
    DepartmentNotFoundError,
    DuplicateEmailError,
    EmployeeNotFoundError,
    HRKernelError,
    InactiveEmployeeError,
    NegativeAmountError,
    NonPositiveSalaryError,
    ProjectNotFoundError,
    TransactionFailureError,
)
from hr_kernel.logging_config import get_logger
from hr_kernel.models.department import Department
from hr_kernel.models.employee import Employee
from hr_kernel.models.payroll import PayrollRecord
from hr_kernel.models.project import Project, ProjectStatus
from hr_kernel.services.audit_recorder import AuditRecorder
from hr_kernel.services.base import BaseService

logger = get_logger("services.ledger_store")

SYSTEM_ACTOR = "system"


@dataclass
class PendingChange:
    """Salary / department of one employee before and after this transaction."""

    old_salary: Decimal | None
    old_department_id: int | None
    new_salary: Decimal | None
    new_department_id: int | None
    actor_id: str


def _employee_dto(row: Employee) -> EmployeeSnapshot:
    return EmployeeSnapshot(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        hire_date=row.hire_date,
        salary=row.salary,
        department_id=row.department_id,
        is_active=row.is_active,
    )


def _department_dto(row: Department) -> DepartmentSnapshot:
    return DepartmentSnapshot(
        id=row.id,
        name=row.name,
        budget=row.budget,
        location=row.location,
    )


def _project_dto(row: Project) -> ProjectSnapshot:
    return ProjectSnapshot(
        id=row.id,
        department_id=row.department_id,
        name=row.name,
        status=row.status,
    )


def _payroll_dto(row: PayrollRecord) -> PayrollSnapshot:
    return PayrollSnapshot(
        id=row.id,
        employee_id=row.employee_id,
        pay_date=row.pay_date,
        base_salary=row.base_salary,
        bonus=row.bonus,
        deductions=row.deductions,
        tax=row.tax,
    )


def _non_negative(field: str, value: Decimal | int | str) -> Decimal:
    amount = round_money(to_decimal(value))
    if amount < ZERO:
        raise NegativeAmountError(field=field, amount=str(amount))
    return amount


class LedgerStore(BaseService):
    """
    Transactional store over the employee ledger.

    Contract:
        Reads return frozen DTOs, never ORM instances.  Writes flush
        immediately so constraint errors surface at the offending call;
        nothing is visible to other transactions until ``commit()``.

    Guarantees:
        - ``commit()`` records one audit entry per changed employee before
          committing, in the same database transaction.
        - ``rollback()`` discards every pending write and pending audit.

    Non-goals:
        - Does NOT check capabilities (module services do).
        - Does NOT evaluate business rules (hr_engines does).
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        audit_recorder: AuditRecorder | None = None,
        tenure_method: TenureMethod = TenureMethod.ELAPSED,
        actor_id: str = SYSTEM_ACTOR,
    ):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._recorder = audit_recorder or AuditRecorder(session, self._clock)
        self._tenure_method = tenure_method
        self._actor_id = actor_id

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def tenure_method(self) -> TenureMethod:
        return self._tenure_method

    # ------------------------------------------------------------------
    # Transaction boundary
    # ------------------------------------------------------------------

    def _pending(self) -> dict[int, PendingChange]:
        return self.session.info.setdefault(PENDING_AUDIT_KEY, {})

    def _actor(self, actor_id: str | None) -> str:
        return actor_id or self._actor_id

    def in_open_transaction(self) -> bool:
        """
        True when the session carries work a caller has not committed yet:
        an explicit ``begin_transaction``, pending audit or unflushed
        ORM changes.  An idle autobegun transaction does not count.
        """
        info = self.session.info
        return bool(
            info.get(OPEN_TRANSACTION_KEY)
            or info.get(PENDING_AUDIT_KEY)
            or self.session.new
            or self.session.dirty
            or self.session.deleted
        )

    def begin_transaction(self, actor_id: str | None = None) -> None:
        """
        Start a transaction (no-op if one is already open).

        ``actor_id`` becomes the default actor for writes until the next
        ``begin_transaction``.
        """
        if actor_id is not None:
            self._actor_id = actor_id
        if not self.session.in_transaction():
            self.session.begin()
        self.session.info[OPEN_TRANSACTION_KEY] = True
        logger.debug("ledger_transaction_started", extra={"actor_id": self._actor_id})

    def commit(self) -> int:
        """
        Record pending audit entries and commit.

        Returns:
            Number of audit entries written.

        Raises:
            TransactionFailureError: The database rejected the flush or
                commit.  The transaction has been rolled back.
        """
        pending = self._pending()
        changed = len(pending)
        recorded = 0
        try:
            self.session.flush()
            for employee_id in sorted(pending):
                change = pending[employee_id]
                entry = self._recorder.record_change(
                    employee_id=employee_id,
                    old_salary=change.old_salary,
                    old_department_id=change.old_department_id,
                    new_salary=change.new_salary,
                    new_department_id=change.new_department_id,
                    actor_id=change.actor_id,
                )
                if entry is not None:
                    recorded += 1
            pending.clear()
            self.session.commit()
        except HRKernelError:
            self.rollback()
            raise
        except SQLAlchemyError as exc:
            self.rollback()
            logger.error(
                "ledger_commit_failed",
                extra={"error_type": type(exc).__name__},
                exc_info=True,
            )
            raise TransactionFailureError(operation="commit", reason=str(exc)) from exc

        logger.info(
            "ledger_committed",
            extra={"employees_changed": changed, "audit_entries": recorded},
        )
        return recorded

    def rollback(self) -> None:
        """Discard every uncommitted write and pending audit entry."""
        discarded = len(self.session.info.pop(PENDING_AUDIT_KEY, {}))
        self.session.rollback()
        logger.info("ledger_rolled_back", extra={"employees_discarded": discarded})

    @contextmanager
    def transaction(self, actor_id: str | None = None) -> Iterator["LedgerStore"]:
        """
        Commit on normal exit, roll back on any exception.

        The exception is re-raised after the rollback.  Inside a
        transaction the caller already opened, the block runs in a
        savepoint instead and leaves the commit to the caller.
        """
        if self.in_open_transaction():
            with self._savepoint(actor_id):
                yield self
            return
        self.begin_transaction(actor_id)
        try:
            yield self
        except Exception:
            self.rollback()
            raise
        self.commit()

    @contextmanager
    def _savepoint(self, actor_id: str | None) -> Iterator["LedgerStore"]:
        """
        Nested unit of work.

        On success the block's writes and pending audit stay in the
        enclosing transaction.  On failure the database rolls back to the
        savepoint and the pending audit registry is restored to its state
        before the block.
        """
        previous_actor = self._actor_id
        if actor_id is not None:
            self._actor_id = actor_id
        saved = {eid: replace(change) for eid, change in self._pending().items()}
        savepoint = self.session.begin_nested()
        logger.debug("ledger_savepoint_started", extra={"employees_pending": len(saved)})
        try:
            yield self
            self.session.flush()
        except Exception as exc:
            savepoint.rollback()
            self.session.info[PENDING_AUDIT_KEY] = saved
            logger.info("ledger_savepoint_rolled_back", extra={"employees_pending": len(saved)})
            if isinstance(exc, SQLAlchemyError):
                raise TransactionFailureError(operation="savepoint", reason=str(exc)) from exc
            raise
        else:
            savepoint.commit()
        finally:
            self._actor_id = previous_actor

    @contextmanager
    def snapshot(self) -> Iterator["LedgerStore"]:
        """
        Read-only scope; always rolled back, even on success.

        Inside a transaction the caller already opened, reads join it
        and nothing is rolled back.
        """
        if self.in_open_transaction():
            yield self
            return
        self.begin_transaction()
        try:
            yield self
        finally:
            self.session.info.pop(PENDING_AUDIT_KEY, None)
            self.session.rollback()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_employees(
        self,
        employee_filter: EmployeeFilter | None = None,
        for_update: bool = False,
    ) -> list[EmployeeSnapshot]:
        """
        Employees matching ``employee_filter``, ordered by id.

        With ``for_update`` the selected rows are locked until the
        transaction ends (SELECT ... FOR UPDATE where supported).
        """
        f = employee_filter or EmployeeFilter()
        stmt = select(Employee).order_by(Employee.id)
        if f.active_only:
            stmt = stmt.where(Employee.is_active.is_(True))
        if f.department_id is not None:
            stmt = stmt.where(Employee.department_id == f.department_id)
        if f.salary_below is not None:
            stmt = stmt.where(Employee.salary < f.salary_below)
        if f.salary_above is not None:
            stmt = stmt.where(Employee.salary > f.salary_above)
        if for_update:
            stmt = stmt.with_for_update()

        rows = self.session.execute(stmt).scalars().all()

        if f.min_tenure_years is not None:
            rows = [
                r for r in rows
                if tenure_years(r.hire_date, f.as_of, self._tenure_method) >= f.min_tenure_years
            ]
        return [_employee_dto(r) for r in rows]

    def _employee_row(self, employee_id: int, for_update: bool = False) -> Employee:
        row = self.session.get(Employee, employee_id, with_for_update=for_update or None)
        if row is None:
            raise EmployeeNotFoundError(employee_id)
        return row

    def _active_employee_row(self, employee_id: int) -> Employee:
        row = self._employee_row(employee_id, for_update=True)
        if not row.is_active:
            raise InactiveEmployeeError(employee_id)
        return row

    def _department_row(self, department_id: int) -> Department:
        row = self.session.get(Department, department_id)
        if row is None:
            raise DepartmentNotFoundError(department_id)
        return row

    def get_employee(self, employee_id: int) -> EmployeeSnapshot:
        return _employee_dto(self._employee_row(employee_id))

    def get_department(self, department_id: int) -> DepartmentSnapshot:
        return _department_dto(self._department_row(department_id))

    def list_departments(self) -> list[DepartmentSnapshot]:
        rows = self.session.execute(select(Department).order_by(Department.id)).scalars()
        return [_department_dto(r) for r in rows]

    def list_projects(
        self,
        department_id: int | None = None,
        status: ProjectStatus | str | None = None,
    ) -> list[ProjectSnapshot]:
        stmt = select(Project).order_by(Project.id)
        if department_id is not None:
            stmt = stmt.where(Project.department_id == department_id)
        if status is not None:
            stmt = stmt.where(Project.status == ProjectStatus.normalize(status).value)
        return [_project_dto(r) for r in self.session.execute(stmt).scalars()]

    # ------------------------------------------------------------------
    # Audited employee writes
    # ------------------------------------------------------------------

    def _register(self, row: Employee, actor_id: str) -> PendingChange:
        """Register ``row`` for audit before its audited fields change."""
        pending = self._pending()
        change = pending.get(row.id)
        if change is None:
            change = PendingChange(
                old_salary=row.salary,
                old_department_id=row.department_id,
                new_salary=row.salary,
                new_department_id=row.department_id,
                actor_id=actor_id,
            )
            pending[row.id] = change
        change.actor_id = actor_id
        return change

    def apply_update(
        self,
        employee_id: int,
        new_salary: Decimal | int | str,
        actor_id: str | None = None,
    ) -> EmployeeSnapshot:
        """
        Set an employee's salary.

        Raises:
            EmployeeNotFoundError: Unknown id.
            InactiveEmployeeError: Employee is deactivated.
            NonPositiveSalaryError: ``new_salary`` <= 0.
        """
        actor = self._actor(actor_id)
        salary = round_money(to_decimal(new_salary))
        row = self._active_employee_row(employee_id)
        if salary <= ZERO:
            raise NonPositiveSalaryError(employee_id=employee_id, salary=str(salary))

        change = self._register(row, actor)
        old_salary = row.salary
        row.salary = salary
        row.updated_by = actor
        change.new_salary = salary
        self.session.flush()

        logger.debug(
            "salary_updated",
            extra={
                "employee_id": employee_id,
                "old_salary": old_salary,
                "new_salary": salary,
            },
        )
        return _employee_dto(row)

    def apply_transfer(
        self,
        employee_id: int,
        new_department_id: int | None,
        actor_id: str | None = None,
    ) -> EmployeeSnapshot:
        """
        Move an employee to another department (``None`` unassigns).

        Raises:
            EmployeeNotFoundError, InactiveEmployeeError,
            DepartmentNotFoundError.
        """
        actor = self._actor(actor_id)
        row = self._active_employee_row(employee_id)
        if new_department_id is not None:
            self._department_row(new_department_id)

        change = self._register(row, actor)
        old_department_id = row.department_id
        row.department_id = new_department_id
        row.updated_by = actor
        change.new_department_id = new_department_id
        self.session.flush()

        logger.info(
            "employee_transferred",
            extra={
                "employee_id": employee_id,
                "from_department_id": old_department_id,
                "to_department_id": new_department_id,
            },
        )
        return _employee_dto(row)

    def hire_employee(
        self,
        first_name: str,
        last_name: str,
        email: str,
        hire_date: date,
        salary: Decimal | int | str,
        department_id: int | None = None,
        actor_id: str | None = None,
    ) -> EmployeeSnapshot:
        """
        Add an employee.  Audited as an INSERT at commit.

        Raises:
            NonPositiveSalaryError, DuplicateEmailError,
            DepartmentNotFoundError.
        """
        actor = self._actor(actor_id)
        amount = round_money(to_decimal(salary))
        if amount <= ZERO:
            raise NonPositiveSalaryError(employee_id=None, salary=str(amount))
        if department_id is not None:
            self._department_row(department_id)
        existing = self.session.execute(
            select(Employee.id).where(Employee.email == email)
        ).scalar_one_or_none()
        if existing is not None:
            raise DuplicateEmailError(email)

        row = Employee(
            first_name=first_name,
            last_name=last_name,
            email=email,
            hire_date=hire_date,
            salary=amount,
            department_id=department_id,
            is_active=True,
            created_by=actor,
        )
        self.session.add(row)
        self.session.flush()

        self._pending()[row.id] = PendingChange(
            old_salary=None,
            old_department_id=None,
            new_salary=amount,
            new_department_id=department_id,
            actor_id=actor,
        )

        logger.info(
            "employee_hired",
            extra={"employee_id": row.id, "department_id": department_id},
        )
        return _employee_dto(row)

    def deactivate_employee(
        self,
        employee_id: int,
        actor_id: str | None = None,
    ) -> EmployeeSnapshot:
        """
        Logical delete: the row stays for audit history.

        Raises:
            EmployeeNotFoundError, InactiveEmployeeError (already inactive).
        """
        actor = self._actor(actor_id)
        row = self._active_employee_row(employee_id)
        row.is_active = False
        row.updated_by = actor
        self.session.flush()
        logger.info("employee_deactivated", extra={"employee_id": employee_id})
        return _employee_dto(row)

    # ------------------------------------------------------------------
    # Organization and payroll writes
    # ------------------------------------------------------------------

    def create_department(
        self,
        name: str,
        budget: Decimal | int | str,
        location: str | None = None,
        actor_id: str | None = None,
    ) -> DepartmentSnapshot:
        """Raises NegativeAmountError for a negative budget."""
        row = Department(
            name=name,
            budget=_non_negative("budget", budget),
            location=location,
            created_by=self._actor(actor_id),
        )
        self.session.add(row)
        self.session.flush()
        logger.info("department_created", extra={"department_id": row.id, "department_name": name})
        return _department_dto(row)

    def create_project(
        self,
        name: str,
        department_id: int | None,
        status: ProjectStatus | str = ProjectStatus.ACTIVE,
        actor_id: str | None = None,
    ) -> ProjectSnapshot:
        """Raises DepartmentNotFoundError, InvalidProjectStatusError."""
        normalized = ProjectStatus.normalize(status)
        if department_id is not None:
            self._department_row(department_id)
        row = Project(
            name=name,
            department_id=department_id,
            status=normalized.value,
            created_by=self._actor(actor_id),
        )
        self.session.add(row)
        self.session.flush()
        logger.info(
            "project_created",
            extra={"project_id": row.id, "department_id": department_id, "status": normalized.value},
        )
        return _project_dto(row)

    def set_project_status(
        self,
        project_id: int,
        status: ProjectStatus | str,
        actor_id: str | None = None,
    ) -> ProjectSnapshot:
        """Raises ProjectNotFoundError, InvalidProjectStatusError."""
        normalized = ProjectStatus.normalize(status)
        row = self.session.get(Project, project_id)
        if row is None:
            raise ProjectNotFoundError(project_id)
        row.status = normalized.value
        row.updated_by = self._actor(actor_id)
        self.session.flush()
        return _project_dto(row)

    def record_payroll(
        self,
        employee_id: int,
        pay_date: date,
        base_salary: Decimal | int | str,
        tax: Decimal | int | str,
        bonus: Decimal | int | str = ZERO,
        deductions: Decimal | int | str = ZERO,
        actor_id: str | None = None,
    ) -> PayrollSnapshot:
        """
        Append a payroll disbursement.

        Raises:
            EmployeeNotFoundError, NegativeAmountError.
        """
        self._employee_row(employee_id)
        row = PayrollRecord(
            employee_id=employee_id,
            pay_date=pay_date,
            base_salary=_non_negative("base_salary", base_salary),
            bonus=_non_negative("bonus", bonus),
            deductions=_non_negative("deductions", deductions),
            tax=_non_negative("tax", tax),
            recorded_by=self._actor(actor_id),
        )
        self.session.add(row)
        self.session.flush()
        logger.info(
            "payroll_recorded",
            extra={"payroll_id": row.id, "employee_id": employee_id, "pay_date": pay_date},
        )
        return _payroll_dto(row)
