"""
Typed Exception Hierarchy for the HR Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Salary and payroll operations must fail precisely.  Callers (an API layer,
a CLI, a batch job) need to know WHAT failed and WHICH record caused it
without parsing message strings.

Every exception in this module:
  1. Is a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Has a KIND class attribute (the coarse failure category that
     ``OperationResult`` reports back to callers)
  4. Carries structured DATA as attributes (offending id / field)

Example - WRONG way to handle errors:
    try:
        store.apply_update(employee_id, salary, actor_id="hr-1")
    except Exception as e:
        if "inactive" in str(e):  # FRAGILE
            ...

Example - RIGHT way:
    try:
        store.apply_update(employee_id, salary, actor_id="hr-1")
    except InactiveEmployeeError as e:
        log.warning("inactive", extra={"employee_id": e.employee_id})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    HRKernelError (base)
    |
    +-- NotFoundError                       kind=NOT_FOUND
    |   +-- EmployeeNotFoundError
    |   +-- DepartmentNotFoundError
    |   +-- ProjectNotFoundError
    |
    +-- InvalidStateError                   kind=INVALID_STATE
    |   +-- InactiveEmployeeError
    |   +-- InvalidDateRangeError
    |
    +-- ConstraintViolationError            kind=CONSTRAINT_VIOLATION
    |   +-- NonPositiveSalaryError
    |   +-- NegativeAmountError
    |   +-- BudgetExceededError
    |   +-- InvalidProjectStatusError
    |   +-- InvalidParameterError
    |   +-- DuplicateEmailError
    |
    +-- TransactionFailureError             kind=TRANSACTION_FAILURE
    |
    +-- AccessDeniedError                   kind=ACCESS_DENIED
    |
    +-- ImmutabilityError                   kind=INTEGRITY
        +-- ImmutabilityViolationError
        +-- UnauditedMutationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category      | Code                      | When Raised
--------------|---------------------------|-------------------------------------
NotFound      | EMPLOYEE_NOT_FOUND        | Employee id doesn't exist
              | DEPARTMENT_NOT_FOUND      | Department id doesn't exist
              | PROJECT_NOT_FOUND         | Project id doesn't exist
--------------|---------------------------|-------------------------------------
InvalidState  | EMPLOYEE_INACTIVE         | Mutating a deactivated employee
              | INVALID_DATE_RANGE        | Malformed report period
--------------|---------------------------|-------------------------------------
Constraint    | NON_POSITIVE_SALARY       | Salary would become <= 0
              | NEGATIVE_AMOUNT           | Negative payroll amount / budget
              | BUDGET_EXCEEDED           | Strict-mode adjustment over budget
              | INVALID_PROJECT_STATUS    | Status outside the closed set
              | INVALID_PARAMETER         | Malformed operation parameter
              | DUPLICATE_EMAIL           | Email already used
--------------|---------------------------|-------------------------------------
Transaction   | TRANSACTION_FAILED        | Store rejected the commit
--------------|---------------------------|-------------------------------------
Access        | ACCESS_DENIED             | Capability check refused the actor
--------------|---------------------------|-------------------------------------
Integrity     | IMMUTABILITY_VIOLATION    | Update/delete of append-only rows
              | UNAUDITED_MUTATION        | Salary/department written outside
              |                           | the ledger store

Integrity errors signal programming errors (a write path that bypasses the
ledger store).  They propagate as exceptions instead of being folded into
an ``OperationResult``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Coarse failure categories reported to callers."""

    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    CONSTRAINT_VIOLATION = "constraint_violation"
    TRANSACTION_FAILURE = "transaction_failure"
    ACCESS_DENIED = "access_denied"
    INTEGRITY = "integrity"


class HRKernelError(Exception):
    """
    Base exception for all HR kernel errors.

    All subclasses must define ``code`` and inherit a ``kind``.
    """

    code: str = "HR_KERNEL_ERROR"
    kind: ErrorKind = ErrorKind.CONSTRAINT_VIOLATION

    @property
    def details(self) -> dict:
        """Structured context carried by the exception."""
        return {
            k: v for k, v in vars(self).items()
            if not k.startswith("_") and k != "args"
        }


# Not-found exceptions


class NotFoundError(HRKernelError):
    """Base exception for unknown identities."""

    code: str = "NOT_FOUND"
    kind: ErrorKind = ErrorKind.NOT_FOUND


class EmployeeNotFoundError(NotFoundError):
    """Employee with given ID was not found."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


class DepartmentNotFoundError(NotFoundError):
    """Department with given ID was not found."""

    code: str = "DEPARTMENT_NOT_FOUND"

    def __init__(self, department_id: int):
        self.department_id = department_id
        super().__init__(f"Department not found: {department_id}")


class ProjectNotFoundError(NotFoundError):
    """Project with given ID was not found."""

    code: str = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


# Invalid-state exceptions


class InvalidStateError(HRKernelError):
    """Base exception for operations not allowed in the current state."""

    code: str = "INVALID_STATE"
    kind: ErrorKind = ErrorKind.INVALID_STATE


class InactiveEmployeeError(InvalidStateError):
    """Employee is deactivated and cannot be mutated."""

    code: str = "EMPLOYEE_INACTIVE"

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} is inactive")


class InvalidDateRangeError(InvalidStateError):
    """Requested reporting period is malformed."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, year: int, month: int, reason: str):
        self.year = year
        self.month = month
        self.reason = reason
        super().__init__(f"Invalid period {year}-{month}: {reason}")


# Constraint exceptions


class ConstraintViolationError(HRKernelError):
    """Base exception for business constraint violations."""

    code: str = "CONSTRAINT_VIOLATION"
    kind: ErrorKind = ErrorKind.CONSTRAINT_VIOLATION


class NonPositiveSalaryError(ConstraintViolationError):
    """Salary must stay strictly positive."""

    code: str = "NON_POSITIVE_SALARY"

    def __init__(self, employee_id: int | None, salary: str):
        self.employee_id = employee_id
        self.salary = salary
        super().__init__(
            f"Salary must be positive for employee {employee_id}: {salary}"
        )


class NegativeAmountError(ConstraintViolationError):
    """A monetary field that must be >= 0 was negative."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, field: str, amount: str):
        self.field = field
        self.amount = amount
        super().__init__(f"{field} cannot be negative: {amount}")


class BudgetExceededError(ConstraintViolationError):
    """
    Salary adjustment would push a department over its budget.

    Raised only when the adjustment runs in strict budget mode.
    """

    code: str = "BUDGET_EXCEEDED"

    def __init__(self, department_id: int, proposed_total: str, budget: str):
        self.department_id = department_id
        self.proposed_total = proposed_total
        self.budget = budget
        super().__init__(
            f"Department {department_id} proposed salary total "
            f"{proposed_total} exceeds budget {budget}"
        )


class InvalidProjectStatusError(ConstraintViolationError):
    """Project status text does not map to a known status."""

    code: str = "INVALID_PROJECT_STATUS"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Unknown project status: {status!r}")


class InvalidParameterError(ConstraintViolationError):
    """An operation parameter is outside its allowed range."""

    code: str = "INVALID_PARAMETER"

    def __init__(self, parameter: str, value: str, reason: str):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {parameter}={value}: {reason}")


class DuplicateEmailError(ConstraintViolationError):
    """Employee email must be unique."""

    code: str = "DUPLICATE_EMAIL"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already in use: {email}")


# Transaction exceptions


class TransactionFailureError(HRKernelError):
    """The underlying store rejected the commit."""

    code: str = "TRANSACTION_FAILED"
    kind: ErrorKind = ErrorKind.TRANSACTION_FAILURE

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Transaction for {operation} failed: {reason}")


# Access exceptions


class AccessDeniedError(HRKernelError):
    """Actor lacks the capability required by the operation."""

    code: str = "ACCESS_DENIED"
    kind: ErrorKind = ErrorKind.ACCESS_DENIED

    def __init__(self, actor_id: str, capability: str):
        self.actor_id = actor_id
        self.capability = capability
        super().__init__(f"Actor {actor_id} lacks capability {capability}")


# Integrity exceptions


class ImmutabilityError(HRKernelError):
    """Base exception for write-path integrity errors."""

    code: str = "IMMUTABILITY_ERROR"
    kind: ErrorKind = ErrorKind.INTEGRITY


class ImmutabilityViolationError(ImmutabilityError):
    """
    Attempted to modify or delete an append-only record.

    AuditEntry and PayrollRecord rows are immutable after insert;
    Employee rows are never physically deleted.
    """

    code: str = "IMMUTABILITY_VIOLATION"

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(
            f"Immutability violation on {entity_type} {entity_id}: {reason}"
        )


class UnauditedMutationError(ImmutabilityError):
    """Employee salary or department changed outside the ledger store."""

    code: str = "UNAUDITED_MUTATION"

    def __init__(self, employee_id: int, fields: tuple[str, ...]):
        self.employee_id = employee_id
        self.fields = fields
        super().__init__(
            f"Employee {employee_id} fields {', '.join(fields)} changed "
            f"without passing through the ledger store"
        )
