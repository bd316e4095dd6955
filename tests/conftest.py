"""
Pytest fixtures for the HR ledger test suite.

Provides:
- A fresh database per test (in-memory SQLite unless DATABASE_URL is set)
- The sample organization (five departments, five employees)
- Actors with HR roles and a role-based capability check
- Structured log capture

Environment Variables:
- DATABASE_URL: connection URL for the test database.  Defaults to
  ``sqlite://`` (in-memory, shared by every session of the test).
"""

import json
import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from hr_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from hr_kernel.domain.capabilities import Role, RoleCapabilityCheck
from hr_kernel.domain.clock import DeterministicClock
from hr_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from hr_kernel.selectors.audit_selector import AuditSelector
from hr_kernel.services.ledger_store import LedgerStore

DEFAULT_TEST_URL = "sqlite://"

# Evaluation date of every service test
TODAY = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

HR_ADMIN = "hr-admin"
PAYROLL_MANAGER = "payroll-manager"
DEPARTMENT_LEAD = "department-lead"
OUTSIDER = "outsider"


def get_database_url() -> str:
    return os.environ.get("DATABASE_URL", DEFAULT_TEST_URL)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture hr_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, compensation):
            compensation.adjust_salaries(HR_ADMIN, Decimal("5"))
            logs = captured_logs()
            assert any(r["message"] == "operation_committed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("hr_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def db_engine():
    """A freshly created schema, dropped after the test."""
    engine = init_engine_from_url(get_database_url())
    create_tables()
    yield engine
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    sess = get_session()
    yield sess
    sess.rollback()
    sess.close()


@pytest.fixture
def deterministic_clock():
    """Clock fixed at 2024-06-15 12:00 UTC."""
    return DeterministicClock(TODAY)


@pytest.fixture
def store(session, deterministic_clock) -> LedgerStore:
    return LedgerStore(session, clock=deterministic_clock)


@pytest.fixture
def audit_selector(session) -> AuditSelector:
    return AuditSelector(session)


# =============================================================================
# Access control
# =============================================================================


@pytest.fixture
def capability_check() -> RoleCapabilityCheck:
    return RoleCapabilityCheck({
        HR_ADMIN: Role.HR_ADMINISTRATOR,
        PAYROLL_MANAGER: Role.PAYROLL_MANAGER,
        DEPARTMENT_LEAD: Role.DEPARTMENT_LEAD,
    })


# =============================================================================
# Sample organization
# =============================================================================


@dataclass(frozen=True)
class Organization:
    """Ids of the seeded departments and employees."""

    hr: int
    it: int
    finance: int
    marketing: int
    engineering: int
    sarah: int
    michael: int
    emily: int
    david: int
    olivia: int


SAMPLE_DEPARTMENTS = (
    ("hr", "Human Resources", Decimal("500000.00"), "West Wing"),
    ("it", "IT", Decimal("1200000.00"), "Floor 5"),
    ("finance", "Finance", Decimal("850000.00"), "Floor 3"),
    ("marketing", "Marketing", Decimal("750000.00"), "Floor 2"),
    ("engineering", "Engineering", Decimal("2000000.00"), "Floor 4"),
)

SAMPLE_EMPLOYEES = (
    ("sarah", "Sarah", "Johnson", date(2018, 3, 15), "hr", Decimal("68000.00")),
    ("michael", "Michael", "Chen", date(2020, 6, 1), "it", Decimal("85000.00")),
    ("emily", "Emily", "Rodriguez", date(2019, 11, 22), "finance", Decimal("72000.00")),
    ("david", "David", "Kim", date(2021, 2, 10), "marketing", Decimal("65000.00")),
    ("olivia", "Olivia", "Smith", date(2022, 8, 5), "engineering", Decimal("95000.00")),
)


@pytest.fixture
def org(store) -> Organization:
    """Seed the sample organization in one committed transaction."""
    ids: dict[str, int] = {}
    with store.transaction(actor_id="seed"):
        for key, name, budget, location in SAMPLE_DEPARTMENTS:
            ids[key] = store.create_department(name, budget, location).id
        for key, first, last, hired, dept_key, salary in SAMPLE_EMPLOYEES:
            ids[key] = store.hire_employee(
                first_name=first,
                last_name=last,
                email=f"{first.lower()}.{last.lower()}@company.com",
                hire_date=hired,
                salary=salary,
                department_id=ids[dept_key],
            ).id
    return Organization(**ids)


@pytest.fixture
def hire(store):
    """Factory fixture: hire (and commit) one employee."""
    counter = {"n": 0}

    def _hire(
        salary: Decimal,
        department_id: int | None,
        hire_date: date = date(2020, 1, 1),
        first_name: str = "Test",
    ) -> int:
        counter["n"] += 1
        with store.transaction(actor_id="seed"):
            emp = store.hire_employee(
                first_name=first_name,
                last_name=f"Employee{counter['n']}",
                email=f"test.employee{counter['n']}@company.com",
                hire_date=hire_date,
                salary=salary,
                department_id=department_id,
            )
        return emp.id

    return _hire


@pytest.fixture
def create_department(store):
    """Factory fixture: create (and commit) one department."""

    def _create(name: str, budget: Decimal, location: str | None = None) -> int:
        with store.transaction(actor_id="seed"):
            return store.create_department(name, budget, location).id

    return _create
