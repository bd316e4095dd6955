"""Module service fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from hr_config.schema import HRConfig
from hr_modules.compensation import CompensationService
from hr_modules.planning import PlanningService
from hr_modules.reporting import ReportingService
from hr_modules.staffing import StaffingService


@pytest.fixture
def config() -> HRConfig:
    return HRConfig()


@pytest.fixture
def compensation(session, capability_check, deterministic_clock, config):
    return CompensationService(session, capability_check, clock=deterministic_clock, config=config)


@pytest.fixture
def planning(session, capability_check, deterministic_clock, config):
    return PlanningService(session, capability_check, clock=deterministic_clock, config=config)


@pytest.fixture
def reporting(session, capability_check, deterministic_clock):
    return ReportingService(session, capability_check, clock=deterministic_clock)


@pytest.fixture
def staffing(session, capability_check, deterministic_clock, config):
    return StaffingService(session, capability_check, clock=deterministic_clock, config=config)


# (employee attribute, pay date, base, bonus, deductions, tax)
SAMPLE_PAYROLL = (
    ("sarah", date(2023, 1, 15), "68000", "3400", "1200", "13600"),
    ("sarah", date(2023, 2, 15), "68000", "2500", "1200", "13600"),
    ("sarah", date(2023, 3, 15), "68000", "4000", "1200", "13600"),
    ("michael", date(2023, 1, 15), "85000", "6000", "1800", "21250"),
    ("michael", date(2023, 2, 15), "85000", "4500", "1800", "21250"),
    ("michael", date(2023, 3, 15), "85000", "7000", "1800", "21250"),
    ("emily", date(2023, 1, 15), "72000", "3000", "1500", "14400"),
    ("emily", date(2023, 2, 15), "72000", "2200", "1500", "14400"),
    ("emily", date(2023, 3, 15), "72000", "3500", "1500", "14400"),
    ("david", date(2023, 1, 15), "65000", "0", "1100", "13000"),
    ("david", date(2023, 2, 15), "65000", "0", "1100", "13000"),
    ("olivia", date(2023, 1, 15), "95000", "0", "2000", "23750"),
    ("olivia", date(2023, 2, 15), "95000", "0", "2000", "23750"),
)


@pytest.fixture
def payroll_history(store, org):
    """The sample organization's payroll for the first quarter of 2023."""
    with store.transaction(actor_id="seed"):
        for who, pay_date, base, bonus, deductions, tax in SAMPLE_PAYROLL:
            store.record_payroll(
                getattr(org, who),
                pay_date,
                base_salary=Decimal(base),
                tax=Decimal(tax),
                bonus=Decimal(bonus),
                deductions=Decimal(deductions),
            )
    return org
