#!/usr/bin/env python3
"""
Seed the ledger with the sample organization.

Drops all tables, recreates them, then creates five departments, five
employees and their early-2023 payroll records through the staffing
service, so every hire leaves an INSERT audit entry.

Usage:
    python3 scripts/seed_data.py
    HR_DATABASE_URL=sqlite:///demo.db python3 scripts/seed_data.py
"""

import logging
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

SEED_ACTOR = "seed_script"

DEPARTMENTS = [
    ("Human Resources", "500000.00", "West Wing"),
    ("IT", "1200000.00", "Floor 5"),
    ("Finance", "850000.00", "Floor 3"),
    ("Marketing", "750000.00", "Floor 2"),
    ("Engineering", "2000000.00", "Floor 4"),
]

EMPLOYEES = [
    ("Sarah", "Johnson", "sarah.johnson@company.com", date(2018, 3, 15), "Human Resources", "68000.00"),
    ("Michael", "Chen", "michael.chen@company.com", date(2020, 6, 1), "IT", "85000.00"),
    ("Emily", "Rodriguez", "emily.rodriguez@company.com", date(2019, 11, 22), "Finance", "72000.00"),
    ("David", "Kim", "david.kim@company.com", date(2021, 2, 10), "Marketing", "65000.00"),
    ("Olivia", "Smith", "olivia.smith@company.com", date(2022, 8, 5), "Engineering", "95000.00"),
]

# (employee email, pay date, base, bonus, deductions, tax)
PAYROLL = [
    ("sarah.johnson@company.com", date(2023, 1, 15), "68000.00", "3400.00", "1200.00", "13600.00"),
    ("sarah.johnson@company.com", date(2023, 2, 15), "68000.00", "2500.00", "1200.00", "13600.00"),
    ("sarah.johnson@company.com", date(2023, 3, 15), "68000.00", "4000.00", "1200.00", "13600.00"),
    ("michael.chen@company.com", date(2023, 1, 15), "85000.00", "6000.00", "1800.00", "21250.00"),
    ("michael.chen@company.com", date(2023, 2, 15), "85000.00", "4500.00", "1800.00", "21250.00"),
    ("michael.chen@company.com", date(2023, 3, 15), "85000.00", "7000.00", "1800.00", "21250.00"),
    ("emily.rodriguez@company.com", date(2023, 1, 15), "72000.00", "3000.00", "1500.00", "14400.00"),
    ("emily.rodriguez@company.com", date(2023, 2, 15), "72000.00", "2200.00", "1500.00", "14400.00"),
    ("emily.rodriguez@company.com", date(2023, 3, 15), "72000.00", "3500.00", "1500.00", "14400.00"),
    ("david.kim@company.com", date(2023, 1, 15), "65000.00", "0.00", "1100.00", "13000.00"),
    ("david.kim@company.com", date(2023, 2, 15), "65000.00", "0.00", "1100.00", "13000.00"),
    ("olivia.smith@company.com", date(2023, 1, 15), "95000.00", "0.00", "2000.00", "23750.00"),
    ("olivia.smith@company.com", date(2023, 2, 15), "95000.00", "0.00", "2000.00", "23750.00"),
]


def _unwrap(result, what: str):
    if not result.is_success:
        raise RuntimeError(f"{what} failed: {result.status.value} {result.error_code} {result.message}")
    return result.value


def main() -> int:
    from hr_config import get_active_config
    from hr_kernel.db.engine import (
        create_tables,
        drop_tables,
        get_session,
        init_engine_from_url,
    )
    from hr_kernel.domain.capabilities import allow_all
    from hr_kernel.domain.clock import DeterministicClock
    from hr_modules.staffing import StaffingService

    config = get_active_config()

    # -----------------------------------------------------------------
    # 1. Connect + reset
    # -----------------------------------------------------------------
    print()
    print(f"  [1/4] Connecting to {config.database.url} ...")
    init_engine_from_url(config.database.url, echo=config.database.echo)
    logging.getLogger("hr_kernel").setLevel(logging.WARNING)

    print("  [2/4] Dropping old tables and recreating schema...")
    drop_tables()
    create_tables()

    session = get_session()
    clock = DeterministicClock(datetime(2023, 1, 1, 9, 0, 0, tzinfo=timezone.utc))
    staffing = StaffingService(session, allow_all, clock=clock, config=config)

    # -----------------------------------------------------------------
    # 2. Organization
    # -----------------------------------------------------------------
    print(f"  [3/4] Creating {len(DEPARTMENTS)} departments and {len(EMPLOYEES)} employees...")
    try:
        department_ids = {}
        for name, budget, location in DEPARTMENTS:
            dept = _unwrap(
                staffing.create_department(SEED_ACTOR, name, Decimal(budget), location),
                f"department {name}",
            )
            department_ids[name] = dept.id

        employee_ids = {}
        for first, last, email, hired, dept_name, salary in EMPLOYEES:
            emp = _unwrap(
                staffing.hire_employee(
                    SEED_ACTOR,
                    first_name=first,
                    last_name=last,
                    email=email,
                    hire_date=hired,
                    salary=Decimal(salary),
                    department_id=department_ids[dept_name],
                ),
                f"hire {email}",
            )
            employee_ids[email] = emp.id

        # -------------------------------------------------------------
        # 3. Payroll
        # -------------------------------------------------------------
        print(f"  [4/4] Recording {len(PAYROLL)} payroll records...")
        for email, pay_date, base, bonus, deductions, tax in PAYROLL:
            _unwrap(
                staffing.record_payroll(
                    SEED_ACTOR,
                    employee_id=employee_ids[email],
                    pay_date=pay_date,
                    base_salary=Decimal(base),
                    tax=Decimal(tax),
                    bonus=Decimal(bonus),
                    deductions=Decimal(deductions),
                ),
                f"payroll {email} {pay_date}",
            )
    except RuntimeError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()

    print()
    print("  Done. Ledger seeded.")
    print()
    for email, emp_id in employee_ids.items():
        print(f"    employee {emp_id}: {email}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
