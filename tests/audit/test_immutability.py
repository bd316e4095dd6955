"""
Tests for the ORM write-path guards.

Covers:
- Salary / department writes that bypass the ledger store
- Commits that skip the audit recorder
- Append-only audit and payroll rows
- Employees are never physically deleted
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select

from hr_kernel.db.immutability import PENDING_AUDIT_KEY
from hr_kernel.exceptions import ImmutabilityViolationError, UnauditedMutationError
from hr_kernel.models.audit_entry import AuditEntry
from hr_kernel.models.employee import Employee
from hr_kernel.models.payroll import PayrollRecord


class TestUnauditedMutation:

    def test_direct_salary_write_blocked(self, session, org):
        row = session.get(Employee, org.sarah)
        row.salary = Decimal("1000000")

        with pytest.raises(UnauditedMutationError) as exc_info:
            session.flush()

        assert exc_info.value.employee_id == org.sarah
        assert exc_info.value.fields == ("salary",)
        session.rollback()

    def test_direct_department_write_blocked(self, session, org):
        row = session.get(Employee, org.sarah)
        row.department_id = org.it

        with pytest.raises(UnauditedMutationError):
            session.flush()
        session.rollback()

    def test_unaudited_fields_may_change(self, session, org):
        row = session.get(Employee, org.sarah)
        row.email = "s.johnson@company.com"
        session.flush()
        session.commit()

        assert session.get(Employee, org.sarah).email == "s.johnson@company.com"

    def test_raw_commit_after_store_write_blocked(self, session, store, org):
        store.apply_update(org.sarah, Decimal("70000"))

        with pytest.raises(UnauditedMutationError):
            session.commit()

        session.rollback()
        assert PENDING_AUDIT_KEY not in session.info
        assert store.get_employee(org.sarah).salary == Decimal("68000.00")


class TestAppendOnlyRows:

    def test_audit_entry_cannot_be_updated(self, session, org):
        entry = session.execute(select(AuditEntry).limit(1)).scalar_one()
        entry.modified_by = "intruder"

        with pytest.raises(ImmutabilityViolationError) as exc_info:
            session.flush()

        assert exc_info.value.entity_type == "AuditEntry"
        session.rollback()

    def test_audit_entry_cannot_be_deleted(self, session, org):
        entry = session.execute(select(AuditEntry).limit(1)).scalar_one()
        session.delete(entry)

        with pytest.raises(ImmutabilityViolationError):
            session.flush()
        session.rollback()

    def test_payroll_record_cannot_be_updated(self, session, store, org):
        with store.transaction():
            record = store.record_payroll(org.sarah, date(2023, 1, 15), Decimal("68000"), Decimal("13600"))

        row = session.get(PayrollRecord, record.id)
        row.tax = Decimal("0")

        with pytest.raises(ImmutabilityViolationError):
            session.flush()
        session.rollback()

    def test_payroll_record_cannot_be_deleted(self, session, store, org):
        with store.transaction():
            record = store.record_payroll(org.sarah, date(2023, 1, 15), Decimal("68000"), Decimal("13600"))

        session.delete(session.get(PayrollRecord, record.id))

        with pytest.raises(ImmutabilityViolationError):
            session.flush()
        session.rollback()

    def test_employee_cannot_be_deleted(self, session, org):
        session.delete(session.get(Employee, org.david))

        with pytest.raises(ImmutabilityViolationError) as exc_info:
            session.flush()

        assert "deactivate" in exc_info.value.reason
        session.rollback()
