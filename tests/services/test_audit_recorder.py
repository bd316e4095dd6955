"""Tests for AuditRecorder suppression and operation kinds."""

from datetime import datetime, timezone
from decimal import Decimal

from hr_kernel.models.audit_entry import AuditOperation
from hr_kernel.services.audit_recorder import AuditRecorder


class TestAuditRecorder:

    def test_salary_change_recorded(self, session, deterministic_clock):
        recorder = AuditRecorder(session, deterministic_clock)

        entry = recorder.record_change(
            employee_id=1,
            old_salary=Decimal("50000.00"),
            old_department_id=1,
            new_salary=Decimal("55000.00"),
            new_department_id=1,
            actor_id="hr-1",
        )

        assert entry.operation == AuditOperation.UPDATE.value
        assert entry.table_name == "employees"
        assert entry.modified_by == "hr-1"
        assert entry.modified_at == datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

    def test_department_change_recorded(self, session, deterministic_clock):
        recorder = AuditRecorder(session, deterministic_clock)

        entry = recorder.record_change(1, Decimal("50000"), 1, Decimal("50000"), 2, "hr-1")

        assert entry is not None
        assert entry.new_value == {"salary": "50000", "department_id": 2}

    def test_no_change_suppressed(self, session, deterministic_clock):
        recorder = AuditRecorder(session, deterministic_clock)

        assert recorder.record_change(1, Decimal("50000"), 1, Decimal("50000.00"), 1, "hr-1") is None

    def test_null_and_zero_department_compare_equal(self, session, deterministic_clock):
        recorder = AuditRecorder(session, deterministic_clock)

        assert recorder.record_change(1, Decimal("50000"), None, Decimal("50000"), 0, "hr-1") is None

    def test_insert_and_delete_kinds(self, session, deterministic_clock):
        recorder = AuditRecorder(session, deterministic_clock)

        inserted = recorder.record_change(1, None, None, Decimal("50000"), 1, "hr-1")
        deleted = recorder.record_change(2, Decimal("50000"), 1, None, None, "hr-1")

        assert inserted.operation == "INSERT"
        assert inserted.old_value is None
        assert deleted.operation == "DELETE"
        assert deleted.new_value is None
