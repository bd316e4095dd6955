"""Kernel services - the transactional ledger store and audit recorder."""

from hr_kernel.services.audit_recorder import AuditRecorder
from hr_kernel.services.base import BaseService
from hr_kernel.services.ledger_store import LedgerStore, PendingChange

__all__ = [
    "AuditRecorder",
    "BaseService",
    "LedgerStore",
    "PendingChange",
]
