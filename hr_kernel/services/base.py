"""
BaseService -- abstract base for kernel services.

Responsibility:
    Common constructor and session-handling contract for services that
    write to the ledger.  Services receive a SQLAlchemy ``Session`` and
    persist through ``session.flush()``.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Only ``LedgerStore`` owns commit / rollback; every other service flushes
within the caller's transaction.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Abstract base class for kernel services.

    Non-goals:
        - Does NOT provide query-only (read) methods -- those belong in
          ``hr_kernel/selectors/``.
    """

    def __init__(self, session: Session):
        self.session = session
