"""
Module: hr_kernel.selectors.base
Responsibility: Abstract base class for read-only query selectors (the
    reporting side of the ledger).
Architecture position: Kernel > Selectors.  May import from db/, models/
    and domain/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors never add, delete, flush or commit.
    - DTO return convention: selectors return frozen dataclasses, not ORM
      instances.
    - Session ownership: the caller owns the session and its transaction
      (read inside ``LedgerStore.snapshot()`` for a consistent view).
"""

from abc import ABC
from decimal import Decimal

from sqlalchemy.orm import Session

from hr_kernel.db.types import ZERO, round_money


def as_money(value) -> Decimal:
    """Normalise an aggregate result (None / float / Decimal) to money."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return round_money(value)


class BaseSelector(ABC):
    """
    Abstract base class for all selectors.

    Subclasses implement domain-specific queries; this class only holds
    the caller's session.
    """

    def __init__(self, session: Session):
        self.session = session
