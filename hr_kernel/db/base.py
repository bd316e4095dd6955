"""
Module: hr_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.  Provides
    the integer identity primary key convention, the type annotation map for
    consistent column types, and the TrackedBase mixin for actor/timestamp
    metadata.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel.  ALL model files import from here.  This module MUST NOT
    import from models/, services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Integer identity keys: every model gets an autoincrementing integer
      primary key.  Callers refer to ledger records by these ids only.
    - Decimal precision: type_annotation_map maps Python Decimal to
      Numeric(18, 2).  NEVER use float for monetary amounts.
    - Timestamps are timezone-aware.

Audit relevance:
    TrackedBase.created_at / created_by / updated_at / updated_by record who
    touched a row and when.  They are row metadata; the authoritative history
    of salary and department changes is the AuditEntry table.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - id is an autoincrementing Integer primary key.
        - Decimal maps to Numeric(18, 2).
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(18, 2),
        datetime: DateTime(timezone=True),
        int: Integer,
    }

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )


class TrackedBase(Base):
    """
    Abstract base with timestamp and actor tracking.

    Guarantees:
        - created_at is set to server NOW() on INSERT.
        - updated_at auto-updates on every UPDATE.
        - created_by is required -- every record has a creator.
        - updated_by is nullable until the first update.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    created_by: Mapped[str] = mapped_column(String(128), nullable=False)

    updated_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
