"""Database layer - engine, base classes, types, and write-path guards."""

from hr_kernel.db.base import Base, TrackedBase
from hr_kernel.db.engine import create_tables, get_engine, get_session
from hr_kernel.db.types import Money, ShortText, round_money

__all__ = [
    "get_engine",
    "get_session",
    "create_tables",
    "Base",
    "TrackedBase",
    "Money",
    "ShortText",
    "round_money",
]
