"""
Module: hr_kernel.db.types
Responsibility: Annotated type aliases and the rounding helper for monetary
    columns.  Centralizes precision so that every model, engine and service
    agrees on how salaries, budgets and payroll amounts are stored.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, selectors/ and hr_engines.  MUST NOT import from any of those.

Invariants enforced:
    - Monetary amounts are Decimal with 2 decimal places (Numeric(18, 2)),
      the precision of the ledger's salary and payroll columns.
    - round_money() is the ONLY sanctioned rounding function for monetary
      values (ROUND_HALF_UP).  No floats for money anywhere.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from sqlalchemy import Numeric, String

# Monetary amount: 18 digits total, 2 decimal places
Money = Annotated[Decimal, Numeric(18, 2)]

# Names, emails, locations
ShortText = Annotated[str, String(100)]

# Rounding constants
MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

ZERO = Decimal("0")


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Coerce an int / str / Decimal into Decimal.

    Floats are rejected: they cannot represent cents exactly.
    """
    if isinstance(value, float):
        raise TypeError("Monetary values must not be float; pass Decimal or str")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to the ledger precision.

    Preconditions: value is a Decimal.
    Postconditions: Returns value quantized to ``decimal_places`` using
        ``rounding`` (ROUND_HALF_UP by default).
    """
    quantize_str = "0." + "0" * decimal_places
    return value.quantize(Decimal(quantize_str), rounding=rounding)
