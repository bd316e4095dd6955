"""
Tenure -- whole years / months of service between two dates.

Responsibility:
    The single definition of tenure used by salary adjustment, bonus,
    retention and promotion rules.

Architecture position:
    Kernel > Domain -- pure functions, zero I/O.  The evaluation date is
    always passed in.

Two counting methods are supported:

    ELAPSED   completed years / months (an anniversary must have passed).
              2023-06-15 -> 2024-06-14 is 0 years, 11 months.
    CALENDAR  number of year / month boundaries crossed, the way SQL
              Server's DATEDIFF counts.  2023-12-31 -> 2024-01-01 is 1 year.

A hire date after the evaluation date yields 0 under both methods.
"""

from datetime import date
from enum import Enum


class TenureMethod(str, Enum):
    """How tenure is counted."""

    ELAPSED = "elapsed"
    CALENDAR = "calendar"


def tenure_months(
    hire_date: date,
    as_of: date,
    method: TenureMethod = TenureMethod.ELAPSED,
) -> int:
    """Whole months of service at ``as_of``."""
    months = (as_of.year - hire_date.year) * 12 + (as_of.month - hire_date.month)
    if method == TenureMethod.ELAPSED and as_of.day < hire_date.day:
        months -= 1
    return max(months, 0)


def tenure_years(
    hire_date: date,
    as_of: date,
    method: TenureMethod = TenureMethod.ELAPSED,
) -> int:
    """Whole years of service at ``as_of``."""
    years = as_of.year - hire_date.year
    if method == TenureMethod.ELAPSED and (as_of.month, as_of.day) < (
        hire_date.month,
        hire_date.day,
    ):
        years -= 1
    return max(years, 0)
