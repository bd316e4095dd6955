"""
Module: hr_engines.statistics
Responsibility:
    Ranking primitives over salary partitions.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

``percent_rank`` follows the SQL window function PERCENT_RANK:

    (rank - 1) / (n - 1)

where ``rank`` is the 1-based position in ascending order and ties share
the lowest rank.  A single-member partition ranks 0.
"""

from bisect import bisect_left
from collections.abc import Sequence
from decimal import Decimal

ZERO = Decimal("0")


def percent_rank(values: Sequence[Decimal]) -> list[Decimal]:
    """
    PERCENT_RANK of every value within ``values``, in input order.

    >>> percent_rank([Decimal("10"), Decimal("20"), Decimal("20"), Decimal("40")])
    [Decimal('0'), Decimal('0.3333333333333333333333333333'), Decimal('0.3333333333333333333333333333'), Decimal('1')]
    """
    n = len(values)
    if n == 0:
        return []
    if n == 1:
        return [ZERO]
    ordered = sorted(values)
    denominator = Decimal(n - 1)
    # bisect_left gives the count of strictly smaller values, i.e. rank - 1
    return [Decimal(bisect_left(ordered, v)) / denominator for v in values]
