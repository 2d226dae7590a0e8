"""In-process summary statistics over exact decimal amounts.

Used when the store has no native ``percentile_cont``. Results match
PostgreSQL's continuous percentile interpolation.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

ZERO = Decimal("0")
# Averages are reported to four places on every store
AVG_QUANTUM = Decimal("0.0001")


@dataclass(frozen=True)
class Summary:
    count: int
    total_sum: Decimal
    avg: Decimal
    median: Decimal
    p90: Decimal


def percentile_cont(sorted_values: Sequence[Decimal], fraction: Decimal) -> Decimal:
    """Continuous percentile of an ascending sequence; zero when empty.

    >>> percentile_cont([Decimal(10), Decimal(20), Decimal(30), Decimal(40)], Decimal("0.5"))
    Decimal('25.0')
    """
    n = len(sorted_values)
    if n == 0:
        return ZERO
    if n == 1:
        return sorted_values[0]

    position = fraction * (n - 1)
    lower = int(position)  # floor, position is never negative
    upper = min(lower + 1, n - 1)
    weight = position - lower
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * weight


def quantize_average(value: Decimal) -> Decimal:
    return value.quantize(AVG_QUANTUM, rounding=ROUND_HALF_UP)


def summarize(amounts: Sequence[Decimal]) -> Summary:
    """Count, sum, mean, median and p90 of ``amounts``; all zero when empty."""
    values = sorted(amounts)
    count = len(values)
    if count == 0:
        return Summary(count=0, total_sum=ZERO, avg=ZERO, median=ZERO, p90=ZERO)

    total = sum(values, ZERO)
    return Summary(
        count=count,
        total_sum=total,
        avg=quantize_average(total / count),
        median=percentile_cont(values, Decimal("0.5")),
        p90=percentile_cont(values, Decimal("0.9")),
    )
