"""
HOUR ALLOCATOR
Normalized shares → weekly hours, total hours and percentage points

RESPONSIBILITIES:
- Distribute the weekly budget in 0.1 h units
- Distribute 100 percentage points
- Scale weekly hours to the whole period until the exam

RULES (LOCKED):
❌ No independent rounding per subject
✅ Largest-remainder method, applied separately to hours and percentages
✅ Ties: larger remainder, then lower position, then input order
✅ Exact rational arithmetic (no float drift in the remainders)
"""

from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import List, Sequence

from app.domain.models import SubjectHours, SubjectShare

HOURS_UNIT = Decimal("0.1")
PERCENT_UNITS = 100


def quantize_hours(hours) -> Decimal:
    """Weekly hours on the 0.1 h grid the allocator works in"""
    return Decimal(str(hours)).quantize(HOURS_UNIT, rounding=ROUND_HALF_UP)


def largest_remainder(
    shares: Sequence[Fraction],
    positions: Sequence[int],
    total_units: int,
) -> List[int]:
    """
    Split `total_units` whole units proportionally to `shares`

    Args:
        shares: Exact shares summing to 1
        positions: Display positions used to break remainder ties
        total_units: Units to distribute

    Returns:
        Units per entry, summing exactly to total_units
    """
    raw = [share * total_units for share in shares]
    units = [r.numerator // r.denominator for r in raw]
    leftover = total_units - sum(units)

    order = sorted(
        range(len(raw)),
        key=lambda i: (-(raw[i] - units[i]), positions[i], i),
    )
    # leftover < len(order) whenever the shares sum to 1
    for i in order[:leftover]:
        units[i] += 1

    return units


class HourAllocator:
    """
    Hour Allocator
    Total function: no error states for valid normalized shares
    """

    def allocate(
        self,
        shares: Sequence[SubjectShare],
        weekly_hours: Decimal,
        weeks_until_exam: int,
    ) -> List[SubjectHours]:
        """
        Allocate weekly hours and percentages

        Args:
            shares: Normalized shares in input order
            weekly_hours: Weekly budget on the 0.1 h grid
            weeks_until_exam: Weeks until the exam (>= 1)

        Returns:
            SubjectHours per subject, same order
        """
        if not shares:
            return []

        exact = [Fraction(s.share) for s in shares]
        total = sum(exact)
        exact = [share / total for share in exact]
        positions = [s.subject.position for s in shares]

        hour_units = int(quantize_hours(weekly_hours) / HOURS_UNIT)
        hours = largest_remainder(exact, positions, hour_units)
        percentages = largest_remainder(exact, positions, PERCENT_UNITS)

        allocations = []
        for share, units, pct in zip(shares, hours, percentages):
            per_week = (Decimal(units) * HOURS_UNIT).quantize(HOURS_UNIT)
            allocations.append(
                SubjectHours(
                    index=share.index,
                    hours_per_week=per_week,
                    total_hours=(per_week * weeks_until_exam).quantize(HOURS_UNIT),
                    percentage=pct,
                )
            )

        return allocations
