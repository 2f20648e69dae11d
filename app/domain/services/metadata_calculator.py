"""
METADATA CALCULATOR
Exam date + weekly budget → weeks until exam and total available hours

Exam dates today or in the past are clamped to ONE week so the
allocation never divides by zero. Callers that want to reject past
dates must do so before calling.
"""

import math
from datetime import date
from decimal import Decimal

from app.domain.models import AllocationMetadata

DAYS_PER_WEEK = 7
MIN_WEEKS = 1
HOURS_UNIT = Decimal("0.1")


def weeks_until_exam(exam_date: date, today: date) -> int:
    """Whole weeks until the exam, rounded up, never below one"""
    days = (exam_date - today).days
    return max(MIN_WEEKS, math.ceil(days / DAYS_PER_WEEK))


class MetadataCalculator:
    """Pure function of (exam_date, weekly_hours, today)"""

    def calculate(
        self,
        exam_date: date,
        weekly_hours: Decimal,
        today: date,
    ) -> AllocationMetadata:
        """
        Build allocation metadata

        Args:
            exam_date: Target exam date
            weekly_hours: Weekly study budget (already quantized to 0.1 h)
            today: Reference date, passed explicitly

        Returns:
            AllocationMetadata
        """
        weeks = weeks_until_exam(exam_date, today)
        weekly = Decimal(weekly_hours)
        return AllocationMetadata(
            weeks_until_exam=weeks,
            total_available_hours=(weekly * weeks).quantize(HOURS_UNIT),
            weekly_hours=weekly,
            exam_date=exam_date,
        )
