"""
ALLOCATION ENGINE
Exam profile snapshot → study hours per subject

PIPELINE (strictly left to right, stateless):
1. ProfileValidator          - structural checks, all violations at once
2. MetadataCalculator        - weeks until exam, total available hours
3. GapWeightNormalizer       - weight × gap → share
4. HourAllocator             - largest-remainder hours and percentages
5. AllocationResponseBuilder - results in input order + metadata

RULES:
❌ No I/O, no persistence
❌ No implicit clock: `today` is always passed in
✅ sum(hours_per_week) == weekly_hours
✅ sum(percentage) == 100
✅ Deterministic output
"""

import logging
from datetime import date
from typing import Any, Mapping, Union

from app.domain.exceptions import AllocationInvariantViolation, ProfileValidationError
from app.domain.models import AllocationResponse, ExamProfile
from app.domain.services.allocation_response_builder import AllocationResponseBuilder
from app.domain.services.gap_weight_normalizer import GapWeightNormalizer
from app.domain.services.hour_allocator import HourAllocator, PERCENT_UNITS, quantize_hours
from app.domain.services.metadata_calculator import MetadataCalculator
from app.domain.services.profile_validator import ProfileValidator

logger = logging.getLogger(__name__)


class AllocationEngine:
    """
    Allocation Engine
    Safe to share between concurrent requests
    """

    def __init__(self, strict_checks: bool = True):
        """
        Initialize allocation engine

        Args:
            strict_checks: Raise AllocationInvariantViolation when rounded sums
                drift; when False the violation is only logged
        """
        self.strict_checks = strict_checks
        self.validator = ProfileValidator()
        self.metadata_calculator = MetadataCalculator()
        self.normalizer = GapWeightNormalizer()
        self.hour_allocator = HourAllocator()
        self.response_builder = AllocationResponseBuilder()

    def calculate(
        self,
        snapshot: Union[ExamProfile, Mapping[str, Any]],
        today: date,
    ) -> AllocationResponse:
        """
        Compute the study-time allocation for a profile

        Args:
            snapshot: Exam profile (entity or JSON-shaped mapping)
            today: Reference date for weeks until exam

        Returns:
            AllocationResponse

        Raises:
            ProfileValidationError: If the snapshot is invalid
            AllocationInvariantViolation: If rounding broke the sum invariants
                (strict mode only)
        """
        validation = self.validator.validate(snapshot)
        if not validation.ok:
            logger.info(
                f"Rejected exam profile with {len(validation.violations)} violation(s)"
            )
            raise ProfileValidationError(validation.violations)

        profile = validation.profile
        weekly_hours = quantize_hours(profile.weekly_hours)

        metadata = self.metadata_calculator.calculate(
            exam_date=profile.exam_date,
            weekly_hours=weekly_hours,
            today=today,
        )
        shares = self.normalizer.normalize(profile.subjects)
        hours = self.hour_allocator.allocate(
            shares,
            weekly_hours=weekly_hours,
            weeks_until_exam=metadata.weeks_until_exam,
        )
        response = self.response_builder.build(shares, hours, metadata)

        self._check_invariants(response, len(profile.subjects))

        logger.info(
            f"Allocated {weekly_hours}h/week across {len(response.results)} subject(s), "
            f"{metadata.weeks_until_exam} week(s) until {metadata.exam_date.isoformat()}"
        )
        return response

    def _check_invariants(self, response: AllocationResponse, subject_count: int) -> None:
        problems = []

        if len(response.results) != subject_count:
            problems.append(
                f"{len(response.results)} results for {subject_count} subjects"
            )

        total_hours = response.total_hours_per_week
        if total_hours != response.metadata.weekly_hours:
            problems.append(
                f"hours sum {total_hours} != weekly budget {response.metadata.weekly_hours}"
            )

        total_pct = response.total_percentage
        if total_pct != PERCENT_UNITS:
            problems.append(f"percentages sum to {total_pct}")

        for result in response.results:
            if result.gap < 0 or not 0 <= result.percentage <= PERCENT_UNITS:
                problems.append(f"out-of-range values for {result.subject}")

        if not problems:
            return

        message = "Allocation invariant violated: " + "; ".join(problems)
        logger.error(message)
        if self.strict_checks:
            raise AllocationInvariantViolation(message)
