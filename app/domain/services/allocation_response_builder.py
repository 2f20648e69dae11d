"""Assemble per-subject allocation results and run metadata."""

from typing import Sequence

from app.domain.models import (
    AllocationMetadata,
    AllocationResponse,
    AllocationResult,
    SubjectHours,
    SubjectShare,
)


class AllocationResponseBuilder:
    """Pure assembly, no computation"""

    def build(
        self,
        shares: Sequence[SubjectShare],
        hours: Sequence[SubjectHours],
        metadata: AllocationMetadata,
    ) -> AllocationResponse:
        by_index = {h.index: h for h in hours}
        results = []
        for share in sorted(shares, key=lambda s: s.index):
            allocation = by_index[share.index]
            results.append(
                AllocationResult(
                    subject=share.subject.subject,
                    total_hours=allocation.total_hours,
                    hours_per_week=allocation.hours_per_week,
                    gap=share.gap,
                    percentage=allocation.percentage,
                )
            )
        return AllocationResponse(results=results, metadata=metadata)
