"""
GAP WEIGHT NORMALIZER
Subject weight × proficiency gap → normalized share

Fallbacks:
1. Every gap is zero → score by weight alone
2. Scores still sum to zero → equal split

Scores and shares are exact Fractions: weights are read through their
decimal text, so 0.1 × 3 and 0.3 × 1 score the same.
"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import List, Sequence

from app.domain.models import SubjectProfile, SubjectShare

logger = logging.getLogger(__name__)


def exact_weight(weight) -> Fraction:
    """Weight as the exact value of its decimal text"""
    return Fraction(Decimal(str(weight)))


class GapWeightNormalizer:
    """Shares always sum to exactly 1"""

    def normalize(self, subjects: Sequence[SubjectProfile]) -> List[SubjectShare]:
        """
        Compute normalized allocation shares

        Args:
            subjects: Subjects in input order

        Returns:
            One SubjectShare per subject, same order
        """
        if not subjects:
            return []

        gaps = [s.gap for s in subjects]
        scores = [exact_weight(s.weight) * gap for s, gap in zip(subjects, gaps)]

        if all(score == 0 for score in scores):
            logger.debug("All subjects at goal level, allocating by weight only")
            scores = [exact_weight(s.weight) for s in subjects]

        total = sum(scores, Fraction(0))
        n = len(subjects)
        if total > 0:
            shares = [score / total for score in scores]
        else:
            logger.debug("Degenerate scores, falling back to equal split")
            shares = [Fraction(1, n)] * n

        return [
            SubjectShare(
                subject=subject,
                index=index,
                gap=gap,
                score=score,
                share=share,
            )
            for index, (subject, gap, score, share) in enumerate(
                zip(subjects, gaps, scores, shares)
            )
        ]
