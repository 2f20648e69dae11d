"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SubjectProfile:
    """Subject inside an exam profile - Immutable"""
    subject: str
    weight: float
    current_level: int
    goal_level: int
    position: int = 0

    @property
    def gap(self) -> int:
        """Proficiency gap, never negative"""
        return max(self.goal_level - self.current_level, 0)


@dataclass(frozen=True)
class ExamProfile:
    """Exam profile snapshot - Immutable"""
    name: str
    exam_date: date
    weekly_hours: float
    subjects: Tuple[SubjectProfile, ...]
    is_active: bool = True
    id: Optional[int] = None
    workspace_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.subjects:
            raise ValueError("Exam profile must have at least one subject")


@dataclass(frozen=True)
class SubjectShare:
    """Normalized allocation driver for one subject (exact score and share)"""
    subject: SubjectProfile
    index: int
    gap: int
    score: Fraction
    share: Fraction


@dataclass(frozen=True)
class SubjectHours:
    """Rounded hour and percentage allocation for one subject"""
    index: int
    hours_per_week: Decimal
    total_hours: Decimal
    percentage: int


@dataclass(frozen=True)
class AllocationMetadata:
    """Run metadata for an allocation"""
    weeks_until_exam: int
    total_available_hours: Decimal
    weekly_hours: Decimal
    exam_date: date

    def __post_init__(self):
        if self.weeks_until_exam < 1:
            raise ValueError("weeks_until_exam must be at least 1")


@dataclass(frozen=True)
class AllocationResult:
    """Per-subject study time allocation"""
    subject: str
    total_hours: Decimal
    hours_per_week: Decimal
    gap: int
    percentage: int


@dataclass(frozen=True)
class AllocationResponse:
    """Allocation results in input subject order plus metadata"""
    results: List[AllocationResult]
    metadata: AllocationMetadata

    @property
    def total_hours_per_week(self) -> Decimal:
        return sum((r.hours_per_week for r in self.results), Decimal("0"))

    @property
    def total_percentage(self) -> int:
        return sum(r.percentage for r in self.results)


@dataclass(frozen=True)
class FieldViolation:
    """One field-level validation problem"""
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of profile validation.

    Exactly one of `profile` / `violations` is meaningful:
    ok results carry the normalized profile, failed ones every violation found.
    """
    profile: Optional[ExamProfile] = None
    violations: List[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.profile is not None and not self.violations


@dataclass(frozen=True)
class ExamTemplateItem:
    """Subject entry of an exam template"""
    subject: str
    weight: float
    median_level: int


@dataclass(frozen=True)
class ExamTemplate:
    """Predefined exam subject list - Immutable"""
    id: str
    name: str
    category: str
    items: Tuple[ExamTemplateItem, ...]
    is_public: bool = True

    def to_subject_profiles(self, current_level: int = 0) -> List[SubjectProfile]:
        """Subjects for a new profile, aiming at each item's median level"""
        return [
            SubjectProfile(
                subject=item.subject,
                weight=item.weight,
                current_level=current_level,
                goal_level=item.median_level,
                position=position,
            )
            for position, item in enumerate(self.items)
        ]
