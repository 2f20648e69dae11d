"""
PROFILE VALIDATOR
Check structural invariants of an exam profile snapshot

RESPONSIBILITIES:
- Validate field ranges and types
- Collect EVERY violation (no fail-fast)
- Normalize a raw snapshot into an ExamProfile

RULES:
❌ No cross-field checks between current and goal level
❌ No I/O
✅ camelCase and snake_case keys both accepted
"""

import math
from datetime import date, datetime
from decimal import Decimal
from numbers import Real
from typing import Any, List, Mapping, Optional, Union

from app.domain.models import (
    ExamProfile,
    FieldViolation,
    SubjectProfile,
    ValidationResult,
)
from app.utils.time import parse_iso_date

MAX_NAME_LENGTH = 100
MIN_WEIGHT = 0.1
MAX_WEIGHT = 10.0
MIN_LEVEL = 0
MAX_LEVEL = 10
MIN_WEEKLY_HOURS = 1.0
MAX_WEEKLY_HOURS = 168.0


def _get(data: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _is_number(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return (
        isinstance(value, Real)
        and not isinstance(value, bool)
        and math.isfinite(float(value))
    )


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


class ProfileValidator:
    """
    Profile Validator
    Pure validation returning a tagged ValidationResult
    """

    def validate(self, snapshot: Union[ExamProfile, Mapping[str, Any]]) -> ValidationResult:
        """
        Validate a candidate exam profile

        Args:
            snapshot: ExamProfile or JSON-shaped mapping

        Returns:
            ValidationResult with either the normalized profile or all violations
        """
        if isinstance(snapshot, ExamProfile):
            snapshot = self._as_mapping(snapshot)

        if not isinstance(snapshot, Mapping):
            return ValidationResult(
                violations=[FieldViolation("profile", "must be an object")]
            )

        violations: List[FieldViolation] = []

        name = snapshot.get("name", "")
        if not isinstance(name, str):
            violations.append(FieldViolation("name", "must be a string"))
        elif len(name) > MAX_NAME_LENGTH:
            violations.append(
                FieldViolation("name", f"must be at most {MAX_NAME_LENGTH} characters")
            )

        exam_date = self._check_exam_date(
            _get(snapshot, "examDate", "exam_date"), violations
        )

        weekly_hours = _get(snapshot, "weeklyHours", "weekly_hours")
        if not _is_number(weekly_hours):
            violations.append(FieldViolation("weeklyHours", "must be a finite number"))
        elif not MIN_WEEKLY_HOURS <= float(weekly_hours) <= MAX_WEEKLY_HOURS:
            violations.append(
                FieldViolation(
                    "weeklyHours",
                    f"must be between {MIN_WEEKLY_HOURS:g} and {MAX_WEEKLY_HOURS:g}",
                )
            )

        is_active = _get(snapshot, "isActive", "is_active", True)
        if not isinstance(is_active, bool):
            violations.append(FieldViolation("isActive", "must be a boolean"))

        subjects: List[SubjectProfile] = []
        raw_subjects = snapshot.get("subjects")
        if not isinstance(raw_subjects, (list, tuple)):
            violations.append(FieldViolation("subjects", "must be a list"))
        elif len(raw_subjects) == 0:
            violations.append(FieldViolation("subjects", "must contain at least 1 subject"))
        else:
            for index, raw in enumerate(raw_subjects):
                subject = self._check_subject(index, raw, violations)
                if subject is not None:
                    subjects.append(subject)

        if violations:
            return ValidationResult(violations=violations)

        return ValidationResult(
            profile=ExamProfile(
                name=name,
                exam_date=exam_date,
                weekly_hours=float(weekly_hours),
                subjects=tuple(subjects),
                is_active=is_active,
                id=snapshot.get("id"),
                workspace_id=_get(snapshot, "workspaceId", "workspace_id"),
            )
        )

    @staticmethod
    def _check_exam_date(value: Any, violations: List[FieldViolation]) -> Optional[date]:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return parse_iso_date(value)
            except ValueError:
                pass
        violations.append(
            FieldViolation("examDate", "must be a valid calendar date (YYYY-MM-DD)")
        )
        return None

    @staticmethod
    def _check_subject(
        index: int,
        raw: Any,
        violations: List[FieldViolation],
    ) -> Optional[SubjectProfile]:
        prefix = f"subjects[{index}]"
        if not isinstance(raw, Mapping):
            violations.append(FieldViolation(prefix, "must be an object"))
            return None

        found = len(violations)

        name = raw.get("subject")
        if not isinstance(name, str) or not name.strip():
            violations.append(FieldViolation(f"{prefix}.subject", "must be a non-empty string"))
        elif len(name) > MAX_NAME_LENGTH:
            violations.append(
                FieldViolation(
                    f"{prefix}.subject", f"must be at most {MAX_NAME_LENGTH} characters"
                )
            )

        weight = raw.get("weight")
        if not _is_number(weight):
            violations.append(FieldViolation(f"{prefix}.weight", "must be a finite number"))
        elif not MIN_WEIGHT <= float(weight) <= MAX_WEIGHT:
            violations.append(
                FieldViolation(
                    f"{prefix}.weight", f"must be between {MIN_WEIGHT:g} and {MAX_WEIGHT:g}"
                )
            )

        levels = {}
        for camel, snake in (("currentLevel", "current_level"), ("goalLevel", "goal_level")):
            level = _get(raw, camel, snake)
            if not _is_integer(level):
                violations.append(FieldViolation(f"{prefix}.{camel}", "must be an integer"))
            elif not MIN_LEVEL <= level <= MAX_LEVEL:
                violations.append(
                    FieldViolation(
                        f"{prefix}.{camel}", f"must be between {MIN_LEVEL} and {MAX_LEVEL}"
                    )
                )
            else:
                levels[snake] = int(level)

        # Position defaults to list order
        position = raw.get("position")
        if position is None:
            position = index
        elif not _is_integer(position) or position < 0:
            violations.append(
                FieldViolation(f"{prefix}.position", "must be a non-negative integer")
            )

        if len(violations) > found:
            return None

        return SubjectProfile(
            subject=name,
            weight=float(weight),
            current_level=levels["current_level"],
            goal_level=levels["goal_level"],
            position=int(position),
        )

    @staticmethod
    def _as_mapping(profile: ExamProfile) -> dict:
        return {
            "id": profile.id,
            "workspaceId": profile.workspace_id,
            "name": profile.name,
            "examDate": profile.exam_date,
            "weeklyHours": profile.weekly_hours,
            "isActive": profile.is_active,
            "subjects": [
                {
                    "subject": s.subject,
                    "weight": s.weight,
                    "currentLevel": s.current_level,
                    "goalLevel": s.goal_level,
                    "position": s.position,
                }
                for s in profile.subjects
            ],
        }
