"""
Domain exceptions
Raised by domain services, mapped to HTTP errors in the API layer
"""

from typing import List

from app.domain.models import FieldViolation


class ProfileValidationError(ValueError):
    """Exam profile snapshot failed validation (every violation attached)"""

    def __init__(self, violations: List[FieldViolation]):
        self.violations = list(violations)
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid exam profile: {summary}")


class AllocationInvariantViolation(AssertionError):
    """Rounded allocation does not add up to the weekly budget or 100%"""


class ExamProfileNotFoundError(LookupError):
    """No exam profile with the requested id"""

    def __init__(self, profile_id: int):
        self.profile_id = profile_id
        super().__init__(f"Exam profile not found: {profile_id}")


class DuplicateProfileNameError(ValueError):
    """Profile names are unique within a workspace"""

    def __init__(self, workspace_id: str, name: str):
        self.workspace_id = workspace_id
        self.name = name
        super().__init__("A profile with this name already exists")
