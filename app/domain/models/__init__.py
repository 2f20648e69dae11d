"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    AllocationMetadata,
    AllocationResponse,
    AllocationResult,
    ExamProfile,
    ExamTemplate,
    ExamTemplateItem,
    FieldViolation,
    SubjectHours,
    SubjectProfile,
    SubjectShare,
    ValidationResult,
)

__all__ = [
    "AllocationMetadata",
    "AllocationResponse",
    "AllocationResult",
    "ExamProfile",
    "ExamTemplate",
    "ExamTemplateItem",
    "FieldViolation",
    "SubjectHours",
    "SubjectProfile",
    "SubjectShare",
    "ValidationResult",
]
