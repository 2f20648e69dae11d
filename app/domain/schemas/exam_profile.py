"""
Exam profile request / response schemas
JSON keys are camelCase; snake_case is accepted on input too
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.models import (
    AllocationResponse,
    ExamProfile,
    ExamTemplate,
    SubjectProfile,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -------------------------------------------------------------------
# Requests
# -------------------------------------------------------------------

class SubjectProfileRequest(CamelModel):
    """Subject of an exam profile"""
    subject: str = Field(..., min_length=1, max_length=100)
    weight: float = Field(..., ge=0.1, le=10)
    current_level: int = Field(..., ge=0, le=10)
    goal_level: int = Field(..., ge=0, le=10)
    position: Optional[int] = Field(None, ge=0, description="Display order (default: list index)")


def to_subject_profiles(subjects: List[SubjectProfileRequest]) -> List[SubjectProfile]:
    return [
        SubjectProfile(
            subject=s.subject,
            weight=s.weight,
            current_level=s.current_level,
            goal_level=s.goal_level,
            position=s.position if s.position is not None else index,
        )
        for index, s in enumerate(subjects)
    ]


class CreateExamProfileRequest(CamelModel):
    """Request to create an exam profile"""
    name: str = Field(..., min_length=1, max_length=100)
    workspace_id: str = Field(..., min_length=1, max_length=64)
    exam_date: date
    weekly_hours: float = Field(..., ge=1, le=168, description="Study hours per week")
    is_active: bool = True
    subjects: List[SubjectProfileRequest] = Field(..., min_length=1)

    def to_domain(self) -> ExamProfile:
        return ExamProfile(
            name=self.name,
            workspace_id=self.workspace_id,
            exam_date=self.exam_date,
            weekly_hours=self.weekly_hours,
            is_active=self.is_active,
            subjects=tuple(to_subject_profiles(self.subjects)),
        )


class CreateFromTemplateRequest(CamelModel):
    """Request to create an exam profile from an exam template"""
    workspace_id: str = Field(..., min_length=1, max_length=64)
    template_id: str
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="Default: template name")
    exam_date: date
    weekly_hours: float = Field(..., ge=1, le=168)
    current_level: int = Field(0, ge=0, le=10, description="Starting level for every subject")


class UpdateExamProfileRequest(CamelModel):
    """Partial update; subjects, when given, replace the existing ones"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    exam_date: Optional[date] = None
    weekly_hours: Optional[float] = Field(None, ge=1, le=168)
    is_active: Optional[bool] = None
    subjects: Optional[List[SubjectProfileRequest]] = Field(None, min_length=1)


# -------------------------------------------------------------------
# Responses
# -------------------------------------------------------------------

class SubjectProfileResponse(CamelModel):
    subject: str
    weight: float
    current_level: int
    goal_level: int
    position: int


class ExamProfileResponse(CamelModel):
    """Persisted exam profile with subjects"""
    id: int
    workspace_id: str
    name: str
    exam_date: date
    weekly_hours: float
    is_active: bool
    subjects: List[SubjectProfileResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, profile: ExamProfile) -> "ExamProfileResponse":
        return cls(
            id=profile.id,
            workspace_id=profile.workspace_id,
            name=profile.name,
            exam_date=profile.exam_date,
            weekly_hours=profile.weekly_hours,
            is_active=profile.is_active,
            subjects=[
                SubjectProfileResponse(
                    subject=s.subject,
                    weight=s.weight,
                    current_level=s.current_level,
                    goal_level=s.goal_level,
                    position=s.position,
                )
                for s in profile.subjects
            ],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class AllocationResultResponse(CamelModel):
    subject: str
    total_hours: float
    hours_per_week: float
    gap: int
    percentage: int


class AllocationMetadataResponse(CamelModel):
    weeks_until_exam: int
    total_available_hours: float
    weekly_hours: float
    exam_date: date


class AllocationResponseSchema(CamelModel):
    """Study-time allocation per subject"""
    results: List[AllocationResultResponse]
    metadata: AllocationMetadataResponse

    @classmethod
    def from_domain(cls, response: AllocationResponse) -> "AllocationResponseSchema":
        return cls(
            results=[
                AllocationResultResponse(
                    subject=r.subject,
                    total_hours=float(r.total_hours),
                    hours_per_week=float(r.hours_per_week),
                    gap=r.gap,
                    percentage=r.percentage,
                )
                for r in response.results
            ],
            metadata=AllocationMetadataResponse(
                weeks_until_exam=response.metadata.weeks_until_exam,
                total_available_hours=float(response.metadata.total_available_hours),
                weekly_hours=float(response.metadata.weekly_hours),
                exam_date=response.metadata.exam_date,
            ),
        )


class ExamTemplateItemResponse(CamelModel):
    subject: str
    weight: float
    median_level: int


class ExamTemplateResponse(CamelModel):
    id: str
    name: str
    category: str
    items: List[ExamTemplateItemResponse]

    @classmethod
    def from_domain(cls, template: ExamTemplate) -> "ExamTemplateResponse":
        return cls(
            id=template.id,
            name=template.name,
            category=template.category,
            items=[
                ExamTemplateItemResponse(
                    subject=item.subject,
                    weight=item.weight,
                    median_level=item.median_level,
                )
                for item in template.items
            ],
        )
