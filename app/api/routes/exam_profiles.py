"""
Exam Profile API Routes
Manage exam profiles and calculate study-time allocation

Authorization is handled upstream: workspace ids arriving here are trusted.
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.domain.exceptions import (
    DuplicateProfileNameError,
    ExamProfileNotFoundError,
    ProfileValidationError,
)
from app.domain.schemas.exam_profile import (
    AllocationResponseSchema,
    CreateExamProfileRequest,
    CreateFromTemplateRequest,
    ExamProfileResponse,
    UpdateExamProfileRequest,
    to_subject_profiles,
)
from app.infrastructure.db.database import get_db
from app.services.exam_profile_service import ExamProfileService

router = APIRouter()


# -------------------------------------------------------------------
# Helper utilities
# -------------------------------------------------------------------

def get_service(db: AsyncSession = Depends(get_db)) -> ExamProfileService:
    from app.main import allocation_engine

    if allocation_engine is None:
        raise HTTPException(status_code=500, detail="Allocation engine not initialized")
    return ExamProfileService(db, allocation_engine)


def validation_detail(exc: ProfileValidationError) -> list:
    return [{"field": v.field, "message": v.message} for v in exc.violations]


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@router.get("", response_model=List[ExamProfileResponse])
async def list_profiles(
    workspace_id: str = Query(..., alias="workspaceId"),
    service: ExamProfileService = Depends(get_service),
):
    """
    List exam profiles of a workspace (active first, then by name)
    """
    try:
        profiles = await service.list(workspace_id)
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=validation_detail(e))
    return [ExamProfileResponse.from_domain(p) for p in profiles]


@router.post("", response_model=ExamProfileResponse, status_code=201)
async def create_profile(
    request: CreateExamProfileRequest,
    service: ExamProfileService = Depends(get_service),
):
    """
    Create an exam profile with its subjects
    """
    try:
        profile = await service.create(request.workspace_id, request.to_domain())
    except DuplicateProfileNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ExamProfileResponse.from_domain(profile)


@router.post("/from-template", response_model=ExamProfileResponse, status_code=201)
async def create_profile_from_template(
    request: CreateFromTemplateRequest,
    service: ExamProfileService = Depends(get_service),
):
    """
    Create an exam profile from a public exam template

    Every subject starts at `currentLevel` and aims at the template's median level.
    """
    from app.main import template_catalog

    if template_catalog is None:
        raise HTTPException(status_code=500, detail="Exam templates not loaded")

    template = template_catalog.get(request.template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Exam template not found")

    try:
        profile = await service.create_from_template(
            workspace_id=request.workspace_id,
            template=template,
            exam_date=request.exam_date,
            weekly_hours=request.weekly_hours,
            name=request.name,
            current_level=request.current_level,
        )
    except DuplicateProfileNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ExamProfileResponse.from_domain(profile)


@router.get("/{profile_id}", response_model=ExamProfileResponse)
async def get_profile(
    profile_id: int,
    service: ExamProfileService = Depends(get_service),
):
    """Get one exam profile with its subjects"""
    try:
        profile = await service.get(profile_id)
    except ExamProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=validation_detail(e))
    return ExamProfileResponse.from_domain(profile)


@router.put("/{profile_id}", response_model=ExamProfileResponse)
async def update_profile(
    profile_id: int,
    request: UpdateExamProfileRequest,
    service: ExamProfileService = Depends(get_service),
):
    """
    Update an exam profile

    Omitted fields are left unchanged; `subjects`, when sent, replace all
    existing subjects.
    """
    subjects = to_subject_profiles(request.subjects) if request.subjects is not None else None
    try:
        profile = await service.update(
            profile_id,
            name=request.name,
            exam_date=request.exam_date,
            weekly_hours=request.weekly_hours,
            is_active=request.is_active,
            subjects=subjects,
        )
    except ExamProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateProfileNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=validation_detail(e))
    return ExamProfileResponse.from_domain(profile)


@router.delete("/{profile_id}")
async def delete_profile(
    profile_id: int,
    service: ExamProfileService = Depends(get_service),
):
    """Delete an exam profile and its subjects"""
    try:
        await service.delete(profile_id)
    except ExamProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}


@router.post("/{profile_id}/calculate", response_model=AllocationResponseSchema)
async def calculate_allocation(
    profile_id: int,
    service: ExamProfileService = Depends(get_service),
):
    """
    Calculate weekly and total study hours per subject until the exam
    """
    try:
        allocation = await service.calculate_allocation(profile_id)
    except ExamProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=validation_detail(e))
    return AllocationResponseSchema.from_domain(allocation)
