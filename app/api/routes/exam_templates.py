"""
Exam Template API Routes
Expose public exam templates
"""

from fastapi import APIRouter, HTTPException
from typing import List

from app.domain.schemas.exam_profile import ExamTemplateResponse

router = APIRouter()


def _catalog():
    from app.main import template_catalog

    if template_catalog is None:
        raise HTTPException(status_code=500, detail="Exam templates not loaded")
    return template_catalog


@router.get("", response_model=List[ExamTemplateResponse])
async def list_templates():
    """
    List public exam templates ordered by category and name
    """
    return [ExamTemplateResponse.from_domain(t) for t in _catalog().list_public()]


@router.get("/categories", response_model=List[str])
async def list_categories():
    """Distinct categories of public templates"""
    return _catalog().categories()


@router.get("/{template_id}", response_model=ExamTemplateResponse)
async def get_template(template_id: str):
    """Get a single public template with its subjects"""
    template = _catalog().get(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Exam template not found")
    return ExamTemplateResponse.from_domain(template)
