"""
Allocation API Routes
Run the allocation engine on an unsaved profile snapshot
"""

from fastapi import APIRouter, Body, HTTPException
from typing import Any, Dict

from app.domain.exceptions import ProfileValidationError
from app.domain.schemas.exam_profile import AllocationResponseSchema
from app.utils.time import today_local

router = APIRouter()


@router.post("/preview", response_model=AllocationResponseSchema)
async def preview_allocation(snapshot: Dict[str, Any] = Body(...)):
    """
    Preview the allocation for a profile that is not stored yet

    The snapshot is checked by the profile validator, which reports every
    problem at once (422, one entry per field).
    """
    from app.main import allocation_engine

    if allocation_engine is None:
        raise HTTPException(status_code=500, detail="Allocation engine not initialized")

    try:
        allocation = allocation_engine.calculate(snapshot, today=today_local())
    except ProfileValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"field": v.field, "message": v.message} for v in e.violations],
        )
    return AllocationResponseSchema.from_domain(allocation)
