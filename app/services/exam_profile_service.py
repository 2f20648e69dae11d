"""
SERVICE - EXAM PROFILE SERVICE

Exam profile lifecycle and allocation calculation.
This service:
- Persists profiles through ExamProfileRepository
- Enforces unique profile names per workspace
- Resolves "today" in the planner timezone and runs the AllocationEngine

NO HTTP concerns.
NO authorization (callers pass already-checked workspace ids).
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import DuplicateProfileNameError, ExamProfileNotFoundError
from app.domain.models import AllocationResponse, ExamProfile, ExamTemplate, SubjectProfile
from app.domain.services.allocation_engine import AllocationEngine
from app.infrastructure.db.repositories.exam_profile_repository import ExamProfileRepository
from app.utils.time import today_local

logger = logging.getLogger(__name__)


class ExamProfileService:
    """Exam profile CRUD + allocation"""

    def __init__(
        self,
        session: AsyncSession,
        engine: AllocationEngine,
        clock: Callable[[], date] = today_local,
    ):
        self.repo = ExamProfileRepository(session)
        self.engine = engine
        self.clock = clock

    async def list(self, workspace_id: str) -> List[ExamProfile]:
        return await self.repo.list_for_workspace(workspace_id)

    async def get(self, profile_id: int) -> ExamProfile:
        profile = await self.repo.get(profile_id)
        if profile is None:
            raise ExamProfileNotFoundError(profile_id)
        return profile

    async def create(self, workspace_id: str, profile: ExamProfile) -> ExamProfile:
        if await self.repo.exists_with_name(workspace_id, profile.name):
            raise DuplicateProfileNameError(workspace_id, profile.name)

        created = await self.repo.create(workspace_id, profile)
        logger.info(
            f"Created exam profile {created.id} '{created.name}' "
            f"({len(created.subjects)} subjects) in workspace {workspace_id}"
        )
        return created

    async def create_from_template(
        self,
        workspace_id: str,
        template: ExamTemplate,
        exam_date: date,
        weekly_hours: float,
        name: Optional[str] = None,
        current_level: int = 0,
    ) -> ExamProfile:
        """Create a profile whose subjects come from an exam template"""
        profile = ExamProfile(
            name=name or template.name,
            workspace_id=workspace_id,
            exam_date=exam_date,
            weekly_hours=weekly_hours,
            subjects=tuple(template.to_subject_profiles(current_level)),
        )
        return await self.create(workspace_id, profile)

    async def update(
        self,
        profile_id: int,
        name: Optional[str] = None,
        exam_date: Optional[date] = None,
        weekly_hours: Optional[float] = None,
        is_active: Optional[bool] = None,
        subjects: Optional[Sequence[SubjectProfile]] = None,
    ) -> ExamProfile:
        existing = await self.get(profile_id)

        if name is not None and name != existing.name:
            if await self.repo.exists_with_name(existing.workspace_id, name, exclude_id=profile_id):
                raise DuplicateProfileNameError(existing.workspace_id, name)

        updated = await self.repo.update(
            profile_id,
            name=name,
            exam_date=exam_date,
            weekly_hours=weekly_hours,
            is_active=is_active,
            subjects=subjects,
        )
        logger.info(f"Updated exam profile {profile_id}")
        return updated

    async def delete(self, profile_id: int) -> None:
        if not await self.repo.delete(profile_id):
            raise ExamProfileNotFoundError(profile_id)
        logger.info(f"Deleted exam profile {profile_id}")

    async def calculate_allocation(self, profile_id: int) -> AllocationResponse:
        """
        Compute the study-time allocation of a stored profile

        Raises:
            ExamProfileNotFoundError: If the profile does not exist
            ProfileValidationError: If the stored profile is invalid
        """
        profile = await self.get(profile_id)
        return self.engine.calculate(profile, today=self.clock())
