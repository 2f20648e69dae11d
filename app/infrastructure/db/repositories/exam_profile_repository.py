"""
Exam Profile Repository
CRUD operations for exam profiles and their subjects

Subjects are owned by their profile: they are only created, replaced or
deleted together with it.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from sqlalchemy.orm import selectinload
from datetime import date
from typing import List, Optional, Sequence

from app.infrastructure.db.models import ExamProfileModel, SubjectProfileModel
from app.domain.exceptions import ProfileValidationError
from app.domain.models import ExamProfile, FieldViolation, SubjectProfile


class ExamProfileRepository:
    """Repository for ExamProfile data access"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def create(self, workspace_id: str, profile: ExamProfile) -> ExamProfile:
        """
        Create new exam profile with its subjects

        Args:
            workspace_id: Owning workspace
            profile: Validated profile snapshot

        Returns:
            Created ExamProfile (with id)
        """
        model = ExamProfileModel(
            workspace_id=workspace_id,
            name=profile.name,
            exam_date=profile.exam_date,
            weekly_hours=profile.weekly_hours,
            is_active=profile.is_active,
            subjects=self._subject_models(profile.subjects),
        )

        self.session.add(model)
        await self.session.flush()

        return await self.get(model.id)

    async def get(self, profile_id: int) -> Optional[ExamProfile]:
        """
        Get exam profile by id

        Returns:
            ExamProfile with subjects ordered by position, or None
        """
        model = await self._get_model(profile_id)
        return self._to_domain(model) if model else None

    async def list_for_workspace(self, workspace_id: str) -> List[ExamProfile]:
        """
        List profiles of a workspace

        Returns:
            Active profiles first, then by name
        """
        result = await self.session.execute(
            select(ExamProfileModel)
            .options(selectinload(ExamProfileModel.subjects))
            .where(ExamProfileModel.workspace_id == workspace_id)
            .order_by(ExamProfileModel.is_active.desc(), ExamProfileModel.name.asc())
        )
        return [self._to_domain(model) for model in result.scalars().all()]

    async def exists_with_name(
        self,
        workspace_id: str,
        name: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        """Check whether the workspace already has a profile with this name"""
        conditions = [
            ExamProfileModel.workspace_id == workspace_id,
            ExamProfileModel.name == name,
        ]
        if exclude_id is not None:
            conditions.append(ExamProfileModel.id != exclude_id)

        result = await self.session.execute(
            select(ExamProfileModel.id).where(and_(*conditions))
        )
        return result.first() is not None

    async def update(
        self,
        profile_id: int,
        name: Optional[str] = None,
        exam_date: Optional[date] = None,
        weekly_hours: Optional[float] = None,
        is_active: Optional[bool] = None,
        subjects: Optional[Sequence[SubjectProfile]] = None,
    ) -> Optional[ExamProfile]:
        """
        Partially update a profile

        When `subjects` is given, the existing subjects are replaced wholesale.

        Returns:
            Updated ExamProfile, or None if it does not exist
        """
        model = await self._get_model(profile_id)
        if model is None:
            return None

        if name is not None:
            model.name = name
        if exam_date is not None:
            model.exam_date = exam_date
        if weekly_hours is not None:
            model.weekly_hours = weekly_hours
        if is_active is not None:
            model.is_active = is_active
        if subjects is not None:
            model.subjects = self._subject_models(subjects)

        await self.session.flush()

        return await self.get(profile_id)

    async def delete(self, profile_id: int) -> bool:
        """
        Delete a profile and its subjects

        Returns:
            True if a profile was deleted
        """
        model = await self._get_model(profile_id)
        if model is None:
            return False

        await self.session.delete(model)
        await self.session.flush()
        return True

    async def _get_model(self, profile_id: int) -> Optional[ExamProfileModel]:
        result = await self.session.execute(
            select(ExamProfileModel)
            .options(selectinload(ExamProfileModel.subjects))
            .where(ExamProfileModel.id == profile_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _subject_models(subjects: Sequence[SubjectProfile]) -> List[SubjectProfileModel]:
        return [
            SubjectProfileModel(
                subject=subject.subject,
                weight=subject.weight,
                current_level=subject.current_level,
                goal_level=subject.goal_level,
                position=subject.position,
            )
            for subject in subjects
        ]

    @staticmethod
    def _to_domain(model: ExamProfileModel) -> ExamProfile:
        """Convert database model to domain entity"""
        if not model.subjects:
            raise ProfileValidationError(
                [FieldViolation("subjects", "must contain at least 1 subject")]
            )
        subjects = sorted(model.subjects, key=lambda s: (s.position, s.id))
        return ExamProfile(
            id=model.id,
            workspace_id=model.workspace_id,
            name=model.name,
            exam_date=model.exam_date,
            weekly_hours=model.weekly_hours,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
            subjects=tuple(
                SubjectProfile(
                    subject=s.subject,
                    weight=s.weight,
                    current_level=s.current_level,
                    goal_level=s.goal_level,
                    position=s.position,
                )
                for s in subjects
            ),
        )
