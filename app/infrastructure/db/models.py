"""
Database Models (SQLAlchemy ORM)
Exam profiles and their subjects
"""

from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime,
    Boolean, ForeignKey, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship

from app.infrastructure.db.database import Base
from app.utils.time import now_local_naive


class ExamProfileModel(Base):
    """Exam profile: target date + weekly study budget"""
    __tablename__ = "exam_profile"

    id = Column(Integer, primary_key=True, autoincrement=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    exam_date = Column(Date, nullable=False)
    weekly_hours = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    # Relationships
    subjects = relationship(
        "SubjectProfileModel",
        back_populates="exam_profile",
        cascade="all, delete-orphan",
        order_by="SubjectProfileModel.position",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("workspace_id", "name", name="uq_exam_profile_workspace_name"),
    )


class SubjectProfileModel(Base):
    """Subject weight and proficiency levels inside one exam profile"""
    __tablename__ = "subject_profile"

    id = Column(Integer, primary_key=True, autoincrement=True)
    exam_profile_id = Column(
        Integer,
        ForeignKey("exam_profile.id", ondelete="CASCADE"),
        nullable=False,
    )
    subject = Column(String(100), nullable=False)
    weight = Column(Float, nullable=False)
    current_level = Column(Integer, nullable=False)
    goal_level = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    exam_profile = relationship("ExamProfileModel", back_populates="subjects")

    # Indexes
    __table_args__ = (
        Index("ix_subject_profile_lookup", "exam_profile_id", "position"),
    )
