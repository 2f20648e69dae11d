# alembic/versions/001_initial.py

"""Exam profile schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create exam_profile table
    op.create_table('exam_profile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workspace_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('exam_date', sa.Date(), nullable=False),
        sa.Column('weekly_hours', sa.Float(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('workspace_id', 'name', name='uq_exam_profile_workspace_name')
    )
    op.create_index('ix_exam_profile_workspace_id', 'exam_profile', ['workspace_id'])

    # Create subject_profile table
    op.create_table('subject_profile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('exam_profile_id', sa.Integer(), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('current_level', sa.Integer(), nullable=False),
        sa.Column('goal_level', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['exam_profile_id'], ['exam_profile.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_subject_profile_lookup', 'subject_profile', ['exam_profile_id', 'position'])


def downgrade():
    op.drop_index('ix_subject_profile_lookup', table_name='subject_profile')
    op.drop_table('subject_profile')
    op.drop_index('ix_exam_profile_workspace_id', table_name='exam_profile')
    op.drop_table('exam_profile')
