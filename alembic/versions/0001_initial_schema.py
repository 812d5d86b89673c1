"""Initial schema: schools, classrooms, students and exam results.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables for the exam results service."""
    op.create_table(
        'schools',
        sa.Column('id', sa.BigInteger(), autoincrement=True, primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('current_academic_year', sa.String(20), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'classrooms',
        sa.Column('id', sa.BigInteger(), autoincrement=True, primary_key=True),
        sa.Column('school_id', sa.BigInteger(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('teacher_name', sa.String(255), nullable=True),
        sa.Column('capacity', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'name', name='uq_classroom_school_name'),
    )
    op.create_index('ix_classrooms_school_id', 'classrooms', ['school_id'])

    op.create_table(
        'students',
        sa.Column('id', sa.BigInteger(), autoincrement=True, primary_key=True),
        sa.Column('school_id', sa.BigInteger(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_app_id', sa.String(50), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('grade_applying_for', sa.String(100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('parent_name', sa.String(255), nullable=True),
        sa.Column('parent_contact', sa.String(50), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'student_app_id', name='uq_student_school_app_id'),
    )
    op.create_index('ix_students_school_id', 'students', ['school_id'])
    op.create_index('ix_students_student_app_id', 'students', ['student_app_id'])
    op.create_index('ix_students_grade_applying_for', 'students', ['grade_applying_for'])

    op.create_table(
        'exam_results',
        sa.Column('id', sa.BigInteger(), autoincrement=True, primary_key=True),
        sa.Column('school_id', sa.BigInteger(), sa.ForeignKey('schools.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_app_id', sa.String(50), nullable=False),
        sa.Column('student_name', sa.String(255), nullable=False),
        sa.Column('classroom_id', sa.BigInteger(), sa.ForeignKey('classrooms.id', ondelete='SET NULL'), nullable=True),
        sa.Column('classroom_name', sa.String(100), nullable=False),
        sa.Column('academic_year', sa.String(20), nullable=False),
        sa.Column('exam_type', sa.String(50), nullable=False),
        sa.Column('subjects', sa.JSON(), nullable=False),
        sa.Column('total_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('average_score', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint(
            'school_id', 'student_app_id', 'academic_year', 'exam_type',
            name='uq_exam_result_student_year_type',
        ),
    )
    op.create_index('ix_exam_results_school_id', 'exam_results', ['school_id'])
    op.create_index('ix_exam_results_student_app_id', 'exam_results', ['student_app_id'])
    op.create_index('ix_exam_results_classroom_id', 'exam_results', ['classroom_id'])
    op.create_index('ix_exam_results_classroom_name', 'exam_results', ['classroom_name'])
    op.create_index('ix_exam_results_academic_year', 'exam_results', ['academic_year'])


def downgrade() -> None:
    op.drop_table('exam_results')
    op.drop_table('students')
    op.drop_table('classrooms')
    op.drop_table('schools')
