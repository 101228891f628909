"""initial schema: schools, users, sessions, classes, rosters, templates

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'schools',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('contact_email', sa.String(254), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
    )
    op.create_index('ix_schools_name', 'schools', ['name'])
    op.create_index('ix_schools_created_at', 'schools', ['created_at'])

    op.create_table(
        'allowed_logins',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        sa.Column('allow_school_admin', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('allow_teacher', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_allowed_logins_school_id', 'allowed_logins', ['school_id'], unique=True)
    op.create_index('ix_allowed_logins_created_at', 'allowed_logins', ['created_at'])

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('username', sa.String(30), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_school_id', 'users', ['school_id'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'login_logs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(30), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('school_id', sa.Uuid(), nullable=True),
        sa.Column('ip_address', sa.String(64), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_login_logs_username', 'login_logs', ['username'])
    op.create_index('ix_login_logs_school_id', 'login_logs', ['school_id'])
    op.create_index('ix_login_logs_timestamp', 'login_logs', ['timestamp'])
    op.create_index('ix_login_logs_created_at', 'login_logs', ['created_at'])

    op.create_table(
        'sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        sa.Column('session_name', sa.String(50), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('active_status', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'session_name', name='uq_session_name_per_school'),
        sa.CheckConstraint('start_date < end_date', name='ck_session_date_range'),
    )
    op.create_index('ix_sessions_school_id', 'sessions', ['school_id'])
    op.create_index('ix_sessions_created_at', 'sessions', ['created_at'])
    op.create_index(
        'uq_one_active_session_per_school',
        'sessions',
        ['school_id'],
        unique=True,
        postgresql_where=sa.text('active_status'),
    )

    op.create_table(
        'classes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        sa.Column('session_id', sa.Uuid(), sa.ForeignKey('sessions.id'), nullable=False),
        sa.Column('class_name', sa.String(50), nullable=False),
        sa.Column('frozen', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'session_id', 'class_name', name='uq_class_identity'),
    )
    op.create_index('ix_classes_school_id', 'classes', ['school_id'])
    op.create_index('ix_classes_session_id', 'classes', ['session_id'])
    op.create_index('ix_classes_class_name', 'classes', ['class_name'])
    op.create_index('ix_classes_created_at', 'classes', ['created_at'])

    op.create_table(
        'students',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('admission_no', sa.String(50), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('dob', sa.Date(), nullable=False),
        sa.Column('father_name', sa.String(100), nullable=False),
        sa.Column('mother_name', sa.String(100), nullable=False),
        sa.Column('mobile', sa.String(10), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('aadhaar', sa.String(12), nullable=True),
        sa.Column('photo_url', sa.String(500), nullable=True),
        sa.Column('class_id', sa.Uuid(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('session_id', sa.Uuid(), sa.ForeignKey('sessions.id'), nullable=False),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'admission_no', name='uq_student_admission_no'),
    )
    op.create_index('ix_students_admission_no', 'students', ['admission_no'])
    op.create_index('ix_students_class_id', 'students', ['class_id'])
    op.create_index('ix_students_session_id', 'students', ['session_id'])
    op.create_index('ix_students_school_id', 'students', ['school_id'])
    op.create_index('ix_students_created_at', 'students', ['created_at'])

    op.create_table(
        'teachers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        sa.Column('class_id', sa.Uuid(), sa.ForeignKey('classes.id'), nullable=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('mobile', sa.String(10), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('photo_url', sa.String(500), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.UniqueConstraint('school_id', 'email', name='uq_teacher_email_per_school'),
    )
    op.create_index('ix_teachers_school_id', 'teachers', ['school_id'])
    op.create_index('ix_teachers_class_id', 'teachers', ['class_id'])
    op.create_index('ix_teachers_name', 'teachers', ['name'])
    op.create_index('ix_teachers_created_at', 'teachers', ['created_at'])
    op.create_index(
        'uq_one_active_teacher_per_class',
        'teachers',
        ['class_id'],
        unique=True,
        postgresql_where=sa.text("status = 'active' AND class_id IS NOT NULL"),
    )

    op.create_table(
        'templates',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('layout_config', sa.JSON(), nullable=False),
        sa.Column('data_tags', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_templates_school_type', 'templates', ['school_id', 'type'])
    op.create_index('ix_templates_created_at', 'templates', ['created_at'])


def downgrade() -> None:
    for table in ('templates', 'teachers', 'students', 'classes', 'sessions',
                  'login_logs', 'users', 'allowed_logins', 'schools'):
        op.drop_table(table)
