"""initial_schema

Create the enrollment back office schema:
- Programs and courses (reference data)
- Invitations (single-use, time-boxed onboarding tokens)
- Academic sessions (at most one ACTIVE)
- Students (placeholder rows created at invite time) and registrars
- Enrollments (one row per student, course and session request)
- Student/registrar claims per session

Role records live with the identity provider and are not part of this schema.

Revision ID: 3c1f9a7d2e44
Revises:
Create Date: 2026-09-14 10:12:03.518204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # REFERENCE DATA
    # ========================================================================
    op.create_table(
        "programs",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("program_type", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "courses",
        _id(),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    # ========================================================================
    # INVITATIONS
    # ========================================================================
    op.create_table(
        "invitations",
        _id(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("user_type", sa.String(20), nullable=False),
        sa.Column(
            "status", sa.String(20), server_default="PENDING", nullable=False
        ),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        _timestamp("created_at"),
        sa.Column("accepted_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("profile_id", sa.UUID(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token"),
        sa.CheckConstraint(
            "user_type IN ('STUDENT', 'REGISTRAR')", name="ck_invitations_user_type"
        ),
        sa.CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'EXPIRED', 'CANCELLED')",
            name="ck_invitations_status",
        ),
    )
    op.create_index(
        "idx_invitations_pending_email",
        "invitations",
        ["email", "user_type"],
        postgresql_where=sa.text("status = 'PENDING'"),
    )

    # ========================================================================
    # ACADEMIC SESSIONS
    # ========================================================================
    op.create_table(
        "academic_sessions",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("end_date", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "enrollment_deadline", postgresql.TIMESTAMP(timezone=True), nullable=False
        ),
        sa.Column(
            "status", sa.String(20), server_default="UPCOMING", nullable=False
        ),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('UPCOMING', 'ACTIVE', 'CLOSED')",
            name="ck_academic_sessions_status",
        ),
        sa.CheckConstraint(
            "enrollment_deadline < start_date AND start_date < end_date",
            name="ck_academic_sessions_dates",
        ),
    )
    op.create_index(
        "uq_academic_sessions_single_active",
        "academic_sessions",
        ["status"],
        unique=True,
        postgresql_where=sa.text("status = 'ACTIVE'"),
    )

    # ========================================================================
    # PROFILES
    # ========================================================================
    op.create_table(
        "students",
        _id(),
        sa.Column("reg_number", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("program_id", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("identity_id", sa.UUID(), nullable=True),
        sa.Column("profile_picture", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["program_id"], ["programs.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reg_number"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("identity_id"),
    )

    op.create_table(
        "registrars",
        _id(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("identity_id", sa.UUID(), nullable=False),
        sa.Column("profile_picture", sa.Text(), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("identity_id"),
    )

    # ========================================================================
    # ENROLLMENTS
    # ========================================================================
    op.create_table(
        "enrollments",
        _id(),
        sa.Column("student_id", sa.UUID(), nullable=False),
        sa.Column("course_id", sa.UUID(), nullable=False),
        sa.Column("session_id", sa.UUID(), nullable=False),
        sa.Column(
            "status", sa.String(20), server_default="PENDING", nullable=False
        ),
        sa.Column("registrar_id", sa.UUID(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column(
            "special_request", sa.Boolean(), server_default="false", nullable=False
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["session_id"], ["academic_sessions.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["registrar_id"], ["registrars.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED', 'CANCELLED', "
            "'ACTIVE', 'COMPLETED')",
            name="ck_enrollments_status",
        ),
    )
    op.create_index(
        "idx_enrollments_student_session", "enrollments", ["student_id", "session_id"]
    )
    op.create_index(
        "idx_enrollments_session_status", "enrollments", ["session_id", "status"]
    )

    # ========================================================================
    # STUDENT_REGISTRAR_SESSIONS (per-session claims)
    # ========================================================================
    op.create_table(
        "student_registrar_sessions",
        _id(),
        sa.Column("student_id", sa.UUID(), nullable=False),
        sa.Column("registrar_id", sa.UUID(), nullable=False),
        sa.Column("session_id", sa.UUID(), nullable=False),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["registrar_id"], ["registrars.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["session_id"], ["academic_sessions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "student_id", "session_id", name="uq_student_session_registrar"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("student_registrar_sessions")
    op.drop_index("idx_enrollments_session_status", table_name="enrollments")
    op.drop_index("idx_enrollments_student_session", table_name="enrollments")
    op.drop_table("enrollments")
    op.drop_table("registrars")
    op.drop_table("students")
    op.drop_index("uq_academic_sessions_single_active", table_name="academic_sessions")
    op.drop_table("academic_sessions")
    op.drop_index("idx_invitations_pending_email", table_name="invitations")
    op.drop_table("invitations")
    op.drop_table("courses")
    op.drop_table("programs")
