"""SQLAlchemy table definitions for the enrollment back office.

Tables are used with SQLAlchemy Core; rows are converted to immutable
domain models in ``mappers``. The schema itself is owned by the database
(managed by the Alembic migrations under ``migrations/``).
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# REFERENCE DATA
# ============================================================================
programs_table = Table(
    "programs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False),
    Column("program_type", String(50), nullable=False),
)

courses_table = Table(
    "courses",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("code", String(20), nullable=False, unique=True),
    Column("title", String(255), nullable=False),
    Column("credits", Integer, nullable=False),
)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),
    Column("token", String(255), nullable=False, unique=True),
    Column("user_type", String(20), nullable=False),  # 'STUDENT', 'REGISTRAR'
    Column("status", String(20), nullable=False, server_default="PENDING"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("profile_id", UUID, nullable=True),
)

Index(
    "idx_invitations_pending_email",
    invitations_table.c.email,
    invitations_table.c.user_type,
    postgresql_where=invitations_table.c.status == "PENDING",
)

# ============================================================================
# ACADEMIC SESSIONS TABLE
# ============================================================================
academic_sessions_table = Table(
    "academic_sessions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(255), nullable=False),
    Column("start_date", TIMESTAMP(timezone=True), nullable=False),
    Column("end_date", TIMESTAMP(timezone=True), nullable=False),
    Column("enrollment_deadline", TIMESTAMP(timezone=True), nullable=False),
    Column("status", String(20), nullable=False, server_default="UPCOMING"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# At most one ACTIVE session
Index(
    "uq_academic_sessions_single_active",
    academic_sessions_table.c.status,
    unique=True,
    postgresql_where=academic_sessions_table.c.status == "ACTIVE",
)

# ============================================================================
# PROFILES
# ============================================================================
students_table = Table(
    "students",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("reg_number", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column(
        "program_id",
        UUID,
        ForeignKey("programs.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("first_name", String(100), nullable=True),
    Column("last_name", String(100), nullable=True),
    Column("identity_id", UUID, nullable=True, unique=True),
    Column("profile_picture", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

registrars_table = Table(
    "registrars",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("identity_id", UUID, nullable=False, unique=True),
    Column("profile_picture", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ENROLLMENTS TABLE
# ============================================================================
enrollments_table = Table(
    "enrollments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "student_id", UUID, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "course_id", UUID, ForeignKey("courses.id", ondelete="RESTRICT"), nullable=False
    ),
    Column(
        "session_id",
        UUID,
        ForeignKey("academic_sessions.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("status", String(20), nullable=False, server_default="PENDING"),
    Column(
        "registrar_id",
        UUID,
        ForeignKey("registrars.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("rejection_reason", Text, nullable=True),
    Column("special_request", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_enrollments_student_session",
    enrollments_table.c.student_id,
    enrollments_table.c.session_id,
)
Index(
    "idx_enrollments_session_status",
    enrollments_table.c.session_id,
    enrollments_table.c.status,
)

# ============================================================================
# STUDENT_REGISTRAR_SESSIONS TABLE (per-session claims)
# ============================================================================
student_registrar_sessions_table = Table(
    "student_registrar_sessions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "student_id", UUID, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "registrar_id",
        UUID,
        ForeignKey("registrars.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "session_id",
        UUID,
        ForeignKey("academic_sessions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("student_id", "session_id", name="uq_student_session_registrar"),
)
