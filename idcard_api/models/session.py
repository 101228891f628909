# idcard_api/models/session.py
"""Academic session (school year)."""
from sqlalchemy import Boolean, CheckConstraint, Column, Date, ForeignKey, Index, String, UniqueConstraint, Uuid, text

from .base import Base


class AcademicSession(Base):
    __tablename__ = "sessions"

    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False, index=True)
    session_name = Column(String(50), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    active_status = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("school_id", "session_name", name="uq_session_name_per_school"),
        CheckConstraint("start_date < end_date", name="ck_session_date_range"),
        # at most one active session per school
        Index(
            "uq_one_active_session_per_school",
            "school_id",
            unique=True,
            postgresql_where=text("active_status"),
            sqlite_where=text("active_status = 1"),
        ),
    )
