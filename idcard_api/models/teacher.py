# idcard_api/models/teacher.py
from sqlalchemy import Column, ForeignKey, Index, String, UniqueConstraint, Uuid, text
from sqlalchemy.orm import validates

from .base import Base


class Teacher(Base):
    __tablename__ = "teachers"

    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False, index=True)
    class_id = Column(Uuid, ForeignKey("classes.id"), nullable=True, index=True)

    name = Column(String(100), nullable=False, index=True)
    mobile = Column(String(10), nullable=False)
    email = Column(String(254), nullable=False)
    photo_url = Column(String(500), nullable=True)

    # Status
    status = Column(String(20), default="active", nullable=False)

    __table_args__ = (
        UniqueConstraint("school_id", "email", name="uq_teacher_email_per_school"),
        # one active teacher per class
        Index(
            "uq_one_active_teacher_per_class",
            "class_id",
            unique=True,
            postgresql_where=text("status = 'active' AND class_id IS NOT NULL"),
            sqlite_where=text("status = 'active' AND class_id IS NOT NULL"),
        ),
    )

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value
