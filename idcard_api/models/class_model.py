# idcard_api/models/class_model.py
from sqlalchemy import Boolean, Column, ForeignKey, String, UniqueConstraint, Uuid

from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    # Foreign Keys
    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False, index=True)
    session_id = Column(Uuid, ForeignKey("sessions.id"), nullable=False, index=True)

    class_name = Column(String(50), nullable=False, index=True)
    frozen = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("school_id", "session_id", "class_name", name="uq_class_identity"),
    )
