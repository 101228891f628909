# idcard_api/models/school.py
"""Tenant (School) and its login gate."""
from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import validates

from .base import Base


class School(Base):
    __tablename__ = "schools"

    name = Column(String(100), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    contact_email = Column(String(254), nullable=False)
    status = Column(String(20), default="active", nullable=False)

    @validates("contact_email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value


class AllowedLogin(Base):
    """Per-school switch for which roles may sign in."""

    __tablename__ = "allowed_logins"

    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False, unique=True, index=True)
    allow_school_admin = Column(Boolean, default=True, nullable=False)
    allow_teacher = Column(Boolean, default=True, nullable=False)
