# idcard_api/models/user.py
from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import validates

from .base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(254), nullable=False, unique=True, index=True)
    username = Column(String(30), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=True, index=True)
    status = Column(String(20), default="active", nullable=False)

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value


class LoginLog(Base):
    """Append-only audit trail of successful sign-ins."""

    __tablename__ = "login_logs"

    username = Column(String(30), nullable=False, index=True)
    role = Column(String(20), nullable=False)
    school_id = Column(Uuid, nullable=True, index=True)
    ip_address = Column(String(64), nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
