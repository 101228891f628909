# idcard_api/models/__init__.py
"""Import all models here, if needed for Alembic migration."""
from .base import Base

# Tenant directory
from .school import AllowedLogin, School

# Identity
from .user import LoginLog, User

# Tenant-specific models
from .session import AcademicSession
from .class_model import ClassModel
from .student import Student
from .teacher import Teacher
from .template import Template

__all__ = [
    "Base",
    "School",
    "AllowedLogin",
    "User",
    "LoginLog",
    "AcademicSession",
    "ClassModel",
    "Student",
    "Teacher",
    "Template",
]
