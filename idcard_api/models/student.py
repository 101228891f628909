# idcard_api/models/student.py
from sqlalchemy import Column, Date, ForeignKey, String, UniqueConstraint, Uuid

from .base import Base


class Student(Base):
    __tablename__ = "students"

    admission_no = Column(String(50), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    dob = Column(Date, nullable=False)
    father_name = Column(String(100), nullable=False)
    mother_name = Column(String(100), nullable=False)
    mobile = Column(String(10), nullable=False)
    address = Column(String(500), nullable=False)
    aadhaar = Column(String(12), nullable=True)
    photo_url = Column(String(500), nullable=True)

    # Derived from the class at creation time
    class_id = Column(Uuid, ForeignKey("classes.id"), nullable=False, index=True)
    session_id = Column(Uuid, ForeignKey("sessions.id"), nullable=False, index=True)
    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("school_id", "admission_no", name="uq_student_admission_no"),
    )
