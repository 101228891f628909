# tests/unit/test_schemas.py
from uuid import uuid4

import pytest
from pydantic import ValidationError

from idcard_api.schemas.common import envelope
from idcard_api.schemas.student import StudentCreate, StudentUpdate
from idcard_api.schemas.teacher import TeacherUpdate


def student(**overrides):
    body = {
        "admissionNo": "ADM001",
        "name": "Aarav Sharma",
        "dob": "2014-06-15",
        "fatherName": "Rakesh Sharma",
        "motherName": "Sunita Sharma",
        "mobile": "9123456780",
        "address": "45 Lake Road",
        "classId": str(uuid4()),
    }
    body.update(overrides)
    return body


def test_student_accepts_camel_case_payload():
    data = StudentCreate.model_validate(student(aadhaar="123412341234", photoUrl="https://cdn.greenvalley.edu/a.png"))
    assert data.admission_no == "ADM001"
    assert data.aadhaar == "123412341234"


@pytest.mark.parametrize(
    "field,value",
    [
        ("mobile", "12345"),
        ("aadhaar", "1234"),
        ("photoUrl", "https://cdn.greenvalley.edu/a.pdf"),
        ("name", "x" * 101),
    ],
)
def test_student_field_rules(field, value):
    with pytest.raises(ValidationError):
        StudentCreate.model_validate(student(**{field: value}))


def test_blank_optional_fields_become_none():
    data = StudentCreate.model_validate(student(aadhaar="", photoUrl=""))
    assert data.aadhaar is None
    assert data.photo_url is None


def test_partial_update_only_sets_sent_fields():
    patch = StudentUpdate.model_validate({"mobile": "9000000001"})
    assert patch.model_dump(exclude_unset=True) == {"mobile": "9000000001"}


def test_teacher_update_distinguishes_null_class():
    assert TeacherUpdate.model_validate({"classId": None}).model_dump(exclude_unset=True) == {"class_id": None}
    assert TeacherUpdate.model_validate({}).model_dump(exclude_unset=True) == {}


def test_envelope_shape():
    assert envelope() == {"success": True}
    body = envelope([1], "ok", {"page": 1, "limit": 10, "total": 1, "pages": 1})
    assert body == {
        "success": True,
        "data": [1],
        "message": "ok",
        "pagination": {"page": 1, "limit": 10, "total": 1, "pages": 1},
    }
