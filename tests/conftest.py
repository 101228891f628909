# tests/conftest.py
from datetime import date
from types import SimpleNamespace

import httpx
import pytest

from idcard_api.core.config import Settings
from idcard_api.core.security import create_access_token, hash_password
from idcard_api.main import create_app
from idcard_api.models import AllowedLogin, School, User

PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret_key="test-secret",
        bcrypt_rounds=4,
        redis_url=None,
        google_client_id="test-client-id.apps.googleusercontent.com",
        log_level="WARNING",
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    await app.state.db.create_all()
    yield app
    app.dependency_overrides.clear()
    await app.state.db.dispose()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def db(app):
    async with app.state.db.session() as session:
        yield session


async def _school(db, name, email):
    school = School(name=name, address="12 Main Street", contact_email=email, status="active")
    db.add(school)
    await db.flush()
    db.add(AllowedLogin(school_id=school.id, allow_school_admin=True, allow_teacher=True))
    return school


def _user(name, email, username, role, school_id=None, status="active"):
    return User(
        name=name,
        email=email,
        username=username,
        password_hash=hash_password(PASSWORD, rounds=4),
        role=role,
        school_id=school_id,
        status=status,
    )


@pytest.fixture
async def world(db):
    """Two schools, a superadmin, one admin per school and a teacher in school A."""
    school_a = await _school(db, "Green Valley School", "office@greenvalley.edu")
    school_b = await _school(db, "Blue Ridge School", "office@blueridge.edu")

    superadmin = _user("Root Admin", "root@idcard.edu", "rootadmin", "Superadmin")
    admin_a = _user("Asha Admin", "admin@greenvalley.edu", "asha_admin", "Schooladmin", school_a.id)
    admin_b = _user("Bala Admin", "admin@blueridge.edu", "bala_admin", "Schooladmin", school_b.id)
    teacher_a = _user("Tara Teacher", "tara@greenvalley.edu", "tara_t", "Teacher", school_a.id)
    db.add_all([superadmin, admin_a, admin_b, teacher_a])
    await db.commit()

    return SimpleNamespace(
        school_a=school_a,
        school_b=school_b,
        superadmin=superadmin,
        admin_a=admin_a,
        admin_b=admin_b,
        teacher_a=teacher_a,
    )


@pytest.fixture
def auth(settings):
    """``auth(user)`` -> Authorization header for that user."""

    def make(user):
        token = create_access_token(user.id, user.role, user.school_id, settings)
        return {"Authorization": f"Bearer {token}"}

    return make


class Api:
    """Small helpers for building roster fixtures through the HTTP API."""

    def __init__(self, client):
        self.client = client

    async def session(self, headers, name="2025-26", active=True, school_id=None, start=None, end=None):
        body = {
            "sessionName": name,
            "startDate": (start or date(2025, 4, 1)).isoformat(),
            "endDate": (end or date(2026, 3, 31)).isoformat(),
        }
        if school_id:
            body["schoolId"] = str(school_id)
        resp = await self.client.post("/api/v1/sessions", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        session = resp.json()["data"]
        if active:
            resp = await self.client.patch(f"/api/v1/sessions/{session['id']}/activate", headers=headers)
            assert resp.status_code == 200, resp.text
            session = resp.json()["data"]
        return session

    async def klass(self, headers, session_id, name="Grade 5-A"):
        resp = await self.client.post(
            "/api/v1/classes", json={"className": name, "sessionId": session_id}, headers=headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    async def student(self, headers, class_id, admission_no="ADM001", **overrides):
        body = student_payload(class_id, admission_no, **overrides)
        resp = await self.client.post("/api/v1/students", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    async def teacher(self, headers, email="ravi@greenvalley.edu", class_id=None, **overrides):
        body = {"name": "Ravi Kumar", "mobile": "9876543210", "email": email, **overrides}
        if class_id:
            body["classId"] = class_id
        resp = await self.client.post("/api/v1/teachers", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]


def student_payload(class_id, admission_no="ADM001", **overrides):
    body = {
        "admissionNo": admission_no,
        "name": "Aarav Sharma",
        "dob": "2014-06-15",
        "fatherName": "Rakesh Sharma",
        "motherName": "Sunita Sharma",
        "mobile": "9123456780",
        "address": "45 Lake Road",
        "classId": class_id,
    }
    body.update(overrides)
    return body


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def payloads():
    return SimpleNamespace(student=student_payload)
