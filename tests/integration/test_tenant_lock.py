# tests/integration/test_tenant_lock.py
"""A write that lands just before the school lock is granted must be seen by the locked check."""
from uuid import UUID

import pytest
from sqlalchemy import update

from idcard_api.models import AcademicSession, ClassModel
from idcard_api.services.base_service import BaseService


@pytest.fixture
async def open_class(world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers)
    klass = await api.klass(headers, session["id"])
    return session, klass


@pytest.fixture
def write_before_lock(app, monkeypatch):
    """Make the next lock_tenant call run ``stmt`` on another connection first."""
    taken = []
    original = BaseService.lock_tenant

    def arm(stmt):
        async def lock_tenant(self, school_id):
            async with app.state.db.session() as other:
                await other.execute(stmt)
                await other.commit()
            taken.append(school_id)
            return await original(self, school_id)

        monkeypatch.setattr(BaseService, "lock_tenant", lock_tenant)
        return taken

    return arm


async def test_student_edit_sees_concurrent_freeze(client, world, auth, api, open_class, write_before_lock):
    headers = auth(world.admin_a)
    _, klass = open_class
    student = await api.student(headers, klass["id"])

    taken = write_before_lock(update(ClassModel).where(ClassModel.id == UUID(klass["id"])).values(frozen=True))
    resp = await client.patch(f"/api/v1/students/{student['id']}", json={"name": "Late Edit"}, headers=headers)

    assert taken == [world.school_a.id]
    assert resp.status_code == 400
    assert resp.json()["error"] == "ClassFrozen"


async def test_student_delete_sees_concurrent_freeze(client, world, auth, api, open_class, write_before_lock):
    headers = auth(world.admin_a)
    _, klass = open_class
    student = await api.student(headers, klass["id"])

    write_before_lock(update(ClassModel).where(ClassModel.id == UUID(klass["id"])).values(frozen=True))
    resp = await client.delete(f"/api/v1/students/{student['id']}", headers=headers)
    assert resp.json()["error"] == "ClassFrozen"


async def test_student_create_sees_concurrent_freeze(client, world, auth, open_class, payloads, write_before_lock):
    _, klass = open_class

    write_before_lock(update(ClassModel).where(ClassModel.id == UUID(klass["id"])).values(frozen=True))
    resp = await client.post("/api/v1/students", json=payloads.student(klass["id"]), headers=auth(world.admin_a))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot create student in a frozen class"


async def test_class_create_sees_concurrent_deactivation(client, world, auth, open_class, write_before_lock):
    session, _ = open_class

    write_before_lock(
        update(AcademicSession).where(AcademicSession.id == UUID(session["id"])).values(active_status=False)
    )
    resp = await client.post(
        "/api/v1/classes",
        json={"className": "Grade 6-B", "sessionId": session["id"]},
        headers=auth(world.admin_a),
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "SessionInactive"


async def test_freeze_sees_concurrent_freeze(client, world, auth, open_class, write_before_lock):
    _, klass = open_class

    taken = write_before_lock(update(ClassModel).where(ClassModel.id == UUID(klass["id"])).values(frozen=True))
    resp = await client.patch(f"/api/v1/classes/{klass['id']}/freeze", headers=auth(world.admin_a))

    assert taken == [world.school_a.id]
    assert resp.status_code == 400
    assert resp.json()["message"] == "Class is already frozen"
