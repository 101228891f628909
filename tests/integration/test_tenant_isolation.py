# tests/integration/test_tenant_isolation.py
import pytest


@pytest.fixture
async def roster_a(world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers)
    klass = await api.klass(headers, session["id"])
    student = await api.student(headers, klass["id"])
    teacher = await api.teacher(headers, class_id=klass["id"])
    return {"session": session, "class": klass, "student": student, "teacher": teacher}


@pytest.mark.parametrize(
    "method,path",
    [
        ("patch", "/api/v1/sessions/{session}/activate"),
        ("patch", "/api/v1/sessions/{session}/deactivate"),
        ("patch", "/api/v1/classes/{class}/freeze"),
        ("patch", "/api/v1/students/{student}"),
        ("delete", "/api/v1/students/{student}"),
        ("patch", "/api/v1/teachers/{teacher}"),
        ("delete", "/api/v1/teachers/{teacher}"),
    ],
)
async def test_other_school_cannot_touch_roster(client, world, auth, roster_a, method, path):
    url = path.format(**{name: obj["id"] for name, obj in roster_a.items()})
    kwargs = {"json": {}} if method == "patch" else {}

    resp = await client.request(method.upper(), url, headers=auth(world.admin_b), **kwargs)
    assert resp.status_code == 403
    assert resp.json()["error"] in ("WrongTenant", "Forbidden")


async def test_lists_are_scoped_to_callers_school(client, world, auth, roster_a):
    headers = auth(world.admin_b)
    for path in ("/api/v1/sessions", "/api/v1/classes", "/api/v1/students", "/api/v1/teachers"):
        resp = await client.get(path, headers=headers)
        assert resp.status_code == 200, path
        assert resp.json()["data"] == []
        assert resp.json()["pagination"]["total"] == 0


async def test_explicit_foreign_school_filter_is_forbidden(client, world, auth, roster_a):
    resp = await client.get(
        "/api/v1/students", params={"schoolId": str(world.school_a.id)}, headers=auth(world.admin_b)
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "You do not have access to this school"


async def test_class_filter_from_other_school(client, world, auth, roster_a):
    resp = await client.get(
        "/api/v1/students", params={"classId": roster_a["class"]["id"]}, headers=auth(world.admin_b)
    )
    assert resp.status_code == 403


async def test_superadmin_sees_every_school(client, world, auth, roster_a, api):
    await api.session(auth(world.admin_b), name="2025-26")

    resp = await client.get("/api/v1/sessions", headers=auth(world.superadmin))
    assert resp.json()["pagination"]["total"] == 2

    narrowed = await client.get(
        "/api/v1/sessions", params={"schoolId": str(world.school_b.id)}, headers=auth(world.superadmin)
    )
    assert [s["schoolId"] for s in narrowed.json()["data"]] == [str(world.school_b.id)]
