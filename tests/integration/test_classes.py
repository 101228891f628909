# tests/integration/test_classes.py
async def test_create_class_takes_school_from_session(client, world, auth, api):
    session = await api.session(auth(world.superadmin), school_id=world.school_b.id)
    klass = await api.klass(auth(world.superadmin), session["id"], name="Grade 1")
    assert klass["schoolId"] == str(world.school_b.id)
    assert klass["frozen"] is False


async def test_class_needs_active_session(client, world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers, active=False)

    resp = await client.post(
        "/api/v1/classes", json={"className": "Grade 5-A", "sessionId": session["id"]}, headers=headers
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "SessionInactive"
    assert resp.json()["message"] == "Cannot create class in an inactive session"


async def test_unknown_session(client, world, auth):
    resp = await client.post(
        "/api/v1/classes",
        json={"className": "Grade 5-A", "sessionId": "00000000-0000-0000-0000-000000000001"},
        headers=auth(world.admin_a),
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "SessionNotFound"


async def test_class_in_other_schools_session_is_wrong_tenant(client, world, auth, api):
    session_a = await api.session(auth(world.admin_a))

    resp = await client.post(
        "/api/v1/classes", json={"className": "Sneaky", "sessionId": session_a["id"]}, headers=auth(world.admin_b)
    )
    assert resp.status_code == 403
    assert resp.json()["error"] == "WrongTenant"


async def test_duplicate_class_name_in_session(client, world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers)
    await api.klass(headers, session["id"], name="Grade 5-A")

    resp = await client.post(
        "/api/v1/classes", json={"className": "Grade 5-A", "sessionId": session["id"]}, headers=headers
    )
    assert resp.status_code == 409
    assert resp.json()["message"] == "Class name already exists for this session in your school"


async def test_freeze_unfreeze_state_machine(client, world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers)
    klass = await api.klass(headers, session["id"])

    resp = await client.patch(f"/api/v1/classes/{klass['id']}/freeze", headers=headers)
    assert resp.json()["data"]["frozen"] is True

    again = await client.patch(f"/api/v1/classes/{klass['id']}/freeze", headers=headers)
    assert again.status_code == 400
    assert again.json()["error"] == "AlreadyFrozen"

    resp = await client.patch(f"/api/v1/classes/{klass['id']}/unfreeze", headers=headers)
    assert resp.json()["data"]["frozen"] is False

    again = await client.patch(f"/api/v1/classes/{klass['id']}/unfreeze", headers=headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Class is already unfrozen"


async def test_freeze_other_schools_class(client, world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers)
    klass = await api.klass(headers, session["id"])

    resp = await client.patch(f"/api/v1/classes/{klass['id']}/freeze", headers=auth(world.admin_b))
    assert resp.status_code == 403
    assert resp.json()["message"] == "Class does not belong to your school"


async def test_list_classes_sorted_and_filtered(client, world, auth, api):
    headers = auth(world.admin_a)
    session = await api.session(headers)
    for name in ("Grade 7", "Grade 5", "Grade 6"):
        await api.klass(headers, session["id"], name=name)

    resp = await client.get(f"/api/v1/classes?sessionId={session['id']}", headers=auth(world.teacher_a))
    assert [c["className"] for c in resp.json()["data"]] == ["Grade 5", "Grade 6", "Grade 7"]

    other = await client.get("/api/v1/classes", headers=auth(world.admin_b))
    assert other.json()["data"] == []
    assert other.json()["pagination"]["total"] == 0
