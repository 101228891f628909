# tests/integration/test_users.py
def new_user(**overrides):
    body = {
        "name": "Kiran Rao",
        "email": "kiran@greenvalley.edu",
        "username": "kiran_r",
        "password": "kiran123",
        "role": "Teacher",
    }
    body.update(overrides)
    return body


async def test_schooladmin_creates_teacher_in_own_school(client, world, auth):
    resp = await client.post("/api/v1/users", json=new_user(), headers=auth(world.admin_a))
    assert resp.status_code == 201
    user = resp.json()["data"]
    assert user["schoolId"] == str(world.school_a.id)
    assert "password" not in user and "passwordHash" not in user

    login = await client.post("/api/v1/auth/login", json={"email": "kiran@greenvalley.edu", "password": "kiran123"})
    assert login.status_code == 200


async def test_duplicate_email_or_username(client, world, auth):
    headers = auth(world.superadmin)
    dup_email = new_user(email="ADMIN@greenvalley.edu", schoolId=str(world.school_a.id))
    dup_username = new_user(username="asha_admin", schoolId=str(world.school_a.id))

    for body in (dup_email, dup_username):
        resp = await client.post("/api/v1/users", json=body, headers=headers)
        assert resp.status_code == 409
        assert resp.json()["message"] == "User with this email or username already exists"


async def test_schooladmin_cannot_create_superadmin_or_other_school_user(client, world, auth):
    headers = auth(world.admin_a)
    resp = await client.post("/api/v1/users", json=new_user(role="Superadmin"), headers=headers)
    assert resp.status_code == 403

    resp = await client.post("/api/v1/users", json=new_user(schoolId=str(world.school_b.id)), headers=headers)
    assert resp.status_code == 403


async def test_superadmin_must_name_school_for_school_roles(client, world, auth):
    resp = await client.post("/api/v1/users", json=new_user(), headers=auth(world.superadmin))
    assert resp.status_code == 400
    assert resp.json()["message"] == "School ID is required"


async def test_demoting_superadmin_needs_a_school(client, world, auth):
    headers = auth(world.superadmin)
    resp = await client.post("/api/v1/users", json=new_user(role="Superadmin"), headers=headers)
    kiran = resp.json()["data"]
    assert kiran["schoolId"] is None

    resp = await client.put(f"/api/v1/users/{kiran['id']}", json={"role": "Teacher"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "School ID is required"

    resp = await client.put(
        f"/api/v1/users/{kiran['id']}",
        json={"role": "Teacher", "schoolId": str(world.school_a.id)},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "Teacher"
    assert resp.json()["data"]["schoolId"] == str(world.school_a.id)


async def test_short_password_rejected(client, world, auth):
    resp = await client.post("/api/v1/users", json=new_user(password="abc"), headers=auth(world.admin_a))
    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"


async def test_list_is_tenant_scoped_and_hides_superadmins(client, world, auth):
    resp = await client.get("/api/v1/users", headers=auth(world.admin_a))
    assert [u["username"] for u in resp.json()["data"]] == ["asha_admin", "tara_t"]

    everyone = await client.get("/api/v1/users", headers=auth(world.superadmin))
    assert everyone.json()["pagination"]["total"] == 4

    teachers = await client.get("/api/v1/users?role=Teacher", headers=auth(world.superadmin))
    assert [u["username"] for u in teachers.json()["data"]] == ["tara_t"]


async def test_cross_tenant_user_access(client, world, auth):
    headers = auth(world.admin_b)
    resp = await client.get(f"/api/v1/users/{world.teacher_a.id}", headers=headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "WrongTenant"

    resp = await client.get(f"/api/v1/users/{world.superadmin.id}", headers=headers)
    assert resp.status_code == 403


async def test_update_rehashes_password_and_delete(client, world, auth):
    headers = auth(world.admin_a)
    resp = await client.put(
        f"/api/v1/users/{world.teacher_a.id}", json={"password": "brandnew1", "name": "Tara T."}, headers=headers
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Tara T."

    login = await client.post("/api/v1/auth/login", json={"email": "tara@greenvalley.edu", "password": "brandnew1"})
    assert login.status_code == 200

    assert (await client.delete(f"/api/v1/users/{world.teacher_a.id}", headers=headers)).status_code == 200
    assert (await client.get(f"/api/v1/users/{world.teacher_a.id}", headers=headers)).status_code == 404


async def test_teachers_cannot_manage_users(client, world, auth):
    resp = await client.get("/api/v1/users", headers=auth(world.teacher_a))
    assert resp.status_code == 403


async def test_login_logs_superadmin_only(client, world, auth):
    await client.post("/api/v1/auth/login", json={"email": "admin@greenvalley.edu", "password": "secret123"})
    await client.post("/api/v1/auth/login", json={"email": "admin@blueridge.edu", "password": "secret123"})

    resp = await client.get("/api/v1/login-logs", headers=auth(world.superadmin))
    assert resp.status_code == 200
    assert [log["username"] for log in resp.json()["data"]] == ["bala_admin", "asha_admin"]

    scoped = await client.get(f"/api/v1/login-logs?schoolId={world.school_b.id}", headers=auth(world.superadmin))
    assert [log["username"] for log in scoped.json()["data"]] == ["bala_admin"]

    assert (await client.get("/api/v1/login-logs", headers=auth(world.admin_a))).status_code == 403
