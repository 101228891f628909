# tests/integration/test_templates.py
import io

from openpyxl import load_workbook


async def create_template(client, headers, school_id, type="student", tags=None):
    resp = await client.post(
        "/api/v1/templates",
        json={
            "schoolId": str(school_id),
            "type": type,
            "layoutConfig": {"orientation": "portrait"},
            "dataTags": ["studentName", "admissionNo", "classId"] if tags is None else tags,
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def test_only_superadmin_creates_templates(client, world, auth):
    resp = await client.post(
        "/api/v1/templates",
        json={"schoolId": str(world.school_a.id), "type": "student", "dataTags": ["name"]},
        headers=auth(world.admin_a),
    )
    assert resp.status_code == 403


async def test_list_and_active_template_are_scoped(client, world, auth):
    root = auth(world.superadmin)
    older = await create_template(client, root, world.school_a.id)
    newer = await create_template(client, root, world.school_a.id, tags=["name", "email"])
    await create_template(client, root, world.school_b.id)

    listing = await client.get("/api/v1/templates", headers=auth(world.teacher_a))
    assert [t["id"] for t in listing.json()["data"]] == [newer["id"], older["id"]]

    active = await client.get("/api/v1/templates/active/student", headers=auth(world.admin_a))
    assert active.json()["data"]["id"] == newer["id"]
    assert active.json()["data"]["dataTags"] == ["name", "email"]

    missing = await client.get("/api/v1/templates/active/admin", headers=auth(world.admin_a))
    assert missing.status_code == 404
    assert missing.json()["message"] == "No template found for type: admin"


async def test_other_schools_template_is_wrong_tenant(client, world, auth):
    template = await create_template(client, auth(world.superadmin), world.school_b.id)

    resp = await client.get(f"/api/v1/templates/{template['id']}", headers=auth(world.admin_a))
    assert resp.status_code == 403


async def test_download_excel_uses_readable_headers(client, world, auth):
    template = await create_template(client, auth(world.superadmin), world.school_a.id)

    resp = await client.get(f"/api/v1/templates/{template['id']}/download-excel", headers=auth(world.admin_a))
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert 'filename="student_template.xlsx"' in resp.headers["content-disposition"]

    sheet = load_workbook(io.BytesIO(resp.content)).active
    assert [c.value for c in sheet[1]] == ["Student Name", "Admission Number", "Class ID"]
    assert [c.value for c in sheet[2]] == ["Example data"] * 3

    by_type = await client.get("/api/v1/templates/download-excel/student", headers=auth(world.teacher_a))
    assert by_type.status_code == 200


async def test_download_template_without_tags(client, world, auth):
    template = await create_template(client, auth(world.superadmin), world.school_a.id, type="teacher", tags=[])

    resp = await client.get(f"/api/v1/templates/{template['id']}/download-excel", headers=auth(world.admin_a))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Template does not have any data fields defined"
