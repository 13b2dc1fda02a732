import pytest

PROJECT = {
    "title": "Build a landing page",
    "description": "Marketing site for our launch",
    "budget": 1500,
    "job_type": "Fixed",
    "skills_required": ["React", "CSS"],
}


@pytest.fixture
async def acme(register):
    return await register("Acme Studio", "hr@acme.com", user_type="employer")


@pytest.fixture
async def jane(register):
    return await register("Jane Doe", "jane@example.com")


async def _create_project(client, headers, **fields):
    payload = dict(PROJECT, **fields)
    response = await client.post("/api/projects", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_employer_creates_project(client, acme):
    project = await _create_project(client, acme["headers"])
    assert project["status"] == "open"
    assert project["interest_count"] == 0
    assert project["budget"] == 1500
    assert project["employer"]["CompanyName"] == "Acme Studio"
    assert project["EmployerID"] == project["employer"]["EmployerID"]


async def test_freelancer_cannot_create_project(client, jane):
    response = await client.post("/api/projects", json=PROJECT, headers=jane["headers"])
    assert response.status_code == 403
    assert response.json()["success"] is False


async def test_list_projects_filters_by_status(client, acme):
    first = await _create_project(client, acme["headers"], title="First")
    await _create_project(client, acme["headers"], title="Second", status="closed")

    open_projects = await client.get("/api/projects", params={"status": "open"}, headers=acme["headers"])
    assert [p["title"] for p in open_projects.json()["data"]] == ["First"]

    mine = await client.get(
        "/api/projects", params={"employer_id": first["EmployerID"]}, headers=acme["headers"]
    )
    # 最新的在前
    assert [p["title"] for p in mine.json()["data"]] == ["Second", "First"]


async def test_only_owner_can_update_or_delete(client, acme, register):
    project = await _create_project(client, acme["headers"])
    globex = await register("Globex Corp", "jobs@globex.com", user_type="employer")

    response = await client.put(
        f"/api/projects/{project['id']}", json={"status": "closed"}, headers=globex["headers"]
    )
    assert response.status_code == 403

    response = await client.put(
        f"/api/projects/{project['id']}", json={"status": "in_progress"}, headers=acme["headers"]
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "in_progress"

    response = await client.delete(f"/api/projects/{project['id']}", headers=acme["headers"])
    assert response.status_code == 200
    response = await client.get(f"/api/projects/{project['id']}", headers=acme["headers"])
    assert response.status_code == 404


async def test_interest_counts_once_and_notifies_employer(client, acme, jane):
    project = await _create_project(client, acme["headers"])

    first = await client.post(f"/api/projects/{project['id']}/interest", headers=jane["headers"])
    assert first.status_code == 200
    assert first.json()["data"] == {"project_id": project["id"], "interest_count": 1, "created": True}

    again = await client.post(f"/api/projects/{project['id']}/interest", headers=jane["headers"])
    assert again.json()["data"]["interest_count"] == 1
    assert again.json()["data"]["created"] is False

    notifications = await client.get("/api/notifications", headers=acme["headers"])
    items = notifications.json()["data"]
    assert len(items) == 1
    assert items[0]["title"] == "New interest in your project"
    assert items[0]["data"]["url"].startswith("/freelancers/")
    assert items[0]["read_at"] is None


async def test_employer_cannot_express_interest(client, acme):
    project = await _create_project(client, acme["headers"])
    response = await client.post(f"/api/projects/{project['id']}/interest", headers=acme["headers"])
    assert response.status_code == 403


async def test_interest_on_missing_project(client, jane):
    response = await client.post("/api/projects/999/interest", headers=jane["headers"])
    assert response.status_code == 404


async def test_mark_notification_read_is_one_way(client, acme, jane, register):
    project = await _create_project(client, acme["headers"])
    await client.post(f"/api/projects/{project['id']}/interest", headers=jane["headers"])
    notification_id = (await client.get("/api/notifications", headers=acme["headers"])).json()["data"][0]["id"]

    # 其他帳號看不到這筆通知
    other = await register("Bob Smith", "bob@example.com")
    hidden = await client.post(f"/api/notifications/{notification_id}/read", headers=other["headers"])
    assert hidden.status_code == 404

    first = await client.post(f"/api/notifications/{notification_id}/read", headers=acme["headers"])
    read_at = first.json()["data"]["read_at"]
    assert read_at is not None
    assert read_at.endswith("Z")

    second = await client.post(f"/api/notifications/{notification_id}/read", headers=acme["headers"])
    assert second.json()["data"]["read_at"] == read_at

    # 重新讀取 (從資料庫) 的時間格式相同
    listed = (await client.get("/api/notifications", headers=acme["headers"])).json()["data"][0]
    assert listed["read_at"] == read_at
    assert listed["created_at"].endswith("Z")


async def test_mark_all_read(client, acme, jane, register):
    bob = await register("Bob Smith", "bob@example.com")
    project = await _create_project(client, acme["headers"])
    await client.post(f"/api/projects/{project['id']}/interest", headers=jane["headers"])
    await client.post(f"/api/projects/{project['id']}/interest", headers=bob["headers"])

    response = await client.post("/api/notifications/read-all", headers=acme["headers"])
    assert response.json()["updated"] == 2

    items = (await client.get("/api/notifications", headers=acme["headers"])).json()["data"]
    assert all(item["read_at"] is not None for item in items)

    response = await client.post("/api/notifications/read-all", headers=acme["headers"])
    assert response.json()["updated"] == 0
