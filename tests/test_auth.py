async def test_register_returns_token_and_user_info(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Jane Doe", "email": "jane@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user_info"]["email"] == "jane@example.com"
    # 沒有指定時預設為 freelancer
    assert body["user_info"]["user_type"] == "freelancer"


async def test_register_duplicate_email_is_validation_error(client, register):
    await register("Jane Doe", "jane@example.com")
    response = await client.post(
        "/api/auth/register",
        json={"name": "Jane Again", "email": "jane@example.com", "password": "password123"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["errors"]["email"] == ["The email has already been taken."]


async def test_register_password_confirmation_must_match(client):
    response = await client.post(
        "/api/auth/register",
        json={
            "name": "Jane Doe",
            "email": "jane@example.com",
            "password": "password123",
            "password_confirmation": "different123",
        },
    )
    assert response.status_code == 422
    assert "password_confirmation" in response.json()["errors"]


async def test_login_and_current_user(client, register):
    await register("Acme Hiring", "hr@acme.com", user_type="employer")

    bad = await client.post("/api/auth/login", json={"email": "hr@acme.com", "password": "wrong-password"})
    assert bad.status_code == 401
    assert bad.json() == {"success": False, "message": "Invalid credentials"}

    login = await client.post("/api/auth/login", json={"email": "hr@acme.com", "password": "password123"})
    assert login.status_code == 200
    token = login.json()["token"]
    assert login.json()["user_info"]["user_type"] == "employer"

    me = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    data = me.json()["data"]
    assert data["email"] == "hr@acme.com"
    assert data["user_type"] == "employer"
    assert data["avatar"] is None


async def test_protected_route_requires_token(client):
    response = await client.get("/api/notifications")
    assert response.status_code == 401
    assert response.json()["message"] == "Unauthenticated."

    response = await client.get("/api/notifications", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401

    response = await client.post("/api/freelancers", json={"FirstName": "Jane", "Email": "jane@example.com"})
    assert response.status_code == 401


async def test_browsing_routes_are_public(client, register):
    acme = await register("Acme Studio", "hr@acme.com", user_type="employer")
    created = await client.post(
        "/api/freelancers", json={"FirstName": "Jane", "Email": "jane@example.com"}, headers=acme["headers"]
    )
    freelancer_id = created.json()["data"]["FreelancerID"]

    for path in (
        "/api/freelancers",
        f"/api/freelancers/{freelancer_id}",
        f"/api/freelancers/{freelancer_id}/skills",
        f"/api/freelancers/{freelancer_id}/portfolio",
        "/api/employers",
        "/api/projects",
    ):
        response = await client.get(path)
        assert response.status_code == 200, path

    # 雇主的收藏清單仍需登入
    employer_id = (await client.post("/api/profiles/me", headers=acme["headers"])).json()["data"]["EmployerID"]
    response = await client.get(f"/api/employers/{employer_id}/bookmarks")
    assert response.status_code == 401


async def test_logout_revokes_token(client, register):
    jane = await register("Jane Doe", "jane@example.com")

    response = await client.post("/api/auth/logout", headers=jane["headers"])
    assert response.status_code == 200
    assert response.json()["success"] is True

    # 登出後舊 token 不能再使用
    response = await client.get("/api/auth/user", headers=jane["headers"])
    assert response.status_code == 401

    # 重新登入取得新 token
    login = await client.post("/api/auth/login", json={"email": "jane@example.com", "password": "password123"})
    new_headers = {"Authorization": f"Bearer {login.json()['token']}"}
    response = await client.get("/api/auth/user", headers=new_headers)
    assert response.status_code == 200
