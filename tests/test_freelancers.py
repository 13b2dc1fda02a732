import pytest


@pytest.fixture
async def jane(register):
    return await register("Jane Doe", "jane@example.com")


async def _create_freelancer(client, headers, **fields):
    payload = {"FirstName": "Jane", "LastName": "Doe", "Email": "jane.doe@example.com"}
    payload.update(fields)
    response = await client.post("/api/freelancers", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_freelancer_validates_name_and_email(client, jane):
    response = await client.post(
        "/api/freelancers",
        json={"FirstName": "J4ne", "Email": "not-an-email"},
        headers=jane["headers"],
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert errors["FirstName"] == ["Name may only contain letters and spaces"]
    assert "Email" in errors


async def test_create_freelancer_rejects_duplicate_email(client, jane):
    await _create_freelancer(client, jane["headers"])
    response = await client.post(
        "/api/freelancers",
        json={"FirstName": "Other", "Email": "jane.doe@example.com"},
        headers=jane["headers"],
    )
    assert response.status_code == 422
    assert response.json()["errors"]["Email"] == ["The email has already been taken."]


async def test_create_accepts_snake_case_and_strips_tags(client, jane):
    response = await client.post(
        "/api/freelancers",
        json={"first_name": "Jane", "email": "snake@example.com", "bio": "<b>React</b> developer"},
        headers=jane["headers"],
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["FirstName"] == "Jane"
    assert data["Bio"] == "React developer"
    assert data["skills"] == []
    assert data["availability"] is None


async def test_search_freelancers_by_skill_and_location(client, jane):
    react_dev = await _create_freelancer(client, jane["headers"], Email="a@example.com", Location="Taipei")
    await _create_freelancer(client, jane["headers"], FirstName="Bob", Email="b@example.com", Location="Tokyo")
    await client.post(
        "/api/skills",
        json={"FreelancerID": react_dev["FreelancerID"], "SkillName": "React"},
        headers=jane["headers"],
    )

    by_skill = await client.get("/api/freelancers", params={"search": "reac"}, headers=jane["headers"])
    assert [f["FreelancerID"] for f in by_skill.json()["data"]] == [react_dev["FreelancerID"]]

    by_location = await client.get("/api/freelancers", params={"location": "tokyo"}, headers=jane["headers"])
    assert [f["FirstName"] for f in by_location.json()["data"]] == ["Bob"]


async def test_update_and_delete_freelancer(client, jane):
    created = await _create_freelancer(client, jane["headers"])
    freelancer_id = created["FreelancerID"]

    response = await client.put(
        f"/api/freelancers/{freelancer_id}", json={"Location": "Taipei"}, headers=jane["headers"]
    )
    assert response.status_code == 200
    assert response.json()["data"]["Location"] == "Taipei"
    assert response.json()["data"]["FirstName"] == "Jane"

    response = await client.delete(f"/api/freelancers/{freelancer_id}", headers=jane["headers"])
    assert response.status_code == 200

    response = await client.get(f"/api/freelancers/{freelancer_id}", headers=jane["headers"])
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Freelancer not found"}


async def test_skill_defaults_and_nested_show(client, jane):
    freelancer = await _create_freelancer(client, jane["headers"])
    freelancer_id = freelancer["FreelancerID"]

    response = await client.post(
        "/api/skills", json={"FreelancerID": freelancer_id, "SkillName": "Go"}, headers=jane["headers"]
    )
    assert response.status_code == 201
    skill = response.json()["data"]
    assert skill["SkillName"] == "Go"
    assert skill["Certification"] == "No"

    await client.post(
        "/api/education",
        json={
            "FreelancerID": freelancer_id, "Degree": "BSc", "Major": "CS",
            "InstitutionName": "NTU", "GraduationYear": 2020, "GPA": 3.7,
        },
        headers=jane["headers"],
    )
    await client.post(
        "/api/portfolio-work",
        json={"FreelancerID": freelancer_id, "ProjectTitle": "Shop", "TechnologiesUsed": "React, FastAPI"},
        headers=jane["headers"],
    )
    await client.post(
        "/api/availability",
        json={"FreelancerID": freelancer_id, "ActivityStatus": "Available", "WeeklyHoursAvailable": 20},
        headers=jane["headers"],
    )

    show = await client.get(f"/api/freelancers/{freelancer_id}", headers=jane["headers"])
    data = show.json()["data"]
    assert [s["SkillName"] for s in data["skills"]] == ["Go"]
    assert data["education"][0]["GPA"] == 3.7
    assert data["portfolio_work"][0]["TechnologiesUsed"] == "React, FastAPI"
    assert data["availability"]["ActivityStatus"] == "Available"

    skills = await client.get(f"/api/freelancers/{freelancer_id}/skills", headers=jane["headers"])
    assert skills.json()["count"] == 1
    portfolio = await client.get(f"/api/freelancers/{freelancer_id}/portfolio", headers=jane["headers"])
    assert portfolio.json()["data"][0]["ProjectTitle"] == "Shop"


async def test_child_resource_requires_existing_freelancer(client, jane):
    response = await client.post(
        "/api/skills", json={"FreelancerID": 999, "SkillName": "Go"}, headers=jane["headers"]
    )
    assert response.status_code == 422
    assert response.json()["errors"]["FreelancerID"] == ["The selected freelancer id is invalid."]


async def test_education_gpa_range(client, jane):
    freelancer = await _create_freelancer(client, jane["headers"])
    response = await client.post(
        "/api/education",
        json={
            "FreelancerID": freelancer["FreelancerID"], "Degree": "BSc", "Major": "CS",
            "InstitutionName": "NTU", "GraduationYear": 2020, "GPA": 4.5,
        },
        headers=jane["headers"],
    )
    assert response.status_code == 422
    assert "GPA" in response.json()["errors"]


async def test_only_one_availability_per_freelancer(client, jane):
    freelancer = await _create_freelancer(client, jane["headers"])
    payload = {"FreelancerID": freelancer["FreelancerID"], "ActivityStatus": "Available"}

    first = await client.post("/api/availability", json=payload, headers=jane["headers"])
    assert first.status_code == 201
    second = await client.post("/api/availability", json=payload, headers=jane["headers"])
    assert second.status_code == 422

    availability_id = first.json()["data"]["AvailabilityID"]
    updated = await client.put(
        f"/api/availability/{availability_id}", json={"ActivityStatus": "Busy"}, headers=jane["headers"]
    )
    assert updated.json()["data"]["ActivityStatus"] == "Busy"


async def test_skill_crud(client, jane):
    freelancer = await _create_freelancer(client, jane["headers"])
    created = await client.post(
        "/api/skills",
        json={"FreelancerID": freelancer["FreelancerID"], "SkillName": "Python", "YearsOfExperience": 3},
        headers=jane["headers"],
    )
    skill_id = created.json()["data"]["SkillID"]

    updated = await client.put(
        f"/api/skills/{skill_id}", json={"Certification": "Yes"}, headers=jane["headers"]
    )
    assert updated.json()["data"]["Certification"] == "Yes"
    assert updated.json()["data"]["YearsOfExperience"] == 3

    listed = await client.get(
        "/api/skills", params={"freelancer_id": freelancer["FreelancerID"]}, headers=jane["headers"]
    )
    assert listed.json()["count"] == 1

    deleted = await client.delete(f"/api/skills/{skill_id}", headers=jane["headers"])
    assert deleted.status_code == 200
    missing = await client.get(f"/api/skills/{skill_id}", headers=jane["headers"])
    assert missing.status_code == 404


async def test_upload_profile_picture(client, jane):
    freelancer = await _create_freelancer(client, jane["headers"])
    freelancer_id = freelancer["FreelancerID"]

    response = await client.post(
        f"/api/freelancers/{freelancer_id}/profile-picture",
        files={"profile_picture": ("me.png", b"\x89PNG fake image bytes", "image/png")},
        headers=jane["headers"],
    )
    assert response.status_code == 200
    url = response.json()["data"]["ProfilePicture"]
    assert url.startswith("/storage/profile_pictures/")
    assert url.endswith(".png")

    rejected = await client.post(
        f"/api/freelancers/{freelancer_id}/profile-picture",
        files={"profile_picture": ("notes.txt", b"hello", "text/plain")},
        headers=jane["headers"],
    )
    assert rejected.status_code == 422
    assert rejected.json()["errors"]["profile_picture"] == ["The profile_picture must be an image."]


async def test_current_user_avatar_comes_from_profile(client, jane):
    resolved = await client.post("/api/profiles/me", headers=jane["headers"])
    freelancer_id = resolved.json()["data"]["FreelancerID"]
    upload = await client.post(
        f"/api/freelancers/{freelancer_id}/profile-picture",
        files={"profile_picture": ("me.jpg", b"fake jpeg", "image/jpeg")},
        headers=jane["headers"],
    )
    url = upload.json()["data"]["ProfilePicture"]

    me = await client.get("/api/auth/user", headers=jane["headers"])
    assert me.json()["data"]["avatar"] == url
    assert me.json()["data"]["profile_picture"] == url
