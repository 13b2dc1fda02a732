import math

import pytest

from freeport.client.normalizer import VIEW_MODELS, normalize, normalize_many, to_canonical
from freeport.client.view_models import snake_case

PASCAL_FREELANCER = {
    "FreelancerID": 7,
    "FirstName": "Jane",
    "LastName": "Doe",
    "Email": "jane@example.com",
    "Location": "Taipei",
    "Skills": [{"SkillID": 1, "SkillName": "React", "Certification": "Yes"}],
    "PortfolioWork": [{"PortfolioID": 3, "ProjectTitle": "Shop", "TechnologiesUsed": "React, FastAPI"}],
    "Availability": {"AvailabilityID": 2, "ActivityStatus": "Available"},
}

SNAKE_FREELANCER = {
    "freelancer_id": 7,
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "jane@example.com",
    "location": "Taipei",
    "skills": [{"skill_id": 1, "skill_name": "React", "certification": "Yes"}],
    "portfolio_work": [{"portfolio_id": 3, "project_title": "Shop", "technologies_used": "React, FastAPI"}],
    "availability": {"availability_id": 2, "activity_status": "Available"},
}


def test_snake_case_keeps_acronyms_together():
    assert snake_case("FirstName") == "first_name"
    assert snake_case("FreelancerID") == "freelancer_id"
    assert snake_case("ProjectURL") == "project_url"
    assert snake_case("GPA") == "gpa"


def test_pascal_and_snake_case_records_normalize_identically():
    assert to_canonical("freelancer", PASCAL_FREELANCER) == to_canonical("freelancer", SNAKE_FREELANCER)


def test_every_canonical_field_is_present_for_empty_records():
    for kind in VIEW_MODELS:
        pascal = to_canonical(kind, {})
        snake = to_canonical(kind, None)
        assert pascal == snake
        model = VIEW_MODELS[kind]
        expected = {field.serialization_alias for field in model.model_fields.values()}
        assert expected <= set(pascal)


def test_first_non_null_source_wins():
    view = normalize("freelancer", {"FirstName": None, "first_name": "Jane"})
    assert view.first_name == "Jane"

    view = normalize("project", {"id": 5, "Title": "Landing page"})
    assert view.project_id == 5


def test_skill_defaults():
    skill = to_canonical("skill", {"SkillName": "Go"})
    assert skill["SkillName"] == "Go"
    assert skill["ProficiencyLevel"] == "Beginner"
    assert skill["YearsOfExperience"] == 0
    assert skill["Certification"] == "No"


def test_freelancer_without_availability_is_not_specified():
    freelancer = to_canonical("freelancer", {"FirstName": "Jane", "LastName": "Doe"})
    assert freelancer["FullName"] == "Jane Doe"
    assert freelancer["ActivityStatus"] == "Not specified"
    assert freelancer["Availability"] is None
    assert freelancer["Skills"] == []


@pytest.mark.parametrize(
    "raw, expected",
    [("3.5", 3.5), (3, 3.0), ("", None), ("abc", None), (float("nan"), None), (None, None)],
)
def test_gpa_is_parsed_or_none(raw, expected):
    gpa = normalize("education", {"GPA": raw}).gpa
    assert gpa == expected
    assert gpa is None or not math.isnan(gpa)


def test_budget_is_numeric():
    assert normalize("project", {"budget": "1500.50"}).budget == 1500.5
    assert normalize("project", {"Budget": "negotiable"}).budget is None


def test_delimited_text_fields_are_split_and_trimmed():
    portfolio = normalize("portfolio_item", {"TechnologiesUsed": " React, ,FastAPI\nDocker ,"})
    assert portfolio.technologies_used == ["React", "FastAPI", "Docker"]

    employer = normalize("employer", {"talent_areas": "Frontend\r\n\n  Backend  \n"})
    assert employer.talent_areas == ["Frontend", "Backend"]

    project = normalize("project", {"skills_required": ["React", " ", "CSS"]})
    assert project.skills_required == ["React", "CSS"]


def test_bookmark_nests_freelancer():
    bookmark = normalize(
        "bookmark",
        {"SavedID": 9, "EmployerID": 1, "FreelancerID": 7, "freelancer": SNAKE_FREELANCER},
    )
    assert bookmark.saved_id == 9
    assert bookmark.freelancer.full_name == "Jane Doe"
    assert bookmark.freelancer.skills[0].skill_name == "React"


def test_nested_values_of_the_wrong_shape_are_dropped():
    bookmark = normalize("bookmark", {"SavedID": 1, "freelancer": []})
    assert bookmark.freelancer is None

    freelancer = normalize("freelancer", {
        "FirstName": "Jane",
        "Skills": [{"SkillName": "Go"}, "junk", 3],
        "Education": "none",
        "PortfolioWork": None,
        "Availability": ["Available"],
    })
    assert [s.skill_name for s in freelancer.skills] == ["Go"]
    assert freelancer.education == []
    assert freelancer.portfolio_work == []
    assert freelancer.availability is None
    assert freelancer.activity_status == "Not specified"

    project = normalize("project", {"id": 4, "employer": "Acme"})
    assert project.employer is None

    notification = normalize("notification", {"id": 1, "data": ["url"]})
    assert notification.data == {}
    assert notification.url is None


def test_notification_read_state_and_url():
    unread = normalize("notification", {"id": 1, "title": "Hi", "data": {"url": "/freelancers/7"}})
    assert unread.is_read is False
    assert unread.url == "/freelancers/7"

    read = normalize("notification", {"id": 1, "read_at": "2024-05-01T10:00:00"})
    assert read.is_read is True


def test_account_accepts_role_aliases():
    account = normalize("account", {"id": 3, "name": "Jane", "email": "j@example.com", "userType": "employer"})
    assert account.account_id == 3
    assert account.user_type == "employer"


def test_unknown_kind_and_bad_input():
    with pytest.raises(ValueError):
        normalize("review", {})
    with pytest.raises(TypeError):
        normalize("skill", ["not", "a", "record"])


def test_normalize_many_skips_non_objects():
    skills = normalize_many("skill", [{"SkillName": "Go"}, "junk", None, {"skill_name": "Rust"}])
    assert [s.skill_name for s in skills] == ["Go", "Rust"]
    assert normalize_many("skill", None) == []
