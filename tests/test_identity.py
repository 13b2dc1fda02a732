import asyncio
import json

import httpx
import pytest

from freeport.client.api import FreeportApi
from freeport.client.errors import AuthError, IdentityError, ProfileResolutionError
from freeport.client.identity import Account, IdentityResolver, creation_payload
from freeport.client.session import SessionContext
from freeport.client.transport import ApiClient

JANE = Account(id=1, email="jane@example.com", name="Jane Doe", user_type="freelancer")


def envelope(data, status_code=200):
    return httpx.Response(status_code, json={"success": True, "message": "", "data": data})


def mock_api(handler, on_unauthorized=None):
    session = SessionContext()
    session.login("token", "freelancer")
    client = ApiClient(
        session,
        base_url="http://api.local/api",
        transport=httpx.MockTransport(handler),
        on_unauthorized=on_unauthorized,
    )
    return FreeportApi(client)


def test_creation_payload_splits_display_name():
    assert creation_payload(JANE, "freelancer") == {
        "FirstName": "Jane", "LastName": "Doe", "Email": "jane@example.com",
    }
    assert creation_payload(JANE, "employer") == {
        "CompanyName": "Jane Doe", "ContactPersonName": "Jane Doe", "Email": "jane@example.com",
    }
    nameless = Account(id=2, email="x@example.com", name="", user_type="freelancer")
    assert creation_payload(nameless, "freelancer")["FirstName"] == "Freelancer"


async def test_jane_doe_is_created_after_an_empty_search():
    requests = []

    def handler(request):
        requests.append(request)
        if request.method == "GET":
            return envelope([])
        payload = json.loads(request.content)
        return envelope(dict(payload, FreelancerID=10), status_code=201)

    profile = await IdentityResolver(mock_api(handler), mode="search").resolve_profile(JANE)

    assert [(r.method, r.url.path) for r in requests] == [
        ("GET", "/api/freelancers"), ("POST", "/api/freelancers"),
    ]
    assert requests[0].url.params["search"] == "jane@example.com"
    assert json.loads(requests[1].content) == {"FirstName": "Jane", "LastName": "Doe", "Email": "jane@example.com"}
    assert profile.freelancer_id == 10
    assert profile.full_name == "Jane Doe"


async def test_search_picks_exact_email_match_case_insensitively():
    candidates = [
        {"FreelancerID": 1, "FirstName": "Mary", "Email": "mary.jane@example.com"},
        {"FreelancerID": 2, "FirstName": "Jane", "Email": " JANE@example.com "},
    ]

    def handler(request):
        assert request.method == "GET"
        return envelope(candidates)

    profile = await IdentityResolver(mock_api(handler), mode="search").resolve_profile(JANE)
    assert profile.freelancer_id == 2


async def test_account_without_email_is_rejected_before_any_request():
    def handler(request):
        raise AssertionError("no request expected")

    resolver = IdentityResolver(mock_api(handler), mode="search")
    with pytest.raises(IdentityError):
        await resolver.resolve_profile(Account(id=1, email="  ", name="Jane", user_type="freelancer"))
    with pytest.raises(IdentityError):
        await resolver.resolve_profile(JANE, role="admin")


async def test_network_failure_becomes_resolution_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProfileResolutionError) as exc_info:
        await IdentityResolver(mock_api(handler), mode="search").resolve_profile(JANE)
    assert exc_info.value.cause is not None


async def test_validation_failure_becomes_resolution_error():
    def handler(request):
        if request.method == "GET":
            return envelope([])
        return httpx.Response(
            422, json={"success": False, "message": "Validation error", "errors": {"Email": ["taken"]}}
        )

    with pytest.raises(ProfileResolutionError):
        await IdentityResolver(mock_api(handler), mode="search").resolve_profile(JANE)


async def test_unauthorized_logs_out_and_redirects():
    redirects = []

    def handler(request):
        return httpx.Response(401, json={"success": False, "message": "Unauthenticated."})

    api = mock_api(handler, on_unauthorized=redirects.append)
    with pytest.raises(AuthError):
        await IdentityResolver(api, mode="server").resolve_profile(JANE)
    assert redirects == ["/login"]
    assert api.session.is_authenticated is False


async def test_concurrent_calls_share_one_resolution():
    gets = []
    gate = asyncio.Event()

    async def handler(request):
        gets.append(request)
        await gate.wait()
        return envelope([{"FreelancerID": 5, "Email": "jane@example.com"}])

    resolver = IdentityResolver(mock_api(handler), mode="search")
    first = asyncio.ensure_future(resolver.resolve_profile(JANE))
    second = asyncio.ensure_future(resolver.resolve_profile(JANE))
    await asyncio.sleep(0.01)
    gate.set()
    a, b = await asyncio.gather(first, second)
    assert a == b
    assert len(gets) == 1


@pytest.mark.parametrize("mode", ["server", "search"])
async def test_resolver_is_idempotent_against_the_api(mode, register, api_factory):
    jane = await register("Jane Doe", "jane@example.com")
    api = await api_factory(token=jane["token"])
    account = Account.from_user_info(jane["user"])
    resolver = IdentityResolver(api, mode=mode)

    first = await resolver.resolve_profile(account)
    second = await resolver.resolve_profile(account)
    assert first.freelancer_id == second.freelancer_id
    assert first.first_name == "Jane"
    assert first.last_name == "Doe"

    matches = await api.freelancers.list(search="jane@example.com")
    assert len(matches) == 1


async def test_concurrent_server_resolution_creates_one_profile(register, api_factory):
    acme = await register("Acme Studio", "hr@acme.com", user_type="employer")
    api = await api_factory(token=acme["token"], user_type="employer")
    account = Account.from_user_info(acme["user"])

    # 兩個獨立的 resolver (e.g. 兩個頁面同時載入)
    results = await asyncio.gather(
        IdentityResolver(api, mode="server").resolve_profile(account),
        IdentityResolver(api, mode="server").resolve_profile(account),
    )
    assert results[0].employer_id == results[1].employer_id
    assert len(await api.employers.list(search="hr@acme.com")) == 1
