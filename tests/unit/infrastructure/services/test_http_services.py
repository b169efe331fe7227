import json

import httpx
import pytest

from alumlink.domain.interfaces.auth import TokenProvider
from alumlink.infrastructure.http.api_client import ApiClient
from alumlink.infrastructure.services.http_services import RealBackend


class NoTokenProvider(TokenProvider):
    @property
    def is_local_identity_mode(self) -> bool:
        return False

    async def get_auth_token(self):
        return None


class Backend:
    """Records requests and answers every one with a canned JSON body."""

    def __init__(self, body=None):
        self.body = body if body is not None else {"success": True}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json=self.body)

    @property
    def last(self):
        request = self.requests[-1]
        return request.method, request.url.path, dict(request.url.params)


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def services(backend):
    client = ApiClient("http://backend.test", NoTokenProvider(), transport=httpx.MockTransport(backend))
    return RealBackend.create(client)


@pytest.mark.asyncio
async def test_alumni_endpoints(services, backend):
    await services.alumni.get_alumni({"degree": "Physics"}, page=2, limit=5)
    assert backend.last == ("GET", "/api/alumni", {"degree": "Physics", "page": "2", "limit": "5"})

    await services.alumni.get_alumni_by_id("42")
    assert backend.last == ("GET", "/api/alumni/42", {})

    await services.alumni.update_alumni("42", {"bio": "hi"})
    assert backend.last[:2] == ("PUT", "/api/alumni/42")
    assert json.loads(backend.requests[-1].content) == {"bio": "hi"}

    await services.alumni.delete_alumni("42")
    assert backend.last[:2] == ("DELETE", "/api/alumni/42")

    await services.alumni.get_alumni_stats()
    assert backend.last[:2] == ("GET", "/api/alumni/stats/overview")


@pytest.mark.asyncio
async def test_alumni_search_unwraps_alumni_key(services, backend):
    backend.body = {"alumni": [{"id": "1"}], "pagination": {}}

    result = await services.alumni.search_alumni("ada")

    assert result == [{"id": "1"}]
    assert backend.last == ("GET", "/api/alumni", {"search": "ada", "page": "1", "limit": "10"})


@pytest.mark.asyncio
async def test_event_registration_endpoints(services, backend):
    await services.events.register_for_event("5")
    assert backend.last[:2] == ("POST", "/api/events/5/register")

    await services.events.unregister_from_event("5")
    assert backend.last[:2] == ("DELETE", "/api/events/5/register")

    await services.events.get_event_attendees("5")
    assert backend.last[:2] == ("GET", "/api/events/5/attendees")


@pytest.mark.asyncio
async def test_donation_endpoints(services, backend):
    await services.donations.get_campaigns()
    assert backend.last[:2] == ("GET", "/api/donations/campaigns")

    await services.donations.get_donation_stats()
    assert backend.last[:2] == ("GET", "/api/donations/stats/overview")


@pytest.mark.asyncio
async def test_auth_endpoints(services, backend):
    await services.auth.get_current_user()
    assert backend.last[:2] == ("GET", "/api/auth/me")

    await services.auth.update_user_role("u1", "admin")
    assert backend.last[:2] == ("PUT", "/api/auth/role")
    assert json.loads(backend.requests[-1].content) == {"userId": "u1", "role": "admin"}

    await services.auth.get_users({"role": "alumni"})
    assert backend.last == ("GET", "/api/auth/users", {"role": "alumni"})


@pytest.mark.asyncio
async def test_event_image_upload_sends_event_id(services, backend):
    await services.upload.upload_event_image("5", "banner.png", b"IMG", "image/png")

    request = backend.requests[-1]
    assert request.url.path == "/api/upload/event-image"
    assert b'name="eventId"' in request.content
    assert b'name="eventImage"; filename="banner.png"' in request.content
