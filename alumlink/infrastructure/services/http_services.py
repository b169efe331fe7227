"""Network-backed domain services.

Thin adapters that map each domain operation onto one executor call. They
do not retry, cache or fall back; callers wrap them in the resilience
controller when they want that.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from alumlink.domain.interfaces.services import (
    AlumniService,
    AuthService,
    DonationsService,
    EventsService,
)
from alumlink.infrastructure.http.api_client import ApiClient

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


def _list_params(filters: Optional[Mapping[str, Any]], page: int, limit: int) -> Dict[str, Any]:
    return {**(filters or {}), "page": page, "limit": limit}


class AlumniApiService(AlumniService):
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_alumni(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        return await self.client.get("/alumni", _list_params(filters, page, limit))

    async def get_alumni_by_id(self, alumni_id: str) -> Any:
        return await self.client.get(f"/alumni/{alumni_id}")

    async def create_alumni(self, data: Dict[str, Any]) -> Any:
        return await self.client.post("/alumni", data)

    async def update_alumni(self, alumni_id: str, data: Dict[str, Any]) -> Any:
        return await self.client.put(f"/alumni/{alumni_id}", data)

    async def delete_alumni(self, alumni_id: str) -> Any:
        return await self.client.delete(f"/alumni/{alumni_id}")

    async def get_alumni_stats(self) -> Any:
        return await self.client.get("/alumni/stats/overview")

    async def search_alumni(self, query: str) -> List[Any]:
        response = await self.get_alumni({"search": query}, limit=SEARCH_LIMIT)
        if isinstance(response, dict):
            return response.get("alumni", response.get("data", []))
        return response or []


class EventsApiService(EventsService):
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_events(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        return await self.client.get("/events", _list_params(filters, page, limit))

    async def get_event_by_id(self, event_id: str) -> Any:
        return await self.client.get(f"/events/{event_id}")

    async def create_event(self, data: Dict[str, Any]) -> Any:
        return await self.client.post("/events", data)

    async def update_event(self, event_id: str, data: Dict[str, Any]) -> Any:
        return await self.client.put(f"/events/{event_id}", data)

    async def delete_event(self, event_id: str) -> Any:
        return await self.client.delete(f"/events/{event_id}")

    async def register_for_event(self, event_id: str, alumni_id: Optional[str] = None) -> Any:
        # The backend derives the attendee from the credentials.
        return await self.client.post(f"/events/{event_id}/register")

    async def unregister_from_event(self, event_id: str, alumni_id: Optional[str] = None) -> Any:
        return await self.client.delete(f"/events/{event_id}/register")

    async def get_event_attendees(self, event_id: str) -> Any:
        return await self.client.get(f"/events/{event_id}/attendees")

    async def get_event_stats(self) -> Any:
        return await self.client.get("/events/stats/overview")

    async def search_events(self, query: str) -> List[Any]:
        response = await self.get_events({"search": query}, limit=SEARCH_LIMIT)
        if isinstance(response, dict):
            return response.get("events", response.get("data", []))
        return response or []


class DonationsApiService(DonationsService):
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_donations(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        return await self.client.get("/donations", _list_params(filters, page, limit))

    async def get_donation_by_id(self, donation_id: str) -> Any:
        return await self.client.get(f"/donations/{donation_id}")

    async def create_donation(self, data: Dict[str, Any]) -> Any:
        return await self.client.post("/donations", data)

    async def get_campaigns(self) -> Any:
        return await self.client.get("/donations/campaigns")

    async def get_donation_stats(self) -> Any:
        return await self.client.get("/donations/stats/overview")


class AuthApiService(AuthService):
    """User and role management. Only available against the real backend."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_current_user(self) -> Any:
        return await self.client.get("/auth/me")

    async def sync_user(self) -> Any:
        return await self.client.post("/auth/sync")

    async def update_user_role(self, user_id: str, role: str) -> Any:
        return await self.client.put("/auth/role", {"userId": user_id, "role": role})

    async def get_users(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.client.get("/auth/users", params)

    async def delete_user(self, user_id: str) -> Any:
        return await self.client.delete(f"/auth/users/{user_id}")


class UploadApiService:
    """Multipart uploads. There is no substitute for these."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def upload_profile_image(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> Any:
        return await self.client.upload("/upload/profile-image", {"profileImage": (filename, content, content_type)})

    async def upload_event_image(
        self, event_id: str, filename: str, content: bytes, content_type: str = "image/jpeg"
    ) -> Any:
        return await self.client.upload(
            "/upload/event-image",
            {"eventImage": (filename, content, content_type)},
            data={"eventId": event_id},
        )

    async def upload_documents(self, documents: List[Any]) -> Any:
        """Uploads several files under the 'documents' field.

        Args:
            documents: (filename, content, content_type) tuples.
        """
        files = [("documents", document) for document in documents]
        logger.debug(f"Uploading {len(files)} document(s)")
        return await self.client.upload("/upload/documents", files)


@dataclass
class RealBackend:
    """Bundle of network-backed services sharing one executor."""
    alumni: AlumniApiService
    events: EventsApiService
    donations: DonationsApiService
    auth: AuthApiService
    upload: UploadApiService

    @classmethod
    def create(cls, client: ApiClient) -> "RealBackend":
        return cls(
            alumni=AlumniApiService(client),
            events=EventsApiService(client),
            donations=DonationsApiService(client),
            auth=AuthApiService(client),
            upload=UploadApiService(client),
        )
