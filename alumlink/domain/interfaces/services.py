"""Domain service interfaces (Ports).

Both the network-backed services and the in-memory substitutes implement
these, so the facade can hand either one to callers. Payloads are plain
decoded JSON (dicts/lists); entity schemas are owned by the backend.
"""

import abc
from typing import Any, Dict, List, Optional


class AlumniService(abc.ABC):
    """Alumni directory operations."""

    @abc.abstractmethod
    async def get_alumni(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        """Lists alumni matching filters, one page at a time."""
        pass

    @abc.abstractmethod
    async def get_alumni_by_id(self, alumni_id: str) -> Any:
        pass

    @abc.abstractmethod
    async def create_alumni(self, data: Dict[str, Any]) -> Any:
        pass

    @abc.abstractmethod
    async def update_alumni(self, alumni_id: str, data: Dict[str, Any]) -> Any:
        pass

    @abc.abstractmethod
    async def delete_alumni(self, alumni_id: str) -> Any:
        pass

    @abc.abstractmethod
    async def get_alumni_stats(self) -> Any:
        pass

    @abc.abstractmethod
    async def search_alumni(self, query: str) -> List[Any]:
        """Returns at most 10 alumni matching a free-text query."""
        pass


class EventsService(abc.ABC):
    """Event listing and registration operations."""

    @abc.abstractmethod
    async def get_events(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        pass

    @abc.abstractmethod
    async def get_event_by_id(self, event_id: str) -> Any:
        pass

    @abc.abstractmethod
    async def create_event(self, data: Dict[str, Any]) -> Any:
        pass

    @abc.abstractmethod
    async def update_event(self, event_id: str, data: Dict[str, Any]) -> Any:
        pass

    @abc.abstractmethod
    async def delete_event(self, event_id: str) -> Any:
        pass

    @abc.abstractmethod
    async def register_for_event(self, event_id: str, alumni_id: Optional[str] = None) -> Any:
        """Registers an attendee. The real backend derives the attendee from the token."""
        pass

    @abc.abstractmethod
    async def unregister_from_event(self, event_id: str, alumni_id: Optional[str] = None) -> Any:
        pass

    @abc.abstractmethod
    async def get_event_attendees(self, event_id: str) -> Any:
        pass

    @abc.abstractmethod
    async def get_event_stats(self) -> Any:
        pass

    @abc.abstractmethod
    async def search_events(self, query: str) -> List[Any]:
        pass


class DonationsService(abc.ABC):
    """Donation and campaign operations."""

    @abc.abstractmethod
    async def get_donations(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        pass

    @abc.abstractmethod
    async def get_donation_by_id(self, donation_id: str) -> Any:
        pass

    @abc.abstractmethod
    async def create_donation(self, data: Dict[str, Any]) -> Any:
        pass

    @abc.abstractmethod
    async def get_campaigns(self) -> Any:
        pass

    @abc.abstractmethod
    async def get_donation_stats(self) -> Any:
        pass


class AuthService(abc.ABC):
    """User account operations. Only the real backend implements this."""

    @abc.abstractmethod
    async def get_current_user(self) -> Any:
        pass

    @abc.abstractmethod
    async def sync_user(self) -> Any:
        pass

    @abc.abstractmethod
    async def update_user_role(self, user_id: str, role: str) -> Any:
        pass

    @abc.abstractmethod
    async def get_users(self, params: Optional[Dict[str, Any]] = None) -> Any:
        pass

    @abc.abstractmethod
    async def delete_user(self, user_id: str) -> Any:
        pass
