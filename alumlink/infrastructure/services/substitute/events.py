"""In-memory substitute for the events service."""

import copy
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from alumlink.domain.interfaces.services import EventsService
from alumlink.domain.models.errors import NOT_FOUND, VALIDATION_ERROR, SubstituteError, not_found
from alumlink.infrastructure.services.substitute import seed_data
from alumlink.infrastructure.services.substitute.base import (
    NO_LATENCY,
    SubstituteConfig,
    SubstituteService,
    filter_by_text,
    generate_id,
    now_iso,
    paginate,
    sort_by_field,
    success_response,
)

DEFAULT_ATTENDEE_ID = "dev-user-id"
SEARCH_LIMIT = 10


class SubstituteEventsService(SubstituteService, EventsService):
    """Events and registrations backed by process-local lists."""

    def __init__(self, config: SubstituteConfig = NO_LATENCY, rng: Optional[random.Random] = None):
        super().__init__(config, rng)
        self._events: List[Dict[str, Any]] = copy.deepcopy(seed_data.EVENTS)
        self._registrations: List[Dict[str, Any]] = []

    def _find(self, event_id: str) -> Dict[str, Any]:
        for event in self._events:
            if event["id"] == event_id:
                return event
        raise not_found("Event", event_id)

    def _registrations_for(self, event_id: str) -> List[Dict[str, Any]]:
        return [r for r in self._registrations if r["eventId"] == event_id]

    async def get_events(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        await self._simulate("get_events")
        filters = filters or {}
        results = filter_by_text(self._events, filters.get("search"), ["title", "description", "location"])
        if filters.get("status"):
            results = [e for e in results if e.get("status") == filters["status"]]
        if filters.get("startDate"):
            results = [e for e in results if e["eventDate"] >= filters["startDate"]]
        if filters.get("endDate"):
            results = [e for e in results if e["eventDate"] <= filters["endDate"]]
        results = sort_by_field(results, filters.get("sortBy") or "eventDate", filters.get("sortOrder", "asc"))
        return paginate(results, page, limit)

    async def get_event_by_id(self, event_id: str) -> Any:
        await self._simulate("get_event_by_id")
        event = self._find(event_id)
        return success_response({**event, "registrations": self._registrations_for(event_id)})

    async def create_event(self, data: Dict[str, Any]) -> Any:
        await self._simulate("create_event")
        if not data.get("title") or not data.get("eventDate"):
            raise SubstituteError("Title and event date are required.", VALIDATION_ERROR, status_code=400)
        timestamp = now_iso()
        event = {"status": "draft", "capacity": 0, **data, "id": generate_id(),
                 "registrations": [], "createdAt": timestamp, "updatedAt": timestamp}
        self._events.append(event)
        return success_response(event, "Event created successfully")

    async def update_event(self, event_id: str, data: Dict[str, Any]) -> Any:
        await self._simulate("update_event")
        event = self._find(event_id)
        updated = {**event, **data, "id": event_id, "updatedAt": now_iso()}
        self._events[self._events.index(event)] = updated
        return success_response(updated, "Event updated successfully")

    async def delete_event(self, event_id: str) -> Any:
        await self._simulate("delete_event")
        self._events.remove(self._find(event_id))
        self._registrations = [r for r in self._registrations if r["eventId"] != event_id]
        return success_response({"id": event_id}, "Event deleted successfully")

    async def register_for_event(self, event_id: str, alumni_id: Optional[str] = None) -> Any:
        await self._simulate("register_for_event")
        event = self._find(event_id)
        alumni_id = alumni_id or DEFAULT_ATTENDEE_ID
        if event.get("status") != "published":
            raise SubstituteError("Cannot register for unpublished events.", VALIDATION_ERROR, status_code=400)

        registrations = self._registrations_for(event_id)
        if any(r["alumniId"] == alumni_id and r["status"] == "registered" for r in registrations):
            raise SubstituteError("Already registered for this event.", VALIDATION_ERROR, status_code=400)
        active = sum(1 for r in registrations if r["status"] == "registered")
        if active >= event.get("capacity", 0):
            raise SubstituteError("Event is at full capacity.", VALIDATION_ERROR, status_code=400)

        registration = {
            "id": generate_id(),
            "eventId": event_id,
            "alumniId": alumni_id,
            "registrationDate": now_iso(),
            "status": "registered",
        }
        self._registrations.append(registration)
        return success_response(registration, "Successfully registered for event")

    async def unregister_from_event(self, event_id: str, alumni_id: Optional[str] = None) -> Any:
        await self._simulate("unregister_from_event")
        alumni_id = alumni_id or DEFAULT_ATTENDEE_ID
        for registration in self._registrations_for(event_id):
            if registration["alumniId"] == alumni_id and registration["status"] == "registered":
                # Cancelled registrations are kept for attendance stats.
                registration["status"] = "cancelled"
                return success_response({"id": registration["id"]}, "Registration cancelled successfully")
        raise SubstituteError("Registration not found.", NOT_FOUND, status_code=404)

    async def get_event_attendees(self, event_id: str) -> Any:
        await self._simulate("get_event_attendees")
        self._find(event_id)
        registrations = self._registrations_for(event_id)
        return success_response({
            "attendees": [{"registration": r, "alumni": {"id": r["alumniId"]}} for r in registrations],
            "stats": {
                "totalRegistered": sum(1 for r in registrations if r["status"] == "registered"),
                "attended": sum(1 for r in registrations if r["status"] == "attended"),
                "cancelled": sum(1 for r in registrations if r["status"] == "cancelled"),
            },
        })

    async def get_event_stats(self) -> Any:
        await self._simulate("get_event_stats")
        now = datetime.now(timezone.utc).isoformat()
        popular = sorted(
            (
                {
                    "eventId": e["id"],
                    "title": e["title"],
                    "registrations": sum(1 for r in self._registrations_for(e["id"]) if r["status"] != "cancelled"),
                }
                for e in self._events
            ),
            key=lambda item: item["registrations"],
            reverse=True,
        )[:5]
        return success_response({
            "totalEvents": len(self._events),
            "upcomingEvents": sum(1 for e in self._events if e.get("status") == "published" and e["eventDate"] > now),
            "completedEvents": sum(1 for e in self._events if e.get("status") == "completed"),
            "totalRegistrations": sum(1 for r in self._registrations if r["status"] in ("registered", "attended")),
            "popularEvents": popular,
        })

    async def search_events(self, query: str) -> List[Any]:
        await self._simulate("search_events")
        return copy.deepcopy(filter_by_text(self._events, query, ["title", "description", "location"])[:SEARCH_LIMIT])
