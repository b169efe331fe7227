"""In-memory substitute for the alumni service."""

import copy
import random
from typing import Any, Dict, List, Optional

from alumlink.domain.interfaces.services import AlumniService
from alumlink.domain.models.errors import VALIDATION_ERROR, SubstituteError, not_found
from alumlink.infrastructure.services.substitute import seed_data
from alumlink.infrastructure.services.substitute.base import (
    NO_LATENCY,
    SubstituteConfig,
    SubstituteService,
    count_by,
    filter_by_text,
    generate_id,
    now_iso,
    paginate,
    sort_by_field,
    success_response,
    top_counts,
)

SEARCH_FIELDS = ["firstName", "lastName", "currentCompany", "currentPosition", "degree"]
FULL_TEXT_FIELDS = SEARCH_FIELDS + ["location", "skills", "interests"]
SEARCH_LIMIT = 10


def _contains(value: Optional[str], term: str) -> bool:
    return value is not None and term.lower() in value.lower()


class SubstituteAlumniService(SubstituteService, AlumniService):
    """Alumni directory backed by a process-local list."""

    def __init__(self, config: SubstituteConfig = NO_LATENCY, rng: Optional[random.Random] = None):
        super().__init__(config, rng)
        self._alumni: List[Dict[str, Any]] = copy.deepcopy(seed_data.ALUMNI)

    def _find(self, alumni_id: str) -> Dict[str, Any]:
        for alumni in self._alumni:
            if alumni["id"] == alumni_id:
                return alumni
        raise not_found("Alumni profile", alumni_id)

    async def get_alumni(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        await self._simulate("get_alumni")
        filters = filters or {}
        results = filter_by_text(self._alumni, filters.get("search"), SEARCH_FIELDS)

        if filters.get("graduationYear"):
            year = int(filters["graduationYear"])
            results = [a for a in results if a.get("graduationYear") == year]
        if filters.get("degree"):
            results = [a for a in results if _contains(a.get("degree"), filters["degree"])]
        if filters.get("location"):
            results = [a for a in results if _contains(a.get("location"), filters["location"])]
        if filters.get("company"):
            results = [a for a in results if _contains(a.get("currentCompany"), filters["company"])]
        if filters.get("skills"):
            wanted = filters["skills"]
            if isinstance(wanted, str):
                wanted = [s.strip() for s in wanted.split(",") if s.strip()]
            results = [
                a for a in results
                if any(_contains(skill, term) for term in wanted for skill in a.get("skills", []))
            ]
        if filters.get("isPublic") is not None:
            results = [a for a in results if a.get("isPublic") == filters["isPublic"]]
        if filters.get("sortBy"):
            results = sort_by_field(results, filters["sortBy"], filters.get("sortOrder", "asc"))

        return paginate(results, page, limit)

    async def get_alumni_by_id(self, alumni_id: str) -> Any:
        await self._simulate("get_alumni_by_id")
        return success_response(self._find(alumni_id))

    async def create_alumni(self, data: Dict[str, Any]) -> Any:
        await self._simulate("create_alumni")
        if not data.get("firstName") or not data.get("lastName") or not data.get("graduationYear"):
            raise SubstituteError(
                "First name, last name, and graduation year are required.",
                VALIDATION_ERROR,
                status_code=400,
            )
        timestamp = now_iso()
        alumni = {"skills": [], "interests": [], "isPublic": True, **data,
                  "id": generate_id(), "createdAt": timestamp, "updatedAt": timestamp}
        self._alumni.append(alumni)
        return success_response(alumni, "Alumni profile created successfully")

    async def update_alumni(self, alumni_id: str, data: Dict[str, Any]) -> Any:
        await self._simulate("update_alumni")
        alumni = self._find(alumni_id)
        if data.get("firstName") == "" or data.get("lastName") == "":
            raise SubstituteError("First name and last name cannot be empty.", VALIDATION_ERROR, status_code=400)
        updated = {**alumni, **data, "id": alumni_id, "updatedAt": now_iso()}
        self._alumni[self._alumni.index(alumni)] = updated
        return success_response(updated, "Alumni profile updated successfully")

    async def delete_alumni(self, alumni_id: str) -> Any:
        await self._simulate("delete_alumni")
        self._alumni.remove(self._find(alumni_id))
        return success_response({"id": alumni_id}, "Alumni profile deleted successfully")

    async def get_alumni_stats(self) -> Any:
        await self._simulate("get_alumni_stats")
        return success_response({
            "totalAlumni": len(self._alumni),
            "publicProfiles": sum(1 for a in self._alumni if a.get("isPublic")),
            "graduationYearDistribution": count_by(self._alumni, "graduationYear"),
            "topCompanies": top_counts(count_by(self._alumni, "currentCompany"), "company", 10),
            "topSkills": top_counts(count_by(self._alumni, "skills"), "skill", 15),
            "locationDistribution": count_by(self._alumni, "location"),
        })

    async def search_alumni(self, query: str) -> List[Any]:
        await self._simulate("search_alumni")
        public = [a for a in self._alumni if a.get("isPublic")]
        return copy.deepcopy(filter_by_text(public, query, FULL_TEXT_FIELDS)[:SEARCH_LIMIT])
