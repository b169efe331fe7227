"""In-memory substitute for the donations service."""

import copy
import random
from typing import Any, Dict, List, Optional

from alumlink.domain.interfaces.services import DonationsService
from alumlink.domain.models.errors import VALIDATION_ERROR, SubstituteError, not_found
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


class SubstituteDonationsService(SubstituteService, DonationsService):
    """Donations and campaigns backed by process-local lists."""

    def __init__(self, config: SubstituteConfig = NO_LATENCY, rng: Optional[random.Random] = None):
        super().__init__(config, rng)
        self._donations: List[Dict[str, Any]] = copy.deepcopy(seed_data.DONATIONS)
        self._campaigns: List[Dict[str, Any]] = copy.deepcopy(seed_data.CAMPAIGNS)

    async def get_donations(self, filters: Optional[Dict[str, Any]] = None, page: int = 1, limit: int = 10) -> Any:
        await self._simulate("get_donations")
        filters = filters or {}
        results = filter_by_text(self._donations, filters.get("search"), ["purpose", "paymentMethod"])
        if filters.get("minAmount") is not None:
            results = [d for d in results if d["amount"] >= float(filters["minAmount"])]
        if filters.get("maxAmount") is not None:
            results = [d for d in results if d["amount"] <= float(filters["maxAmount"])]
        if filters.get("campaignId"):
            results = [d for d in results if d.get("campaignId") == filters["campaignId"]]
        if filters.get("donorId"):
            results = [d for d in results if d.get("donorId") == filters["donorId"]]
        results = sort_by_field(results, filters.get("sortBy") or "donationDate", filters.get("sortOrder", "desc"))
        return paginate(results, page, limit)

    async def get_donation_by_id(self, donation_id: str) -> Any:
        await self._simulate("get_donation_by_id")
        for donation in self._donations:
            if donation["id"] == donation_id:
                return success_response(donation)
        raise not_found("Donation", donation_id)

    async def create_donation(self, data: Dict[str, Any]) -> Any:
        await self._simulate("create_donation")
        amount = data.get("amount")
        if not isinstance(amount, (int, float)) or amount <= 0:
            raise SubstituteError("Donation amount must be a positive number.", VALIDATION_ERROR, status_code=400)
        timestamp = now_iso()
        donation = {"status": "completed", "donationDate": timestamp, **data, "id": generate_id()}
        self._donations.append(donation)
        for campaign in self._campaigns:
            if campaign["id"] == donation.get("campaignId"):
                campaign["raised"] += amount
        return success_response(donation, "Donation recorded successfully")

    async def get_campaigns(self) -> Any:
        await self._simulate("get_campaigns")
        return success_response(self._campaigns)

    async def get_donation_stats(self) -> Any:
        await self._simulate("get_donation_stats")
        completed = [d for d in self._donations if d.get("status") == "completed"]
        total = sum(d["amount"] for d in completed)
        return success_response({
            "totalDonations": len(completed),
            "totalAmount": total,
            "averageDonation": round(total / len(completed), 2) if completed else 0,
            "uniqueDonors": len({d.get("donorId") for d in completed}),
            "campaignPerformance": [
                {
                    "campaignName": c["name"],
                    "raised": c["raised"],
                    "goal": c["goal"],
                    "percentage": round(c["raised"] / c["goal"] * 100, 2) if c["goal"] else 0,
                }
                for c in self._campaigns
            ],
        })
