import random

import pytest

from alumlink.domain.models.errors import NETWORK_ERROR, NOT_FOUND, VALIDATION_ERROR, SubstituteError
from alumlink.infrastructure.services.substitute import SubstituteBackend
from alumlink.infrastructure.services.substitute.alumni import SubstituteAlumniService
from alumlink.infrastructure.services.substitute.base import (
    SubstituteConfig,
    filter_by_text,
    paginate,
    sort_by_field,
)
from alumlink.infrastructure.services.substitute.donations import SubstituteDonationsService
from alumlink.infrastructure.services.substitute.events import SubstituteEventsService


@pytest.fixture
def alumni_service():
    return SubstituteAlumniService()


@pytest.fixture
def events_service():
    return SubstituteEventsService()


@pytest.fixture
def donations_service():
    return SubstituteDonationsService()


# --- Helpers ---

def test_paginate_reports_totals():
    page = paginate(list(range(25)), page=3, limit=10)
    assert page["data"] == [20, 21, 22, 23, 24]
    assert page["pagination"] == {"page": 3, "limit": 10, "total": 25, "totalPages": 3}
    assert page["success"] is True


def test_filter_by_text_matches_list_fields_case_insensitively():
    items = [{"name": "Ada", "tags": ["Python", "Math"]}, {"name": "Bob", "tags": ["Go"]}]
    assert filter_by_text(items, "python", ["tags"]) == [items[0]]
    assert filter_by_text(items, "", ["name"]) == items


def test_sort_by_field_puts_missing_values_last():
    items = [{"n": 2}, {}, {"n": 1}]
    assert sort_by_field(items, "n", "desc") == [{"n": 2}, {"n": 1}, {}]


def test_config_validation():
    with pytest.raises(ValueError):
        SubstituteConfig(min_delay_ms=500, max_delay_ms=100)
    with pytest.raises(ValueError):
        SubstituteConfig(error_rate=1.5)


@pytest.mark.asyncio
async def test_error_rate_raises_simulated_network_error():
    service = SubstituteAlumniService(SubstituteConfig(min_delay_ms=0, max_delay_ms=0, error_rate=1.0), rng=random.Random(1))
    with pytest.raises(SubstituteError) as exc_info:
        await service.get_alumni()
    assert exc_info.value.code == NETWORK_ERROR


# --- Alumni ---

@pytest.mark.asyncio
async def test_get_alumni_filters_and_paginates(alumni_service):
    result = await alumni_service.get_alumni({"degree": "computer science", "graduationYear": "2018"}, limit=1)

    assert result["pagination"]["total"] == 2
    assert result["pagination"]["totalPages"] == 2
    assert len(result["data"]) == 1


@pytest.mark.asyncio
async def test_get_alumni_skills_filter_accepts_comma_string(alumni_service):
    result = await alumni_service.get_alumni({"skills": "go, CAD"})
    assert {a["id"] for a in result["data"]} == {"4", "5"}


@pytest.mark.asyncio
async def test_get_alumni_sorting(alumni_service):
    result = await alumni_service.get_alumni({"sortBy": "graduationYear", "sortOrder": "desc"})
    years = [a["graduationYear"] for a in result["data"]]
    assert years == sorted(years, reverse=True)


@pytest.mark.asyncio
async def test_get_alumni_by_id_and_not_found(alumni_service):
    found = await alumni_service.get_alumni_by_id("1")
    assert found["data"]["lastName"] == "Johnson"

    with pytest.raises(SubstituteError) as exc_info:
        await alumni_service.get_alumni_by_id("999")
    assert exc_info.value.code == NOT_FOUND
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_create_update_delete_alumni(alumni_service):
    created = await alumni_service.create_alumni({"firstName": "Ada", "lastName": "Lovelace", "graduationYear": 2021})
    new_id = created["data"]["id"]
    assert created["message"] == "Alumni profile created successfully"

    updated = await alumni_service.update_alumni(new_id, {"currentCompany": "Analytical Engines"})
    assert updated["data"]["currentCompany"] == "Analytical Engines"
    assert updated["data"]["id"] == new_id

    await alumni_service.delete_alumni(new_id)
    with pytest.raises(SubstituteError):
        await alumni_service.get_alumni_by_id(new_id)


@pytest.mark.asyncio
async def test_create_alumni_requires_names_and_year(alumni_service):
    with pytest.raises(SubstituteError) as exc_info:
        await alumni_service.create_alumni({"firstName": "Ada"})
    assert exc_info.value.code == VALIDATION_ERROR


@pytest.mark.asyncio
async def test_update_alumni_rejects_empty_name(alumni_service):
    with pytest.raises(SubstituteError) as exc_info:
        await alumni_service.update_alumni("1", {"lastName": ""})
    assert exc_info.value.code == VALIDATION_ERROR


@pytest.mark.asyncio
async def test_search_alumni_only_returns_public_profiles(alumni_service):
    results = await alumni_service.search_alumni("python")
    assert {a["id"] for a in results} == {"1", "5"}


@pytest.mark.asyncio
async def test_alumni_stats(alumni_service):
    stats = (await alumni_service.get_alumni_stats())["data"]
    assert stats["totalAlumni"] == 5
    assert stats["publicProfiles"] == 4
    assert stats["graduationYearDistribution"]["2018"] == 2
    assert stats["topSkills"][0] == {"skill": "Python", "count": 3}


@pytest.mark.asyncio
async def test_instances_do_not_share_state():
    first = SubstituteAlumniService()
    await first.delete_alumni("1")
    second = SubstituteAlumniService()
    assert (await second.get_alumni_by_id("1"))["data"]["id"] == "1"


@pytest.mark.asyncio
async def test_returned_records_are_copies(alumni_service):
    profile = (await alumni_service.get_alumni_by_id("1"))["data"]
    profile["lastName"] = "Changed"
    profile["skills"].append("Cobol")

    listed = (await alumni_service.get_alumni())["data"]
    listed[0]["firstName"] = "Changed"
    (await alumni_service.search_alumni("python"))[0]["lastName"] = "Changed"

    fresh = (await alumni_service.get_alumni_by_id("1"))["data"]
    assert fresh["lastName"] == "Johnson"
    assert "Cobol" not in fresh["skills"]
    assert all(a["firstName"] != "Changed" for a in (await alumni_service.get_alumni())["data"])


@pytest.mark.asyncio
async def test_returned_events_are_copies(events_service):
    event = (await events_service.get_event_by_id("1"))["data"]
    event["title"] = "Changed"

    assert (await events_service.get_event_by_id("1"))["data"]["title"] != "Changed"


# --- Events ---

@pytest.mark.asyncio
async def test_get_events_filters_by_status(events_service):
    result = await events_service.get_events({"status": "published"})
    assert {e["id"] for e in result["data"]} == {"1", "3"}


@pytest.mark.asyncio
async def test_register_and_unregister(events_service):
    registration = await events_service.register_for_event("1", "alumni_7")
    assert registration["data"]["status"] == "registered"
    assert registration["message"] == "Successfully registered for event"

    with pytest.raises(SubstituteError, match="Already registered"):
        await events_service.register_for_event("1", "alumni_7")

    await events_service.unregister_from_event("1", "alumni_7")
    attendees = (await events_service.get_event_attendees("1"))["data"]
    assert attendees["stats"]["cancelled"] == 1
    assert attendees["stats"]["totalRegistered"] == 0


@pytest.mark.asyncio
async def test_register_rejects_unpublished_event(events_service):
    with pytest.raises(SubstituteError, match="unpublished"):
        await events_service.register_for_event("2", "alumni_7")


@pytest.mark.asyncio
async def test_register_rejects_full_event(events_service):
    await events_service.register_for_event("3", "a")
    await events_service.register_for_event("3", "b")
    with pytest.raises(SubstituteError, match="full capacity"):
        await events_service.register_for_event("3", "c")


@pytest.mark.asyncio
async def test_unregister_without_registration_is_not_found(events_service):
    with pytest.raises(SubstituteError) as exc_info:
        await events_service.unregister_from_event("1", "nobody")
    assert exc_info.value.code == NOT_FOUND


@pytest.mark.asyncio
async def test_event_stats_counts_registrations(events_service):
    await events_service.register_for_event("1", "a")
    await events_service.register_for_event("3", "a")
    await events_service.register_for_event("3", "b")

    stats = (await events_service.get_event_stats())["data"]
    assert stats["totalEvents"] == 3
    assert stats["completedEvents"] == 1
    assert stats["totalRegistrations"] == 3
    assert stats["popularEvents"][0]["eventId"] == "3"


@pytest.mark.asyncio
async def test_create_event_requires_title_and_date(events_service):
    with pytest.raises(SubstituteError):
        await events_service.create_event({"title": "No date"})
    created = await events_service.create_event({"title": "Reunion", "eventDate": "2030-01-01T00:00:00+00:00"})
    assert created["data"]["status"] == "draft"


# --- Donations ---

@pytest.mark.asyncio
async def test_donations_amount_filters(donations_service):
    result = await donations_service.get_donations({"minAmount": 400})
    assert {d["id"] for d in result["data"]} == {"1", "2"}


@pytest.mark.asyncio
async def test_create_donation_updates_campaign(donations_service):
    await donations_service.create_donation({"amount": 100, "campaignId": "campaign_1", "donorId": "9"})
    campaigns = (await donations_service.get_campaigns())["data"]
    assert campaigns[0]["raised"] == 850


@pytest.mark.asyncio
async def test_create_donation_rejects_non_positive_amount(donations_service):
    with pytest.raises(SubstituteError) as exc_info:
        await donations_service.create_donation({"amount": 0})
    assert exc_info.value.code == VALIDATION_ERROR


@pytest.mark.asyncio
async def test_donation_stats(donations_service):
    stats = (await donations_service.get_donation_stats())["data"]
    assert stats["totalDonations"] == 3
    assert stats["totalAmount"] == 1750
    assert stats["uniqueDonors"] == 3
    assert stats["campaignPerformance"][1]["percentage"] == 1.0


def test_backend_bundle_has_no_auth_substitute():
    backend = SubstituteBackend.create()
    assert not hasattr(backend, "auth")
