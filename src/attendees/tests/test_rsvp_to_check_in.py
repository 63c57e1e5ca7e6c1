"""An RSVP followed all the way to the door."""

import pytest

from src.attendees.features.check_in.router import get_check_in_write_model
from src.attendees.features.list_attendees.router import get_attendee_read_model
from src.attendees.features.submit_rsvp.router import get_submit_rsvp_write_model
from src.attendees.features.update_status.router import (
    get_invite_dispatcher,
    get_update_status_write_model,
)
from src.attendees.tests.inmemory_models import (
    InMemoryAttendeeReadModel,
    InMemoryAttendeeStore,
    InMemoryCheckInWriteModel,
    InMemoryEmailService,
    InMemoryObjectStorage,
    InMemorySubmitRSVPWriteModel,
    InMemoryUpdateStatusWriteModel,
    create_test_dispatcher,
)
from src.attendees.urls import (
    CHECK_IN_URL,
    LIST_ATTENDEES_URL,
    SUBMIT_RSVP_URL,
    UPDATE_STATUS_URL,
)
from src.qr_codes.codec import build_payload


@pytest.fixture
def store():
    return InMemoryAttendeeStore()


@pytest.fixture
def email_service():
    return InMemoryEmailService()


@pytest.fixture
def storage():
    return InMemoryObjectStorage()


@pytest.fixture
def overrides(store, email_service, storage):
    dispatcher = create_test_dispatcher(store, storage=storage, email_service=email_service)
    return {
        get_submit_rsvp_write_model: lambda: InMemorySubmitRSVPWriteModel(store),
        get_attendee_read_model: lambda: InMemoryAttendeeReadModel(store),
        get_update_status_write_model: lambda: InMemoryUpdateStatusWriteModel(store),
        get_invite_dispatcher: lambda: dispatcher,
        get_check_in_write_model: lambda: InMemoryCheckInWriteModel(store),
    }


async def test_guest_rsvps_is_accepted_and_checks_in(client_factory, overrides, email_service, storage):
    async with client_factory(overrides) as client:
        rsvp = await client.post(
            SUBMIT_RSVP_URL,
            json={"name": "Ada", "email": "ada@example.com", "plus_one": True},
        )
        assert rsvp.status_code == 200
        attendee_id = rsvp.json()["data"]["id"]

        listing = await client.get(LIST_ATTENDEES_URL)
        assert listing.json()["attendees"][0]["status"] == "pending"

        accepted = await client.post(
            UPDATE_STATUS_URL.format(attendee_id=attendee_id), json={"status": "accepted"}
        )
        assert accepted.status_code == 200

        listing = await client.get(LIST_ATTENDEES_URL, params={"status": "accepted"})
        [attendee] = listing.json()["attendees"]
        assert attendee["qr_code_data"] == f"https://cdn.example.com/qr/{attendee_id}.png"
        assert attendee["invite_pending"] is False

        scanned = build_payload(attendee_id)
        first = await client.post(CHECK_IN_URL, json={"payload": scanned})
        second = await client.post(CHECK_IN_URL, json={"payload": scanned})

    assert [e["to_address"] for e in email_service.sent_emails] == ["ada@example.com"]
    assert f"qr/{attendee_id}.png" in storage.objects

    assert first.json()["message"] == "Ada is now checked in"
    assert second.json()["outcome"] == "already_checked_in"
    assert second.json()["message"] == "Ada has already been checked in"
