"""Tests for the send-invite and reconcile endpoints."""

from uuid import uuid4

import pytest

from src.attendees.dtos import AttendeeStatus
from src.attendees.features.send_invite.router import (
    get_attendee_read_model,
    get_invite_dispatcher,
)
from src.attendees.tests.inmemory_models import (
    InMemoryAttendeeReadModel,
    InMemoryAttendeeStore,
    InMemoryEmailService,
    InMemoryObjectStorage,
    create_test_attendee,
    create_test_dispatcher,
)
from src.attendees.urls import RECONCILE_INVITES_URL, SEND_INVITE_URL


@pytest.fixture
def attendee():
    return create_test_attendee(status=AttendeeStatus.ACCEPTED, invite_pending=True)


@pytest.fixture
def store(attendee):
    return InMemoryAttendeeStore([attendee])


@pytest.fixture
def email_service():
    return InMemoryEmailService()


async def test_send_invite(client_factory, store, attendee, email_service):
    dispatcher = create_test_dispatcher(store, email_service=email_service)
    overrides = {get_invite_dispatcher: lambda: dispatcher}

    async with client_factory(overrides) as client:
        response = await client.post(
            SEND_INVITE_URL,
            json={"id": str(attendee.id), "name": attendee.name, "email": attendee.email},
        )

    assert response.status_code == 200
    assert response.json() == {"success": True, "sentEmail": "ada@example.com"}
    assert len(email_service.sent_emails) == 1


@pytest.mark.parametrize(
    "request_data",
    [
        {"name": "Ada", "email": "ada@example.com"},
        {"id": "00000000-0000-0000-0000-000000000001", "email": "ada@example.com"},
        {"id": "00000000-0000-0000-0000-000000000001", "name": "Ada"},
        {"id": "", "name": "Ada", "email": "ada@example.com"},
        [],
        "ada@example.com",
    ],
)
async def test_send_invite_missing_fields(client_factory, store, email_service, request_data):
    dispatcher = create_test_dispatcher(store, email_service=email_service)
    overrides = {get_invite_dispatcher: lambda: dispatcher}

    async with client_factory(overrides) as client:
        response = await client.post(SEND_INVITE_URL, json=request_data)

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"
    assert email_service.sent_emails == []


@pytest.mark.parametrize("content", [b"", b"{not json"], ids=["empty", "malformed"])
async def test_send_invite_unreadable_body(client_factory, store, email_service, content):
    dispatcher = create_test_dispatcher(store, email_service=email_service)
    overrides = {get_invite_dispatcher: lambda: dispatcher}

    async with client_factory(overrides) as client:
        response = await client.post(
            SEND_INVITE_URL, content=content, headers={"content-type": "application/json"}
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"
    assert email_service.sent_emails == []


async def test_send_invite_invalid_id(client_factory, store):
    overrides = {get_invite_dispatcher: lambda: create_test_dispatcher(store)}

    async with client_factory(overrides) as client:
        response = await client.post(
            SEND_INVITE_URL, json={"id": "guest-1", "name": "Ada", "email": "ada@example.com"}
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid attendee id"


async def test_send_invite_storage_failure(client_factory, store, attendee, email_service):
    dispatcher = create_test_dispatcher(
        store, storage=InMemoryObjectStorage(fail=True), email_service=email_service
    )
    overrides = {get_invite_dispatcher: lambda: dispatcher}

    async with client_factory(overrides) as client:
        response = await client.post(
            SEND_INVITE_URL,
            json={"id": str(attendee.id), "name": attendee.name, "email": attendee.email},
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "bucket unavailable"
    assert email_service.sent_emails == []


async def test_send_invite_missing_public_url(client_factory, store, attendee):
    dispatcher = create_test_dispatcher(store, storage=InMemoryObjectStorage(public_base_url=None))
    overrides = {get_invite_dispatcher: lambda: dispatcher}

    async with client_factory(overrides) as client:
        response = await client.post(
            SEND_INVITE_URL,
            json={"id": str(attendee.id), "name": attendee.name, "email": attendee.email},
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to get public URL for QR code"


async def test_reconcile_retries_pending_invites(client_factory, email_service):
    pending = create_test_attendee(status=AttendeeStatus.ACCEPTED, invite_pending=True)
    delivered = create_test_attendee(
        name="Grace Hopper",
        email="grace@example.com",
        status=AttendeeStatus.ACCEPTED,
        invite_pending=False,
    )
    waiting = create_test_attendee(name="Alan Turing", email="alan@example.com")
    store = InMemoryAttendeeStore([pending, delivered, waiting])
    dispatcher = create_test_dispatcher(store, email_service=email_service)
    overrides = {
        get_invite_dispatcher: lambda: dispatcher,
        get_attendee_read_model: lambda: InMemoryAttendeeReadModel(store),
    }

    async with client_factory(overrides) as client:
        response = await client.post(RECONCILE_INVITES_URL)

    assert response.status_code == 200
    data = response.json()
    assert data["sent"] == 1
    assert data["failed"] == 0
    assert data["results"][0]["attendee_id"] == str(pending.id)
    assert [e["to_address"] for e in email_service.sent_emails] == ["ada@example.com"]
    assert store.attendees[pending.id].invite_pending is False


async def test_reconcile_reports_failures(client_factory):
    pending = create_test_attendee(status=AttendeeStatus.ACCEPTED, invite_pending=True)
    store = InMemoryAttendeeStore([pending])
    dispatcher = create_test_dispatcher(store, email_service=InMemoryEmailService(fail=True))
    overrides = {
        get_invite_dispatcher: lambda: dispatcher,
        get_attendee_read_model: lambda: InMemoryAttendeeReadModel(store),
    }

    async with client_factory(overrides) as client:
        response = await client.post(RECONCILE_INVITES_URL)

    data = response.json()
    assert data["sent"] == 0
    assert data["failed"] == 1
    assert data["results"][0]["stage"] == "email_send"
    assert store.attendees[pending.id].invite_pending is True


async def test_send_invite_unknown_attendee(client_factory, store):
    overrides = {get_invite_dispatcher: lambda: create_test_dispatcher(store)}

    async with client_factory(overrides) as client:
        response = await client.post(
            SEND_INVITE_URL, json={"id": str(uuid4()), "name": "Ada", "email": "ada@example.com"}
        )

    assert response.status_code == 500
    assert response.json()["detail"].startswith("Failed to update attendee with QR info")
