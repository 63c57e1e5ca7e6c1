"""Tests for the continuous-scan session."""

import asyncio

import pytest

from src.attendees.dtos import AttendeeNotFoundError, AttendeeStatus
from src.attendees.features.check_in.scan_session import ScanOutcome, ScanSession, ScanState
from src.attendees.features.check_in.write_model import check_in_payload
from src.attendees.tests.inmemory_models import (
    InMemoryAttendeeStore,
    InMemoryCheckInWriteModel,
    create_test_attendee,
)
from src.qr_codes.codec import build_payload


@pytest.fixture
def attendee():
    return create_test_attendee(status=AttendeeStatus.ACCEPTED)


@pytest.fixture
def store(attendee):
    return InMemoryAttendeeStore([attendee])


@pytest.fixture
def session(store):
    write_model = InMemoryCheckInWriteModel(store)

    async def resolve(payload):
        return await check_in_payload(write_model, payload)

    return ScanSession(resolver=resolve, timeout_seconds=1.0)


async def test_scan_checks_in_once(session, attendee, store):
    result = await session.on_decode(build_payload(attendee.id))

    assert result.outcome == ScanOutcome.SUCCESS
    assert result.message == "Ada Lovelace is now checked in"
    assert result.attendee.id == attendee.id
    assert session.state == ScanState.RESOLVED
    assert session.captured_payload == build_payload(attendee.id)
    assert store.attendees[attendee.id].status == AttendeeStatus.CHECKED_IN


async def test_decodes_ignored_until_reset(session, attendee):
    payload = build_payload(attendee.id)
    await session.on_decode(payload)

    assert await session.on_decode(payload) is None
    assert await session.on_decode("something else") is None

    session.reset()
    assert session.state == ScanState.IDLE
    assert session.last_result is None

    result = await session.on_decode(payload)
    assert result.outcome == ScanOutcome.ALREADY_CHECKED_IN
    assert result.message == "Ada Lovelace has already been checked in"


async def test_decodes_ignored_while_resolving(attendee):
    release = asyncio.Event()
    calls = []

    async def slow_resolve(payload):
        calls.append(payload)
        await release.wait()
        raise AttendeeNotFoundError(payload)

    session = ScanSession(resolver=slow_resolve, timeout_seconds=5.0)
    first = asyncio.create_task(session.on_decode("first"))
    await asyncio.sleep(0)

    assert session.state == ScanState.RESOLVING
    assert await session.on_decode("second") is None

    release.set()
    result = await first

    assert calls == ["first"]
    assert result.payload == "first"
    assert result.outcome == ScanOutcome.NOT_FOUND


async def test_unknown_code(session):
    result = await session.on_decode("wedding-attendee:nope")

    assert result.outcome == ScanOutcome.NOT_FOUND
    assert result.message == "Attendee not found"
    assert result.attendee is None
    assert session.state == ScanState.RESOLVED


async def test_timeout_returns_to_idle():
    async def hang(payload):
        await asyncio.sleep(10)

    session = ScanSession(resolver=hang, timeout_seconds=0.01)

    result = await session.on_decode("wedding-attendee:slow")

    assert result.outcome == ScanOutcome.TIMEOUT
    assert session.state == ScanState.IDLE
    assert session.captured_payload is None


async def test_unexpected_error_returns_to_idle_and_propagates():
    async def broken(payload):
        raise RuntimeError("lost connection")

    session = ScanSession(resolver=broken)

    with pytest.raises(RuntimeError):
        await session.on_decode("wedding-attendee:x")

    assert session.state == ScanState.IDLE
