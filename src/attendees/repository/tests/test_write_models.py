"""Tests for SqlInviteWriteModel."""

from uuid import uuid4

import pytest

from src.attendees.dtos import AttendeeNotFoundError, AttendeeStatus
from src.attendees.repository.orm_models import Attendee
from src.attendees.repository.read_models import SqlAttendeeReadModel
from src.attendees.repository.write_models import SqlInviteWriteModel


async def create_accepted_attendee(db_session) -> Attendee:
    attendee = Attendee(
        name="Ada Lovelace",
        email="ada@example.com",
        status=AttendeeStatus.ACCEPTED,
        invite_pending=True,
    )
    db_session.add(attendee)
    await db_session.flush()
    return attendee


async def test_set_qr_code_data(db_session):
    attendee = await create_accepted_attendee(db_session)
    write_model = SqlInviteWriteModel(session_overwrite=db_session)

    await write_model.set_qr_code_data(attendee.uuid, "https://cdn.example.com/qr/1.png")

    saved = await SqlAttendeeReadModel(session_overwrite=db_session).get_attendee(attendee.uuid)
    assert saved.qr_code_data == "https://cdn.example.com/qr/1.png"
    assert saved.invite_pending is True


async def test_mark_invite_sent(db_session):
    attendee = await create_accepted_attendee(db_session)
    write_model = SqlInviteWriteModel(session_overwrite=db_session)

    await write_model.mark_invite_sent(attendee.uuid)

    saved = await SqlAttendeeReadModel(session_overwrite=db_session).get_attendee(attendee.uuid)
    assert saved.invite_pending is False
    assert saved.invite_sent_on is not None


async def test_unknown_attendee(db_session):
    write_model = SqlInviteWriteModel(session_overwrite=db_session)

    with pytest.raises(AttendeeNotFoundError):
        await write_model.set_qr_code_data(uuid4(), "https://cdn.example.com/qr/1.png")
