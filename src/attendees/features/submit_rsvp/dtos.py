"""DTOs for RSVP intake."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.attendees.dtos import AttendeeDTO, AttendeeStatus


class SubmitRSVPRequest(BaseModel):
    """Request body for an RSVP.

    Fields are loosely typed; validate_rsvp_input answers bad values with 400.
    """

    name: Any = None
    email: Any = None
    phone: Any = None
    plus_one: Any = None


class AttendeeResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    plus_one: bool
    status: AttendeeStatus
    qr_code_data: str | None = None
    invite_pending: bool = False
    invite_sent_on: datetime | None = None
    created_at: datetime

    @classmethod
    def from_dto(cls, attendee: AttendeeDTO) -> "AttendeeResponse":
        return cls(
            id=attendee.id,
            name=attendee.name,
            email=attendee.email,
            phone=attendee.phone,
            plus_one=attendee.plus_one,
            status=attendee.status,
            qr_code_data=attendee.qr_code_data,
            invite_pending=attendee.invite_pending,
            invite_sent_on=attendee.invite_sent_on,
            created_at=attendee.created_at,
        )


class SubmitRSVPResponse(BaseModel):
    success: bool
    data: AttendeeResponse
