from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from src.attendees.repository.orm_models import Attendee


class AttendeeStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CHECKED_IN = "checked_in"


class CheckInOutcome(str, Enum):
    SUCCESS = "success"
    ALREADY_CHECKED_IN = "already_checked_in"


class InvalidInputError(Exception):
    """Raised when submitted RSVP fields are missing or malformed."""


class AttendeeAlreadyExistsError(Exception):
    """Raised when an RSVP was already submitted for an email address."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"RSVP already submitted for '{email}'")


class RateLimitedError(Exception):
    """Raised when a client has used up its RSVP submissions for the window."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Too many submissions from {key}")


class AttendeeNotFoundError(Exception):
    def __init__(self, attendee_id: UUID | str) -> None:
        self.attendee_id = attendee_id
        super().__init__(f"Attendee not found: {attendee_id}")


class InvalidStatusTransitionError(Exception):
    def __init__(self, current: AttendeeStatus, target: AttendeeStatus) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot change status from '{current.value}' to '{target.value}'")


class InviteDispatchError(Exception):
    """Base class for failures while generating and emailing a QR invite.

    ``stage`` names the step that broke so callers can report it.
    """

    stage = "dispatch"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class QrEncodeFailedError(InviteDispatchError):
    stage = "qr_encode"


class StorageUploadFailedError(InviteDispatchError):
    stage = "storage_upload"


class UrlResolutionFailedError(InviteDispatchError):
    stage = "url_resolution"


class RecordUpdateFailedError(InviteDispatchError):
    stage = "record_update"


class EmailSendFailedError(InviteDispatchError):
    stage = "email_send"


@dataclass(frozen=True)
class AttendeeDTO:
    """DTO for attendee data."""

    id: UUID
    name: str
    email: str
    status: AttendeeStatus
    created_at: datetime
    phone: str | None = None
    plus_one: bool = False
    qr_code_data: str | None = None
    invite_pending: bool = False
    invite_sent_on: datetime | None = None

    @classmethod
    def from_attendee(cls, attendee: "Attendee") -> "AttendeeDTO":
        """Create AttendeeDTO from Attendee ORM model.

        Raises ValueError for a record whose status is not a known value.
        """
        return cls(
            id=attendee.uuid,
            name=attendee.name,
            email=attendee.email,
            status=AttendeeStatus(attendee.status),
            created_at=attendee.created_at,
            phone=attendee.phone,
            plus_one=bool(attendee.plus_one),
            qr_code_data=attendee.qr_code_data,
            invite_pending=bool(attendee.invite_pending),
            invite_sent_on=attendee.invite_sent_on,
        )


@dataclass(frozen=True)
class CheckInResultDTO:
    """Outcome of a check-in. ``attendee`` is the record as it was before the update."""

    outcome: CheckInOutcome
    attendee: AttendeeDTO


@dataclass(frozen=True)
class InviteResultDTO:
    attendee_id: UUID
    sent_email: str
    qr_code_url: str


@dataclass(frozen=True)
class ReconcileResultDTO:
    attendee_id: UUID
    email: str
    success: bool
    stage: str | None = None
    error: str | None = None
