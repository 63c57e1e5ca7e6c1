"""Write model for check-in at the venue."""

import dataclasses
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.attendees.dtos import (
    AttendeeDTO,
    AttendeeNotFoundError,
    AttendeeStatus,
    CheckInOutcome,
    CheckInResultDTO,
)
from src.attendees.repository.orm_models import Attendee
from src.config.database import async_session_manager
from src.qr_codes.codec import parse_payload


class CheckInWriteModel(ABC):
    @abstractmethod
    async def check_in(self, attendee_id: UUID) -> CheckInResultDTO:
        """Mark an attendee as checked in.

        Returns the attendee as it was before the update. An attendee who is
        already checked in is returned untouched with ALREADY_CHECKED_IN.

        Raises:
            AttendeeNotFoundError: unknown attendee
        """
        raise NotImplementedError


class SqlCheckInWriteModel(CheckInWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def check_in(self, attendee_id: UUID) -> CheckInResultDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Attendee)
                .where(Attendee.uuid == attendee_id)
                .execution_options(populate_existing=True)
            )
            attendee = result.scalar_one_or_none()
            if attendee is None:
                raise AttendeeNotFoundError(attendee_id)

            snapshot = AttendeeDTO.from_attendee(attendee)
            if snapshot.status == AttendeeStatus.CHECKED_IN:
                return CheckInResultDTO(outcome=CheckInOutcome.ALREADY_CHECKED_IN, attendee=snapshot)

            # Conditional so that two racing scans produce a single success
            update_result = await session.execute(
                update(Attendee)
                .where(
                    Attendee.uuid == attendee_id,
                    Attendee.status != AttendeeStatus.CHECKED_IN,
                )
                .values(status=AttendeeStatus.CHECKED_IN)
                .execution_options(synchronize_session=False)
            )
            if update_result.rowcount == 0:
                return CheckInResultDTO(
                    outcome=CheckInOutcome.ALREADY_CHECKED_IN,
                    attendee=dataclasses.replace(snapshot, status=AttendeeStatus.CHECKED_IN),
                )

            return CheckInResultDTO(outcome=CheckInOutcome.SUCCESS, attendee=snapshot)


async def check_in_payload(write_model: CheckInWriteModel, raw_payload: str) -> CheckInResultDTO:
    """Check in from a scanned QR payload or a raw attendee id.

    Anything that is not a well-formed id resolves to AttendeeNotFoundError.
    """
    raw_id = parse_payload(raw_payload)
    try:
        attendee_id = UUID(raw_id)
    except ValueError:
        raise AttendeeNotFoundError(raw_id)
    return await write_model.check_in(attendee_id)
