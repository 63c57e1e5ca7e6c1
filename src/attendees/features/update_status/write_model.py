"""Write model for the admin accept/reject workflow."""

from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.attendees.dtos import AttendeeDTO, AttendeeNotFoundError, AttendeeStatus
from src.attendees.repository.orm_models import Attendee
from src.attendees.status import ensure_transition
from src.config.database import async_session_manager


class UpdateStatusWriteModel(ABC):
    @abstractmethod
    async def set_status(self, attendee_id: UUID, status: AttendeeStatus) -> AttendeeDTO:
        """Move an attendee to ``status``.

        Accepting also marks the QR invite as pending.

        Raises:
            AttendeeNotFoundError: unknown attendee
            InvalidStatusTransitionError: the lifecycle forbids the change
        """
        raise NotImplementedError


class SqlUpdateStatusWriteModel(UpdateStatusWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def set_status(self, attendee_id: UUID, status: AttendeeStatus) -> AttendeeDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Attendee).where(Attendee.uuid == attendee_id).with_for_update()
            )
            attendee = result.scalar_one_or_none()
            if attendee is None:
                raise AttendeeNotFoundError(attendee_id)

            ensure_transition(AttendeeStatus(attendee.status), status)

            attendee.status = status
            if status == AttendeeStatus.ACCEPTED:
                attendee.invite_pending = True
            await session.flush()
            await session.refresh(attendee)
            return AttendeeDTO.from_attendee(attendee)
