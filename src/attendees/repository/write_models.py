"""Attendee write models used by invite dispatch."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.attendees.dtos import AttendeeNotFoundError
from src.attendees.repository.orm_models import Attendee
from src.config.database import async_session_manager


class InviteWriteModel(ABC):
    @abstractmethod
    async def set_qr_code_data(self, attendee_id: UUID, qr_code_url: str) -> None:
        """Store the public QR image URL on the attendee."""
        raise NotImplementedError

    @abstractmethod
    async def mark_invite_sent(self, attendee_id: UUID) -> None:
        """Clear the pending-invite flag and stamp invite_sent_on."""
        raise NotImplementedError


class SqlInviteWriteModel(InviteWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def _get_attendee(self, session, attendee_id: UUID) -> Attendee:
        result = await session.execute(select(Attendee).where(Attendee.uuid == attendee_id))
        attendee = result.scalar_one_or_none()
        if attendee is None:
            raise AttendeeNotFoundError(attendee_id)
        return attendee

    async def set_qr_code_data(self, attendee_id: UUID, qr_code_url: str) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            attendee = await self._get_attendee(session, attendee_id)
            attendee.qr_code_data = qr_code_url
            await session.flush()

    async def mark_invite_sent(self, attendee_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            attendee = await self._get_attendee(session, attendee_id)
            attendee.invite_pending = False
            attendee.invite_sent_on = datetime.now(UTC)
            await session.flush()
