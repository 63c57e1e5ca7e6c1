"""Attendee read models - return DTOs, never ORM models."""

import abc
from functools import partial
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.attendees.dtos import AttendeeDTO, AttendeeStatus
from src.attendees.repository.orm_models import Attendee
from src.config.database import async_session_manager


class AttendeeReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_attendee(self, attendee_id: UUID) -> AttendeeDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_attendees(
        self,
        status: AttendeeStatus | None = None,
        newest_first: bool = True,
    ) -> list[AttendeeDTO]:
        """List attendees for the admin dashboard, ordered by created_at."""
        raise NotImplementedError

    @abc.abstractmethod
    async def search_attendees(self, query: str) -> list[AttendeeDTO]:
        """Case-insensitive substring match on name or email."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_pending_invites(self) -> list[AttendeeDTO]:
        """Accepted attendees whose QR invite has not gone out yet."""
        raise NotImplementedError


class SqlAttendeeReadModel(AttendeeReadModel):
    """SQL implementation of attendee read model."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_attendee(self, attendee_id: UUID) -> AttendeeDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Attendee).where(Attendee.uuid == attendee_id))
            attendee = result.scalar_one_or_none()
            return AttendeeDTO.from_attendee(attendee) if attendee else None

    async def list_attendees(
        self,
        status: AttendeeStatus | None = None,
        newest_first: bool = True,
    ) -> list[AttendeeDTO]:
        order = Attendee.created_at.desc() if newest_first else Attendee.created_at.asc()
        stmt = select(Attendee).order_by(order)
        if status:
            stmt = stmt.where(Attendee.status == status)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [AttendeeDTO.from_attendee(a) for a in result.scalars().all()]

    async def search_attendees(self, query: str) -> list[AttendeeDTO]:
        query = query.strip().lower()
        if not query:
            return []

        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        stmt = (
            select(Attendee)
            .where(
                or_(
                    func.lower(Attendee.name).like(pattern, escape="\\"),
                    func.lower(Attendee.email).like(pattern, escape="\\"),
                )
            )
            .order_by(Attendee.name)
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [AttendeeDTO.from_attendee(a) for a in result.scalars().all()]

    async def list_pending_invites(self) -> list[AttendeeDTO]:
        stmt = (
            select(Attendee)
            .where(
                Attendee.status == AttendeeStatus.ACCEPTED,
                Attendee.invite_pending.is_(True),
            )
            .order_by(Attendee.created_at.asc())
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [AttendeeDTO.from_attendee(a) for a in result.scalars().all()]
