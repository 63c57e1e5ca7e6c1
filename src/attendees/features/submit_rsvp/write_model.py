"""Write model for RSVP intake.

Creates a pending attendee after a duplicate check, then appends an entry to
the submission log. The two writes are not transactional: a failed log write
never undoes the attendee.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.attendees.dtos import AttendeeAlreadyExistsError, AttendeeDTO, AttendeeStatus
from src.attendees.repository.orm_models import Attendee, RSVPLog
from src.config.database import async_session_manager

logger = logging.getLogger(__name__)


class SubmitRSVPWriteModel(ABC):
    """Abstract base class for RSVP intake."""

    @abstractmethod
    async def submit_rsvp(
        self,
        name: str,
        email: str,
        ip_address: str,
        phone: str | None = None,
        plus_one: bool = False,
    ) -> AttendeeDTO:
        """Record a new RSVP.

        Args:
            name: Guest name
            email: Guest email, unique across attendees
            ip_address: Client address, kept in the submission log
            phone: Optional phone number
            plus_one: Whether the guest brings a plus one

        Returns:
            AttendeeDTO of the created, pending attendee

        Raises:
            AttendeeAlreadyExistsError: an RSVP exists for the email
        """
        raise NotImplementedError


class SqlSubmitRSVPWriteModel(SubmitRSVPWriteModel):
    """SQL implementation of RSVP intake."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def submit_rsvp(
        self,
        name: str,
        email: str,
        ip_address: str,
        phone: str | None = None,
        plus_one: bool = False,
    ) -> AttendeeDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            if await self._email_exists(session, email):
                raise AttendeeAlreadyExistsError(email)

            attendee = Attendee(
                name=name,
                email=email,
                phone=phone,
                plus_one=plus_one,
                status=AttendeeStatus.PENDING,
                qr_code_data=None,
                invite_pending=False,
            )
            session.add(attendee)
            await session.flush()
            await session.refresh(attendee)
            attendee_dto = AttendeeDTO.from_attendee(attendee)

        await self._append_rsvp_log(email=email, name=name, ip_address=ip_address)
        return attendee_dto

    async def _email_exists(self, session, email: str) -> bool:
        result = await session.execute(
            select(Attendee.uuid).where(func.lower(Attendee.email) == email.lower()).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def _append_rsvp_log(self, email: str, name: str, ip_address: str) -> None:
        try:
            async with self.async_session_manager(
                session_overwrite=self.session_overwrite
            ) as session:
                session.add(RSVPLog(email=email, name=name, ip_address=ip_address or "unknown"))
                await session.flush()
        except SQLAlchemyError as e:
            logger.warning(f"Could not write RSVP log for {email}: {e}")
