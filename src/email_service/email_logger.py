"""Audit trail of outgoing emails.

Each send writes a pending row first and settles it as sent or failed once
the provider has answered, so a crash mid-send still leaves a trace.
"""

from abc import ABC, abstractmethod
from enum import Enum
from functools import partial
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from src.attendees.repository.orm_models import EmailLog
from src.config.database import async_session_manager


class EmailLogStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class EmailLogger(ABC):
    @abstractmethod
    async def log_email_attempt(
        self,
        to_address: str,
        from_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        attendee_id: UUID | None = None,
    ) -> UUID:
        """Record a send before it happens and return the log entry id."""
        raise NotImplementedError

    @abstractmethod
    async def log_email_success(self, log_uuid: UUID, resend_email_id: str | None) -> None:
        raise NotImplementedError

    @abstractmethod
    async def log_email_failure(self, log_uuid: UUID, error_message: str) -> None:
        raise NotImplementedError


class SQLEmailLogger(EmailLogger):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def log_email_attempt(
        self,
        to_address: str,
        from_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        attendee_id: UUID | None = None,
    ) -> UUID:
        email_log = EmailLog(
            to_address=to_address,
            from_address=from_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type=email_type,
            attendee_id=attendee_id,
            status=EmailLogStatus.PENDING.value,
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            session.add(email_log)
            await session.flush()
            return email_log.uuid

    async def log_email_success(self, log_uuid: UUID, resend_email_id: str | None) -> None:
        await self._settle(log_uuid, EmailLogStatus.SENT, resend_email_id=resend_email_id)

    async def log_email_failure(self, log_uuid: UUID, error_message: str) -> None:
        await self._settle(log_uuid, EmailLogStatus.FAILED, error_message=error_message)

    async def _settle(self, log_uuid: UUID, status: EmailLogStatus, **fields) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            email_log = await session.get(EmailLog, log_uuid)
            if email_log is None:
                return
            email_log.status = status.value
            for name, value in fields.items():
                setattr(email_log, name, value)
            await session.flush()


class NoOpEmailLogger(EmailLogger):
    """Used when no database is wired in, e.g. one-off sends from the CLI."""

    async def log_email_attempt(
        self,
        to_address: str,
        from_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        attendee_id: UUID | None = None,
    ) -> UUID:
        return uuid4()

    async def log_email_success(self, log_uuid: UUID, resend_email_id: str | None) -> None:
        pass

    async def log_email_failure(self, log_uuid: UUID, error_message: str) -> None:
        pass
