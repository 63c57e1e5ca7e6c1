import logging
from typing import Protocol
from uuid import UUID

import httpx
from sqlalchemy.exc import SQLAlchemyError

from src.email_service.base import EmailServiceBase
from src.email_service.email_logger import EmailLogger, NoOpEmailLogger
from src.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str
    couple_names: str
    event_date: str
    event_location: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        email_logger: EmailLogger | None = None,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
        http_client_kwargs: dict | None = None,
    ):
        self._config = config
        self.email_logger = email_logger or NoOpEmailLogger()
        self._http_client_class = http_client_class
        self._http_client_kwargs = http_client_kwargs or {}

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
        email_type: str,
        attendee_id: UUID | None = None,
    ) -> str:
        """Send email via Resend and log via injected logger.

        The email log is best-effort: a database error while logging is
        reported as a warning and never changes the outcome of the send.
        """
        log_uuid = await self._log_attempt(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type=email_type,
            attendee_id=attendee_id,
        )

        try:
            async with self._http_client_class(**self._http_client_kwargs) as client:
                response = await client.post(
                    RESEND_EMAILS_URL,
                    headers={
                        "Authorization": f"Bearer {self._config.resend_api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": self._config.emails_from,
                        "to": [to_address],
                        "subject": subject,
                        "html": html_body,
                        "text": text_body,
                    },
                )
                response.raise_for_status()
                resend_email_id = response.json().get("id")
        except httpx.HTTPError as e:
            await self._log_failure(log_uuid, str(e))
            raise

        await self._log_success(log_uuid, resend_email_id)
        logger.info(f"Sent {email_type} email to {to_address} ({resend_email_id})")
        return resend_email_id

    async def _log_attempt(self, to_address: str, **fields) -> UUID | None:
        try:
            return await self.email_logger.log_email_attempt(
                to_address=to_address,
                from_address=self._config.emails_from,
                **fields,
            )
        except SQLAlchemyError as e:
            logger.warning(f"Could not log email attempt to {to_address}: {e}")
            return None

    async def _log_success(self, log_uuid: UUID | None, resend_email_id: str | None) -> None:
        if log_uuid is None:
            return
        try:
            await self.email_logger.log_email_success(
                log_uuid=log_uuid,
                resend_email_id=resend_email_id,
            )
        except SQLAlchemyError as e:
            logger.warning(f"Could not mark email log {log_uuid} as sent: {e}")

    async def _log_failure(self, log_uuid: UUID | None, error_message: str) -> None:
        if log_uuid is None:
            return
        try:
            await self.email_logger.log_email_failure(
                log_uuid=log_uuid,
                error_message=error_message,
            )
        except SQLAlchemyError as e:
            logger.warning(f"Could not mark email log {log_uuid} as failed: {e}")

    async def send_qr_invitation(
        self,
        to_address: str,
        guest_name: str,
        qr_image_data_url: str,
        qr_code_url: str,
        attendee_id: UUID | None = None,
    ) -> str | None:
        subject, html_body, text_body = EmailTemplates.render_qr_invitation(
            self._config,
            guest_name=guest_name,
            qr_image_data_url=qr_image_data_url,
            qr_code_url=qr_code_url,
        )
        return await self._send(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            email_type="qr_invitation",
            attendee_id=attendee_id,
        )
