import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol
from uuid import UUID

from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)


class SMTPEmailConfig(Protocol):
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    emails_from: str
    couple_names: str
    event_date: str
    event_location: str


class SMTPEmailService(EmailServiceBase):
    """Fallback transport when no Resend key is configured (Mailhog locally)."""

    def __init__(self, config: SMTPEmailConfig, smtp_class: type[smtplib.SMTP] = smtplib.SMTP):
        self._config = config
        self._smtp_class = smtp_class

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self._config.emails_from
        msg["To"] = to_address

        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        with self._smtp_class(self._config.smtp_host, self._config.smtp_port) as server:
            if self._config.smtp_user and self._config.smtp_password:
                server.starttls()
                server.login(self._config.smtp_user, self._config.smtp_password)
            server.send_message(msg)

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
        msg = self._create_message(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )

        await asyncio.to_thread(self._send, msg)
        logger.info(f"Sent qr_invitation email to {to_address} via SMTP")
        return None
