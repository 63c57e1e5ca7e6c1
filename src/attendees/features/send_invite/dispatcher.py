"""Invite dispatch.

Generates the attendee's QR code, stores it, records its public URL and
emails it. Each stage must succeed; the first failure is raised as the
stage-specific InviteDispatchError and later stages are not attempted.
"""

import logging
import smtplib
from uuid import UUID

import httpx
from sqlalchemy.exc import SQLAlchemyError

from src.attendees.dtos import (
    AttendeeDTO,
    AttendeeNotFoundError,
    EmailSendFailedError,
    InviteDispatchError,
    InviteResultDTO,
    QrEncodeFailedError,
    RecordUpdateFailedError,
    StorageUploadFailedError,
    UrlResolutionFailedError,
)
from src.attendees.repository.write_models import InviteWriteModel
from src.email_service.base import EmailServiceBase
from src.qr_codes.codec import QRCodec, build_payload, qr_asset_path, to_data_url
from src.storage.base import ObjectStorage, StorageError

logger = logging.getLogger(__name__)


class InviteDispatcher:
    def __init__(
        self,
        qr_codec: QRCodec,
        storage: ObjectStorage,
        write_model: InviteWriteModel,
        email_service: EmailServiceBase,
    ) -> None:
        self.qr_codec = qr_codec
        self.storage = storage
        self.write_model = write_model
        self.email_service = email_service

    async def dispatch(self, attendee_id: UUID, name: str, email: str) -> InviteResultDTO:
        payload = build_payload(attendee_id)

        try:
            png = self.qr_codec.encode(payload)
        except ValueError as e:
            raise self._fail(QrEncodeFailedError(f"Failed to generate QR code: {e}"), attendee_id)

        path = qr_asset_path(attendee_id)
        try:
            await self.storage.upload(path, png, content_type="image/png")
        except StorageError as e:
            raise self._fail(
                StorageUploadFailedError(str(e) or "Failed to upload QR code to storage"),
                attendee_id,
            )

        qr_code_url = self.storage.public_url(path)
        if not qr_code_url:
            raise self._fail(
                UrlResolutionFailedError("Failed to get public URL for QR code"), attendee_id
            )

        try:
            await self.write_model.set_qr_code_data(attendee_id, qr_code_url)
        except (AttendeeNotFoundError, SQLAlchemyError) as e:
            raise self._fail(
                RecordUpdateFailedError(f"Failed to update attendee with QR info: {e}"),
                attendee_id,
            )

        try:
            await self.email_service.send_qr_invitation(
                to_address=email,
                guest_name=name,
                qr_image_data_url=to_data_url(png),
                qr_code_url=qr_code_url,
                attendee_id=attendee_id,
            )
        except (httpx.HTTPError, smtplib.SMTPException, OSError) as e:
            raise self._fail(EmailSendFailedError(f"Failed to send email: {e}"), attendee_id)

        try:
            await self.write_model.mark_invite_sent(attendee_id)
        except SQLAlchemyError as e:
            # The email is out; the reconciliation sweep may send it once more
            logger.warning(f"Invite sent to {email} but could not clear pending flag: {e}")

        logger.info(f"QR invite sent to {email} for attendee {attendee_id}")
        return InviteResultDTO(attendee_id=attendee_id, sent_email=email, qr_code_url=qr_code_url)

    async def dispatch_attendee(self, attendee: AttendeeDTO) -> InviteResultDTO:
        return await self.dispatch(attendee.id, attendee.name, attendee.email)

    @staticmethod
    def _fail(error: InviteDispatchError, attendee_id: UUID) -> InviteDispatchError:
        logger.error(f"Invite dispatch failed at {error.stage} for {attendee_id}: {error.message}")
        return error


async def dispatch_invite_in_background(
    dispatcher: InviteDispatcher, attendee_id: UUID, name: str, email: str
) -> None:
    """Background task run after an attendee is accepted.

    A failure leaves the attendee's invite pending for the reconciliation sweep.
    """
    try:
        await dispatcher.dispatch(attendee_id, name, email)
    except InviteDispatchError as e:
        logger.warning(f"Invite for {attendee_id} left pending after {e.stage} failure")
