from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.attendees.dependencies import json_object_body, require_admin
from src.attendees.dtos import InviteDispatchError
from src.attendees.features.send_invite.dispatcher import InviteDispatcher
from src.attendees.features.send_invite.reconcile import reconcile_pending_invites
from src.attendees.repository.read_models import AttendeeReadModel, SqlAttendeeReadModel
from src.attendees.repository.write_models import SqlInviteWriteModel
from src.attendees.urls import RECONCILE_INVITES_URL, SEND_INVITE_URL
from src.email_service import get_email_service
from src.qr_codes import get_qr_codec
from src.storage import get_object_storage

router = APIRouter(dependencies=[Depends(require_admin)])


class SendInviteRequest(BaseModel):
    id: Any = None
    name: Any = None
    email: Any = None


class SendInviteResponse(BaseModel):
    success: bool
    sentEmail: str


class ReconcileResultResponse(BaseModel):
    attendee_id: UUID
    email: str
    success: bool
    stage: str | None = None
    error: str | None = None


class ReconcileResponse(BaseModel):
    results: list[ReconcileResultResponse]
    sent: int
    failed: int


def get_invite_dispatcher() -> InviteDispatcher:
    """Dependency to get invite dispatcher instance."""
    return InviteDispatcher(
        qr_codec=get_qr_codec(),
        storage=get_object_storage(),
        write_model=SqlInviteWriteModel(),
        email_service=get_email_service(),
    )


def get_attendee_read_model() -> AttendeeReadModel:
    return SqlAttendeeReadModel()


@router.post(SEND_INVITE_URL, response_model=SendInviteResponse)
async def send_invite(
    body: dict = Depends(json_object_body),
    dispatcher: InviteDispatcher = Depends(get_invite_dispatcher),
) -> SendInviteResponse:
    """
    Generate the attendee's QR code and email it to them.
    """
    invite_data = SendInviteRequest.model_validate(body)
    if not invite_data.id or not invite_data.name or not invite_data.email:
        raise HTTPException(status_code=400, detail="Missing required fields")

    try:
        attendee_id = UUID(str(invite_data.id))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid attendee id")

    try:
        result = await dispatcher.dispatch(attendee_id, str(invite_data.name), str(invite_data.email))
    except InviteDispatchError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return SendInviteResponse(success=True, sentEmail=result.sent_email)


@router.post(RECONCILE_INVITES_URL, response_model=ReconcileResponse)
async def reconcile_invites(
    read_model: AttendeeReadModel = Depends(get_attendee_read_model),
    dispatcher: InviteDispatcher = Depends(get_invite_dispatcher),
) -> ReconcileResponse:
    """
    Retry every accepted attendee whose QR invite has not been delivered.
    """
    results = await reconcile_pending_invites(read_model, dispatcher)
    return ReconcileResponse(
        results=[
            ReconcileResultResponse(
                attendee_id=r.attendee_id,
                email=r.email,
                success=r.success,
                stage=r.stage,
                error=r.error,
            )
            for r in results
        ],
        sent=sum(1 for r in results if r.success),
        failed=sum(1 for r in results if not r.success),
    )
