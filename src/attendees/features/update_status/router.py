import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel

from src.attendees.dependencies import require_admin
from src.attendees.dtos import (
    AttendeeNotFoundError,
    AttendeeStatus,
    InvalidStatusTransitionError,
)
from src.attendees.features.send_invite.dispatcher import (
    InviteDispatcher,
    dispatch_invite_in_background,
)
from src.attendees.features.send_invite.router import get_invite_dispatcher
from src.attendees.features.submit_rsvp.dtos import AttendeeResponse
from src.attendees.features.update_status.write_model import (
    SqlUpdateStatusWriteModel,
    UpdateStatusWriteModel,
)
from src.attendees.status import ADMIN_TARGET_STATUSES
from src.attendees.urls import UPDATE_STATUS_URL

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


class UpdateStatusRequest(BaseModel):
    status: AttendeeStatus


class UpdateStatusResponse(BaseModel):
    attendee: AttendeeResponse
    invite_queued: bool


def get_update_status_write_model() -> UpdateStatusWriteModel:
    """Dependency to get status write model instance."""
    return SqlUpdateStatusWriteModel()


@router.post(UPDATE_STATUS_URL, response_model=UpdateStatusResponse)
async def update_status(
    attendee_id: UUID,
    status_data: UpdateStatusRequest,
    background_tasks: BackgroundTasks,
    write_model: UpdateStatusWriteModel = Depends(get_update_status_write_model),
    dispatcher: InviteDispatcher = Depends(get_invite_dispatcher),
) -> UpdateStatusResponse:
    """
    Accept or reject an RSVP.

    Accepting queues the QR invite email. A failed invite does not undo the
    acceptance; the attendee stays marked as waiting for an invite.
    """
    if status_data.status not in ADMIN_TARGET_STATUSES:
        raise HTTPException(status_code=400, detail="Status must be 'accepted' or 'rejected'")

    try:
        attendee = await write_model.set_status(attendee_id, status_data.status)
    except AttendeeNotFoundError:
        raise HTTPException(status_code=404, detail="Attendee not found")
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    invite_queued = attendee.status == AttendeeStatus.ACCEPTED
    if invite_queued:
        background_tasks.add_task(
            dispatch_invite_in_background,
            dispatcher,
            attendee.id,
            attendee.name,
            attendee.email,
        )
        logger.info(f"Attendee {attendee.id} accepted, invite queued")

    return UpdateStatusResponse(
        attendee=AttendeeResponse.from_dto(attendee),
        invite_queued=invite_queued,
    )
