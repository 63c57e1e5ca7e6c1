from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.attendees.dependencies import require_admin
from src.attendees.dtos import AttendeeStatus
from src.attendees.features.send_invite.router import get_attendee_read_model
from src.attendees.features.submit_rsvp.dtos import AttendeeResponse
from src.attendees.repository.read_models import AttendeeReadModel
from src.attendees.urls import LIST_ATTENDEES_URL, SEARCH_ATTENDEES_URL

router = APIRouter(dependencies=[Depends(require_admin)])


class AttendeeListResponse(BaseModel):
    attendees: list[AttendeeResponse]
    total: int


@router.get(LIST_ATTENDEES_URL, response_model=AttendeeListResponse)
async def list_attendees(
    status: AttendeeStatus | None = Query(None, description="Filter by status"),
    order: str = Query("desc", pattern="^(asc|desc)$", description="Order by RSVP time"),
    read_model: AttendeeReadModel = Depends(get_attendee_read_model),
) -> AttendeeListResponse:
    """
    List RSVPs for the admin dashboard, newest first by default.
    """
    attendees = await read_model.list_attendees(status=status, newest_first=order == "desc")
    return AttendeeListResponse(
        attendees=[AttendeeResponse.from_dto(a) for a in attendees],
        total=len(attendees),
    )


@router.get(SEARCH_ATTENDEES_URL, response_model=AttendeeListResponse)
async def search_attendees(
    q: str = Query("", description="Part of a name or email"),
    read_model: AttendeeReadModel = Depends(get_attendee_read_model),
) -> AttendeeListResponse:
    """
    Manual check-in lookup by name or email.
    """
    attendees = await read_model.search_attendees(q)
    return AttendeeListResponse(
        attendees=[AttendeeResponse.from_dto(a) for a in attendees],
        total=len(attendees),
    )
