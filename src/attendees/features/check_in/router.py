import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.attendees.dependencies import require_admin
from src.attendees.dtos import AttendeeNotFoundError, CheckInOutcome
from src.attendees.features.check_in.write_model import (
    CheckInWriteModel,
    SqlCheckInWriteModel,
    check_in_payload,
)
from src.attendees.features.submit_rsvp.dtos import AttendeeResponse
from src.attendees.urls import CHECK_IN_URL

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


class CheckInRequest(BaseModel):
    """Scanned QR text (``wedding-attendee:<id>``) or a bare attendee id."""

    payload: str


class CheckInResponse(BaseModel):
    outcome: CheckInOutcome
    message: str
    attendee: AttendeeResponse


def get_check_in_write_model() -> CheckInWriteModel:
    """Dependency to get check-in write model instance."""
    return SqlCheckInWriteModel()


@router.post(CHECK_IN_URL, response_model=CheckInResponse)
async def check_in(
    check_in_data: CheckInRequest,
    write_model: CheckInWriteModel = Depends(get_check_in_write_model),
) -> CheckInResponse:
    """
    Check an attendee in from the scanner or the manual search list.
    """
    try:
        result = await check_in_payload(write_model, check_in_data.payload)
    except AttendeeNotFoundError:
        logger.info(f"Check-in for unknown payload {check_in_data.payload!r}")
        raise HTTPException(status_code=404, detail="Attendee not found")

    name = result.attendee.name
    if result.outcome == CheckInOutcome.ALREADY_CHECKED_IN:
        message = f"{name} has already been checked in"
    else:
        message = f"{name} is now checked in"
    logger.info(message)

    return CheckInResponse(
        outcome=result.outcome,
        message=message,
        attendee=AttendeeResponse.from_dto(result.attendee),
    )
