import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.attendees.dependencies import json_object_body
from src.attendees.dtos import AttendeeAlreadyExistsError, InvalidInputError, RateLimitedError
from src.attendees.features.submit_rsvp.dtos import (
    AttendeeResponse,
    SubmitRSVPRequest,
    SubmitRSVPResponse,
)
from src.attendees.features.submit_rsvp.rate_limiter import (
    RateLimiter,
    enforce_rate_limit,
    rsvp_rate_limiter,
)
from src.attendees.features.submit_rsvp.validation import validate_rsvp_input
from src.attendees.features.submit_rsvp.write_model import (
    SqlSubmitRSVPWriteModel,
    SubmitRSVPWriteModel,
)
from src.attendees.urls import SUBMIT_RSVP_URL

logger = logging.getLogger(__name__)

router = APIRouter()


def get_submit_rsvp_write_model() -> SubmitRSVPWriteModel:
    """Dependency to get RSVP intake write model instance."""
    return SqlSubmitRSVPWriteModel()


def get_rsvp_rate_limiter() -> RateLimiter:
    """Process-wide limiter shared by all requests."""
    return rsvp_rate_limiter


def get_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else ""


@router.post(SUBMIT_RSVP_URL, response_model=SubmitRSVPResponse)
async def submit_rsvp(
    request: Request,
    body: dict = Depends(json_object_body),
    rate_limiter: RateLimiter = Depends(get_rsvp_rate_limiter),
    write_model: SubmitRSVPWriteModel = Depends(get_submit_rsvp_write_model),
) -> SubmitRSVPResponse:
    """
    Submit an RSVP. The guest starts out pending until an admin reviews it.
    """
    ip_address = get_client_ip(request)

    try:
        enforce_rate_limit(rate_limiter, ip_address)
    except RateLimitedError:
        logger.info(f"Rate limited RSVP submission from {ip_address}")
        raise HTTPException(
            status_code=429, detail="Too many submissions. Please try again later."
        )

    try:
        rsvp_data = SubmitRSVPRequest.model_validate(body)
        name, email, phone, plus_one = validate_rsvp_input(
            rsvp_data.name, rsvp_data.email, rsvp_data.phone, rsvp_data.plus_one
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        attendee = await write_model.submit_rsvp(
            name=name,
            email=email,
            ip_address=ip_address,
            phone=phone,
            plus_one=plus_one,
        )
    except AttendeeAlreadyExistsError:
        raise HTTPException(status_code=409, detail="RSVP already submitted for this email.")
    except Exception:
        logger.exception("[RSVP ERROR]")
        raise HTTPException(status_code=500, detail="An unexpected error occurred.")

    return SubmitRSVPResponse(success=True, data=AttendeeResponse.from_dto(attendee))
