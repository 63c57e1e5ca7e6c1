from fastapi import APIRouter

from .features.check_in.router import router as check_in_router
from .features.list_attendees.router import router as list_attendees_router
from .features.send_invite.router import router as send_invite_router
from .features.submit_rsvp.router import router as submit_rsvp_router
from .features.update_status.router import router as update_status_router

router = APIRouter()

router.include_router(submit_rsvp_router)
router.include_router(list_attendees_router)
router.include_router(update_status_router)
router.include_router(send_invite_router)
router.include_router(check_in_router)
