import logging

from src.attendees.dtos import InviteDispatchError, ReconcileResultDTO
from src.attendees.features.send_invite.dispatcher import InviteDispatcher
from src.attendees.repository.read_models import AttendeeReadModel

logger = logging.getLogger(__name__)


async def reconcile_pending_invites(
    read_model: AttendeeReadModel,
    dispatcher: InviteDispatcher,
) -> list[ReconcileResultDTO]:
    """Retry invite dispatch for every accepted attendee still waiting on one."""
    results = []
    for attendee in await read_model.list_pending_invites():
        try:
            await dispatcher.dispatch_attendee(attendee)
        except InviteDispatchError as e:
            results.append(
                ReconcileResultDTO(
                    attendee_id=attendee.id,
                    email=attendee.email,
                    success=False,
                    stage=e.stage,
                    error=e.message,
                )
            )
        else:
            results.append(
                ReconcileResultDTO(attendee_id=attendee.id, email=attendee.email, success=True)
            )

    failed = sum(1 for r in results if not r.success)
    logger.info(f"Reconciled {len(results)} pending invites, {failed} failed")
    return results
