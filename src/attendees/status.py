"""Attendee lifecycle.

pending -> accepted | rejected -> checked_in. Check-in is allowed from any
state except checked_in itself; nothing leaves checked_in.
"""

from src.attendees.dtos import AttendeeStatus, InvalidStatusTransitionError

ALLOWED_TRANSITIONS: dict[AttendeeStatus, frozenset[AttendeeStatus]] = {
    AttendeeStatus.PENDING: frozenset(
        {AttendeeStatus.ACCEPTED, AttendeeStatus.REJECTED, AttendeeStatus.CHECKED_IN}
    ),
    AttendeeStatus.ACCEPTED: frozenset({AttendeeStatus.CHECKED_IN}),
    AttendeeStatus.REJECTED: frozenset({AttendeeStatus.CHECKED_IN}),
    AttendeeStatus.CHECKED_IN: frozenset(),
}

# Statuses an administrator may set from the dashboard
ADMIN_TARGET_STATUSES = frozenset({AttendeeStatus.ACCEPTED, AttendeeStatus.REJECTED})


def can_transition(current: AttendeeStatus, target: AttendeeStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: AttendeeStatus, target: AttendeeStatus) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)
