"""Continuous-scan state for a check-in desk.

Idle --decode--> Resolving --result--> Resolved --reset--> Idle

The payload is captured before the lookup is awaited, and every decode event
that arrives while Resolving or Resolved is ignored, so a code held in front
of the camera is handled once. A lookup that takes longer than the timeout
puts the session back to Idle.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from src.attendees.dtos import (
    AttendeeDTO,
    AttendeeNotFoundError,
    CheckInOutcome,
    CheckInResultDTO,
)


class ScanState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class ScanOutcome(str, Enum):
    SUCCESS = "success"
    ALREADY_CHECKED_IN = "already_checked_in"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class ScanResult:
    payload: str
    outcome: ScanOutcome
    message: str
    attendee: AttendeeDTO | None = None


CheckInResolver = Callable[[str], Awaitable[CheckInResultDTO]]


class ScanSession:
    def __init__(self, resolver: CheckInResolver, timeout_seconds: float | None = 10.0) -> None:
        self._resolver = resolver
        self.timeout_seconds = timeout_seconds
        self.state = ScanState.IDLE
        self.captured_payload: str | None = None
        self.last_result: ScanResult | None = None

    async def on_decode(self, payload: str) -> ScanResult | None:
        """Handle one decoded frame. Returns None when the event is ignored."""
        if self.state != ScanState.IDLE:
            return None

        self.captured_payload = payload
        self.state = ScanState.RESOLVING

        try:
            result = await asyncio.wait_for(self._resolver(payload), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            self.reset()
            return ScanResult(
                payload=payload,
                outcome=ScanOutcome.TIMEOUT,
                message="Check-in timed out. Please scan again.",
            )
        except AttendeeNotFoundError:
            scan_result = ScanResult(
                payload=payload,
                outcome=ScanOutcome.NOT_FOUND,
                message="Attendee not found",
            )
        except BaseException:
            self.reset()
            raise
        else:
            scan_result = self._to_scan_result(payload, result)

        self.state = ScanState.RESOLVED
        self.last_result = scan_result
        return scan_result

    def reset(self) -> None:
        """The "Scan Next" action."""
        self.state = ScanState.IDLE
        self.captured_payload = None
        self.last_result = None

    @staticmethod
    def _to_scan_result(payload: str, result: CheckInResultDTO) -> ScanResult:
        name = result.attendee.name
        if result.outcome == CheckInOutcome.ALREADY_CHECKED_IN:
            return ScanResult(
                payload=payload,
                outcome=ScanOutcome.ALREADY_CHECKED_IN,
                message=f"{name} has already been checked in",
                attendee=result.attendee,
            )
        return ScanResult(
            payload=payload,
            outcome=ScanOutcome.SUCCESS,
            message=f"{name} is now checked in",
            attendee=result.attendee,
        )
