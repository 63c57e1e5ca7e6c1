"""CLI commands for wedding RSVP management and the check-in desk."""

import asyncio
import sys
from uuid import UUID

import typer

from src.attendees.dtos import (
    AttendeeNotFoundError,
    AttendeeStatus,
    CheckInOutcome,
    InvalidStatusTransitionError,
    InviteDispatchError,
)
from src.attendees.features.check_in.scan_session import ScanOutcome, ScanSession
from src.attendees.features.check_in.write_model import SqlCheckInWriteModel, check_in_payload
from src.attendees.features.send_invite.reconcile import reconcile_pending_invites
from src.attendees.features.send_invite.router import get_invite_dispatcher
from src.attendees.features.update_status.write_model import SqlUpdateStatusWriteModel
from src.attendees.repository.read_models import SqlAttendeeReadModel
from src.attendees.status import ADMIN_TARGET_STATUSES
from src.config.logging import setup_logging
from src.config.settings import settings

app = typer.Typer(help="CLI commands for wedding RSVP management")

OUTCOME_COLORS = {
    ScanOutcome.SUCCESS: typer.colors.GREEN,
    ScanOutcome.ALREADY_CHECKED_IN: typer.colors.YELLOW,
    ScanOutcome.NOT_FOUND: typer.colors.RED,
    ScanOutcome.TIMEOUT: typer.colors.RED,
}


@app.callback()
def main():
    setup_logging()


@app.command()
def list_attendees(
    status: AttendeeStatus = typer.Option(
        None,
        "--status",
        "-s",
        help="Only show attendees with this status",
    ),
):
    """List attendees, newest RSVP first."""
    attendees = asyncio.run(SqlAttendeeReadModel().list_attendees(status=status))

    if not attendees:
        typer.secho("No RSVPs yet.", fg=typer.colors.YELLOW)
        return

    for attendee in attendees:
        typer.secho(f"{attendee.name} <{attendee.email}>", fg=typer.colors.BLUE)
        typer.secho(f"  ID: {attendee.id}", fg=typer.colors.CYAN)
        typer.echo(f"  Status: {attendee.status.value}")
        typer.echo(f"  Phone: {attendee.phone or 'N/A'}")
        typer.echo(f"  Plus one: {'Yes' if attendee.plus_one else 'No'}")
        if attendee.invite_pending:
            typer.secho("  Invite pending", fg=typer.colors.MAGENTA)
    typer.echo()
    typer.secho(f"Total: {len(attendees)}", fg=typer.colors.GREEN)


@app.command()
def set_status(
    attendee_id: str = typer.Argument(..., help="Attendee UUID"),
    status: AttendeeStatus = typer.Argument(..., help="accepted or rejected"),
    send_invite: bool = typer.Option(
        True,
        "--send-invite/--no-send-invite",
        help="Email the QR invite right away when accepting",
    ),
):
    """Accept or reject an RSVP."""
    if status not in ADMIN_TARGET_STATUSES:
        typer.secho("Status must be 'accepted' or 'rejected'", fg=typer.colors.RED)
        raise typer.Exit(1)

    async def _set_status():
        attendee = await SqlUpdateStatusWriteModel().set_status(UUID(attendee_id), status)
        if attendee.status == AttendeeStatus.ACCEPTED and send_invite:
            await get_invite_dispatcher().dispatch_attendee(attendee)
        return attendee

    try:
        attendee = asyncio.run(_set_status())
    except (AttendeeNotFoundError, InvalidStatusTransitionError, ValueError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)
    except InviteDispatchError as e:
        typer.secho(f"Status saved, but the invite failed at {e.stage}: {e.message}", fg=typer.colors.RED)
        typer.secho("Run reconcile-invites to retry.", fg=typer.colors.YELLOW)
        raise typer.Exit(1)

    typer.secho(f"{attendee.name} is now {attendee.status.value}", fg=typer.colors.GREEN)


@app.command()
def send_invite(
    attendee_id: str = typer.Argument(..., help="Attendee UUID"),
):
    """Generate the QR code for an attendee and email it."""

    async def _send_invite():
        attendee = await SqlAttendeeReadModel().get_attendee(UUID(attendee_id))
        if attendee is None:
            raise AttendeeNotFoundError(attendee_id)
        return await get_invite_dispatcher().dispatch_attendee(attendee)

    try:
        result = asyncio.run(_send_invite())
    except (AttendeeNotFoundError, ValueError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)
    except InviteDispatchError as e:
        typer.secho(f"Invite failed at {e.stage}: {e.message}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"Invite sent to {result.sent_email}", fg=typer.colors.GREEN)
    typer.secho(f"  QR code: {result.qr_code_url}", fg=typer.colors.CYAN)


@app.command()
def reconcile_invites():
    """Retry QR invites for accepted attendees who never received one."""
    results = asyncio.run(
        reconcile_pending_invites(SqlAttendeeReadModel(), get_invite_dispatcher())
    )

    if not results:
        typer.secho("No pending invites.", fg=typer.colors.GREEN)
        return

    for result in results:
        if result.success:
            typer.secho(f"  sent: {result.email}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"  failed: {result.email} ({result.stage}: {result.error})", fg=typer.colors.RED)

    if any(not r.success for r in results):
        raise typer.Exit(1)


@app.command()
def check_in(
    payload: str = typer.Argument(..., help="Scanned QR text or attendee UUID"),
):
    """Check in a single attendee."""
    try:
        result = asyncio.run(check_in_payload(SqlCheckInWriteModel(), payload))
    except AttendeeNotFoundError:
        typer.secho("Attendee not found", fg=typer.colors.RED)
        raise typer.Exit(1)

    attendee = result.attendee
    if result.outcome == CheckInOutcome.ALREADY_CHECKED_IN:
        typer.secho(f"{attendee.name} has already been checked in", fg=typer.colors.YELLOW)
    else:
        typer.secho(f"{attendee.name} is now checked in", fg=typer.colors.GREEN)


@app.command()
def check_in_desk(
    timeout: float = typer.Option(
        settings.checkin_scan_timeout_seconds,
        "--timeout",
        "-t",
        help="Seconds to wait for a check-in before giving up",
    ),
):
    """Run a check-in desk fed by a handheld scanner.

    Each line on stdin is one scan. An empty line is "Scan Next".
    """
    write_model = SqlCheckInWriteModel()

    async def _resolve(payload: str):
        return await check_in_payload(write_model, payload)

    async def _run_desk():
        session = ScanSession(resolver=_resolve, timeout_seconds=timeout)
        typer.secho("Ready to scan. Empty line for next guest, Ctrl+D to stop.", fg=typer.colors.BLUE)

        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            payload = line.strip()
            if not payload:
                session.reset()
                typer.secho("Ready for next guest.", fg=typer.colors.BLUE)
                continue

            result = await session.on_decode(payload)
            if result is None:
                typer.secho("Ignored: press Enter on an empty line to scan the next guest.", fg=typer.colors.YELLOW)
                continue

            typer.secho(result.message, fg=OUTCOME_COLORS[result.outcome])
            if result.attendee:
                typer.echo(f"  Email: {result.attendee.email}")
                typer.echo(f"  Phone: {result.attendee.phone or 'N/A'}")
                typer.echo(f"  Plus One: {'Yes' if result.attendee.plus_one else 'No'}")

    asyncio.run(_run_desk())


if __name__ == "__main__":
    app()
