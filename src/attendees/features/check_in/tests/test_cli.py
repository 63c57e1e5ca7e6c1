"""Tests for the check-in desk command."""

import io
import threading

import pytest
from typer.testing import CliRunner

import cli
from src.attendees.dtos import AttendeeStatus
from src.attendees.tests.inmemory_models import (
    InMemoryAttendeeStore,
    InMemoryCheckInWriteModel,
    create_test_attendee,
)

runner = CliRunner()


@pytest.fixture
def attendee():
    return create_test_attendee(status=AttendeeStatus.ACCEPTED, phone="555-0100", plus_one=True)


@pytest.fixture
def store(attendee, monkeypatch):
    store = InMemoryAttendeeStore([attendee])
    monkeypatch.setattr(cli, "SqlCheckInWriteModel", lambda: InMemoryCheckInWriteModel(store))
    return store


def test_check_in_desk_scan_cycle(store, attendee):
    payload = f"wedding-attendee:{attendee.id}"
    lines = [payload, payload, "", payload, "", "wedding-attendee:nobody"]

    result = runner.invoke(cli.app, ["check-in-desk"], input="\n".join(lines) + "\n")

    assert result.exit_code == 0
    output = result.output.splitlines()
    assert "Ada Lovelace is now checked in" in output
    assert "  Phone: 555-0100" in output
    assert "  Plus One: Yes" in output
    assert "Ignored: press Enter on an empty line to scan the next guest." in output
    assert "Ada Lovelace has already been checked in" in output
    assert output.count("Ready for next guest.") == 2
    assert output[-1] == "Attendee not found"
    assert store.attendees[attendee.id].status == AttendeeStatus.CHECKED_IN


class ThreadRecordingStdin(io.StringIO):
    def __init__(self, text: str):
        super().__init__(text)
        self.reader_threads: list[threading.Thread] = []

    def readline(self, *args):
        self.reader_threads.append(threading.current_thread())
        return super().readline(*args)


def test_check_in_desk_reads_scanner_off_the_event_loop(store, attendee, monkeypatch, capsys):
    stdin = ThreadRecordingStdin(f"{attendee.id}\n")
    monkeypatch.setattr(cli.sys, "stdin", stdin)

    cli.check_in_desk(timeout=1.0)

    assert "Ada Lovelace is now checked in" in capsys.readouterr().out
    assert len(stdin.reader_threads) == 2
    assert all(t is not threading.main_thread() for t in stdin.reader_threads)
