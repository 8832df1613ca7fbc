"""Shared fixtures and test doubles."""
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest
from loguru import logger

from hostscope.core.detector import CapabilityProbe, SystemInfo
from hostscope.core.executor import ExecutionResult
from hostscope.core.report import Report, SectionResult, SourceEntry


def ok_result(command: str, stdout: str, elevated: bool = False) -> ExecutionResult:
    return ExecutionResult(
        command=command,
        return_code=0,
        stdout=stdout,
        stderr="",
        duration=0.01,
        success=True,
        reason="ok",
        elevated=elevated,
    )


def failed_result(command: str, reason: str = "exit_status") -> ExecutionResult:
    return ExecutionResult(
        command=command,
        return_code=1,
        stdout="",
        stderr="Permission denied",
        duration=0.01,
        success=False,
        reason=reason,
    )


class FakeExecutor:
    """
    Executor double keyed by the joined command line.

    A response may be a string (success with that stdout), an
    ExecutionResult, or a callable returning either. Unknown commands fail.
    """

    def __init__(self, responses=None, elevate_ok=False, delays=None):
        self.responses = dict(responses or {})
        self.elevate_ok = elevate_ok
        self.delays = dict(delays or {})
        self.calls = []
        self._lock = threading.Lock()

    def can_elevate(self) -> bool:
        return self.elevate_ok

    def run(self, command, timeout=30, elevate=False, ok_codes=(0,)):
        cmd = " ".join(command)
        with self._lock:
            self.calls.append((cmd, elevate))
        if cmd in self.delays:
            time.sleep(self.delays[cmd])
        response = self.responses.get(cmd)
        if callable(response):
            response = response()
        if response is None:
            return failed_result(cmd)
        if isinstance(response, str):
            return ok_result(cmd, response, elevated=elevate and self.elevate_ok)
        return response

    def commands(self):
        return [cmd for cmd, _ in self.calls]


def make_probe(tools=(), files=()) -> CapabilityProbe:
    """CapabilityProbe seeing exactly the given tools and files."""
    tools = set(tools)
    files = set(files)
    return CapabilityProbe(
        which=lambda name: f"/usr/bin/{name}" if name in tools else None,
        can_read=lambda path: path in files,
    )


def make_report(sections=None, truncated=False, started=None) -> Report:
    started = started or datetime(2026, 10, 19, 10, 15, 0, tzinfo=timezone.utc)
    if sections is None:
        sections = [
            SectionResult(
                key="profile",
                title="SERVER PROFILE",
                entries=(
                    SourceEntry(label="Hostname", text="web01", status="ok", source="hostname"),
                    SourceEntry.unavailable("FQDN"),
                ),
            ),
            SectionResult(
                key="network.ports",
                title="NETWORK: Listening Ports",
                entries=(
                    SourceEntry(
                        label="Listening Ports",
                        text="Netid State\ntcp LISTEN 0.0.0.0:22",
                        status="ok",
                        source="ss -tulpen",
                        note="permission-limited",
                    ),
                ),
            ),
            SectionResult(
                key="users",
                title="USERS & SESSIONS",
                entries=(SourceEntry(label="Logged in", text="", status="empty", source="who"),),
            ),
        ]
    return Report(
        generated_at_start=started,
        generated_at_end=started + timedelta(seconds=4),
        host=SystemInfo(
            os_type="Linux",
            platform="Linux-6.1-x86_64",
            python_version="3.11.0",
            hostname="web01",
        ),
        elevated=False,
        truncated=truncated,
        sections=tuple(sections),
    )


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop sinks added by setup_logging so they do not outlive a test."""
    yield
    logger.remove()


@pytest.fixture
def sample_report():
    return make_report()
