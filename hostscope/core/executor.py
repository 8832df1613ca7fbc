"""
Command execution engine.
"""

import subprocess
import time
from typing import List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict

DEFAULT_TIMEOUT = 30.0


class ExecutionResult(BaseModel):
    """Result of a single command invocation."""

    model_config = ConfigDict(frozen=True)

    command: str
    return_code: int
    stdout: str
    stderr: str
    duration: float
    success: bool
    reason: str  # 'ok', 'exit_status', 'timeout', 'tool_missing', 'deadline', 'error'
    elevated: bool = False

    @classmethod
    def failed(cls, command: str, reason: str, message: str, duration: float = 0.0) -> "ExecutionResult":
        return cls(
            command=command,
            return_code=-1,
            stdout="",
            stderr=message,
            duration=duration,
            success=False,
            reason=reason,
        )


def run_process(
    command: Sequence[str],
    timeout: float = DEFAULT_TIMEOUT,
    ok_codes: Sequence[int] = (0,),
    label: Optional[str] = None,
) -> ExecutionResult:
    """
    Run a command without a shell and capture its output.

    Args:
        command: Command and arguments as a list
        timeout: Timeout in seconds
        ok_codes: Exit codes that count as success
        label: Command string to report instead of the joined argv

    Returns:
        ExecutionResult; never raises
    """
    cmd_str = label or " ".join(command)
    start_time = time.time()

    if timeout <= 0:
        return ExecutionResult.failed(cmd_str, "deadline", "Run deadline reached before start")

    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            errors="replace",
            stdin=subprocess.DEVNULL,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        duration = time.time() - start_time
        logger.debug(f"Command timed out after {timeout:.1f}s: {cmd_str}")
        return ExecutionResult.failed(
            cmd_str, "timeout", f"Command timed out after {timeout:.1f} seconds", duration
        )
    except FileNotFoundError as e:
        logger.debug(f"Command not found: {cmd_str}")
        return ExecutionResult.failed(cmd_str, "tool_missing", str(e), time.time() - start_time)
    except Exception as e:
        logger.debug(f"Command failed to start: {cmd_str} - {e}")
        return ExecutionResult.failed(cmd_str, "error", str(e), time.time() - start_time)

    duration = time.time() - start_time
    success = result.returncode in ok_codes
    logger.debug(
        f"Command completed: {cmd_str} "
        f"(return code: {result.returncode}, duration: {duration:.2f}s)"
    )
    return ExecutionResult(
        command=cmd_str,
        return_code=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        duration=duration,
        success=success,
        reason="ok" if success else "exit_status",
    )


class Executor:
    """Execute probe commands, optionally through an elevation policy."""

    def __init__(self, elevation=None, app_logger=logger):
        """
        Args:
            elevation: ElevationPolicy; None means elevation is never used
            app_logger: loguru logger
        """
        self.elevation = elevation
        self.logger = app_logger

    def can_elevate(self) -> bool:
        return self.elevation is not None and self.elevation.available()

    def run(
        self,
        command: List[str],
        timeout: float = DEFAULT_TIMEOUT,
        elevate: bool = False,
        ok_codes: Sequence[int] = (0,),
    ) -> ExecutionResult:
        """
        Execute a probe command.

        When elevation is requested but not usable the command runs
        unprivileged; the caller sees ``elevated=False`` on the result.
        """
        if elevate:
            if self.can_elevate():
                return self.elevation.run(command, timeout=timeout, ok_codes=ok_codes)
            self.logger.debug(f"Elevation unavailable, running unprivileged: {' '.join(command)}")
        return run_process(command, timeout=timeout, ok_codes=ok_codes)
