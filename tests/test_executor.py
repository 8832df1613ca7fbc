"""Tests for the command executor (with mocked subprocess)."""
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from hostscope.core.executor import ExecutionResult, Executor, run_process
from conftest import ok_result


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def executor(mock_logger):
    return Executor(None, mock_logger)


def test_run_command_success(executor):
    """run returns ExecutionResult with success=True when process returns 0."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(
            returncode=0,
            stdout="Linux web01 6.1.0",
            stderr="",
        )
        result = executor.run(["uname", "-a"])
    assert isinstance(result, ExecutionResult)
    assert result.success is True
    assert result.return_code == 0
    assert result.reason == "ok"
    assert result.command == "uname -a"
    assert result.stdout == "Linux web01 6.1.0"
    assert result.elevated is False


def test_run_command_failure(executor):
    """run returns success=False when process returns non-zero."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(
            returncode=1,
            stdout="",
            stderr="iptables: Permission denied",
        )
        result = executor.run(["iptables", "-S"])
    assert result.success is False
    assert result.return_code == 1
    assert result.reason == "exit_status"
    assert "Permission denied" in result.stderr


def test_run_command_extra_ok_codes():
    """Exit codes listed in ok_codes count as success."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(returncode=100, stdout="bash.x86_64 5.2 updates", stderr="")
        result = run_process(["dnf", "-q", "check-update"], ok_codes=(0, 100))
    assert result.success is True
    assert result.return_code == 100


def test_run_command_timeout(executor):
    """A timeout is a failed result with reason 'timeout', not an exception."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.side_effect = subprocess.TimeoutExpired(cmd=["resolvectl", "status"], timeout=1)
        result = executor.run(["resolvectl", "status"], timeout=1)
    assert result.success is False
    assert result.reason == "timeout"
    assert "timed out" in result.stderr


def test_run_command_tool_missing(executor):
    """A missing binary is reported as 'tool_missing'."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.side_effect = FileNotFoundError(2, "No such file or directory", "lsblk")
        result = executor.run(["lsblk"])
    assert result.success is False
    assert result.reason == "tool_missing"


def test_run_command_other_error(executor):
    """Unexpected OS errors are captured as reason 'error'."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.side_effect = PermissionError(13, "Permission denied")
        result = executor.run(["ss", "-tuln"])
    assert result.success is False
    assert result.reason == "error"


def test_run_with_no_time_left_does_not_start():
    """A non-positive timeout means the run deadline already passed."""
    with patch("hostscope.core.executor.subprocess.run") as m_run:
        result = run_process(["lscpu"], timeout=0)
    m_run.assert_not_called()
    assert result.reason == "deadline"


def test_elevated_run_goes_through_policy(mock_logger):
    """When the policy is available the command is run by the policy."""
    policy = MagicMock()
    policy.available.return_value = True
    policy.run.return_value = ok_result("ss -tulpen", "users:((sshd,pid=1))", elevated=True)
    executor = Executor(policy, mock_logger)

    with patch("hostscope.core.executor.subprocess.run") as m_run:
        result = executor.run(["ss", "-tulpen"], timeout=5, elevate=True)

    m_run.assert_not_called()
    policy.run.assert_called_once_with(["ss", "-tulpen"], timeout=5, ok_codes=(0,))
    assert result.elevated is True


def test_elevation_unavailable_downgrades_silently(mock_logger):
    """Without usable elevation the command runs unprivileged and still succeeds."""
    policy = MagicMock()
    policy.available.return_value = False
    executor = Executor(policy, mock_logger)

    with patch("hostscope.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(returncode=0, stdout="tcp LISTEN 0.0.0.0:22", stderr="")
        result = executor.run(["ss", "-tulpen"], elevate=True)

    policy.run.assert_not_called()
    assert m_run.call_args[0][0] == ["ss", "-tulpen"]
    assert result.success is True
    assert result.elevated is False


def test_can_elevate_without_policy(executor):
    assert executor.can_elevate() is False
