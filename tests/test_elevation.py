"""Tests for elevation policies."""
from unittest.mock import MagicMock

from hostscope.core.elevation import NoElevation, SudoElevation, build_policy
from conftest import failed_result, ok_result


def _sudo(euid=1000, sudo_path="/usr/bin/sudo", check_ok=True):
    runner = MagicMock()
    runner.return_value = ok_result("sudo -n true", "") if check_ok else failed_result("sudo -n true")
    policy = SudoElevation(
        which=lambda name: sudo_path if name == "sudo" else None,
        geteuid=lambda: euid,
        runner=runner,
    )
    return policy, runner


class TestSudoElevation:
    """Test SudoElevation."""

    def test_available_with_passwordless_sudo(self):
        policy, runner = _sudo()
        assert policy.available() is True
        runner.assert_called_once_with(["sudo", "-n", "true"], timeout=5)

    def test_unavailable_when_sudo_needs_password(self):
        policy, _ = _sudo(check_ok=False)
        assert policy.available() is False

    def test_unavailable_without_sudo(self):
        policy, runner = _sudo(sudo_path=None)
        assert policy.available() is False
        runner.assert_not_called()

    def test_root_is_always_available(self):
        policy, runner = _sudo(euid=0, sudo_path=None)
        assert policy.available() is True
        assert policy.wrap(["iptables", "-S"]) == ["iptables", "-S"]
        runner.assert_not_called()

    def test_available_is_cached(self):
        """The non-interactive check runs once per policy instance."""
        policy, runner = _sudo()
        for _ in range(3):
            policy.available()
        assert runner.call_count == 1

    def test_run_prefixes_sudo_and_marks_elevated(self):
        policy, runner = _sudo()
        runner.return_value = ok_result("nft list ruleset", "table inet filter {}")

        result = policy.run(["nft", "list", "ruleset"], timeout=7)

        args, kwargs = runner.call_args
        assert args[0] == ["sudo", "-n", "--", "nft", "list", "ruleset"]
        assert kwargs["timeout"] == 7
        assert kwargs["label"] == "nft list ruleset"
        assert result.elevated is True


class TestPolicyFactory:
    """Test build_policy."""

    def test_never_mode(self):
        policy = build_policy("never")
        assert isinstance(policy, NoElevation)
        assert policy.available() is False

    def test_auto_mode(self):
        assert isinstance(build_policy("auto"), SudoElevation)
