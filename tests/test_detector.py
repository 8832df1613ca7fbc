"""Tests for host detection and the capability probe."""
from unittest.mock import MagicMock

from hostscope.core.detector import Capability, CapabilityProbe, SystemDetector, SystemInfo


class TestCapabilityProbe:
    """Test CapabilityProbe."""

    def test_present_and_absent_tools(self):
        probe = CapabilityProbe(which=lambda name: "/usr/sbin/ss" if name == "ss" else None)
        assert probe.has("ss") is True
        assert probe.has("netstat") is False

    def test_lookup_is_memoized(self):
        """Each tool is looked up on PATH once per probe."""
        which = MagicMock(return_value="/usr/bin/lsblk")
        probe = CapabilityProbe(which=which)
        for _ in range(5):
            probe.has("lsblk")
        which.assert_called_once_with("lsblk")

    def test_lookup_error_means_absent(self):
        def broken_which(name):
            raise OSError("PATH unreadable")

        probe = CapabilityProbe(which=broken_which)
        assert probe.has("ip") is False

    def test_check_returns_immutable_record(self):
        probe = CapabilityProbe(which=lambda name: None)
        capability = probe.check("docker")
        assert capability == Capability(name="docker", present=False)
        assert probe.check("docker") is capability

    def test_capabilities_sorted_by_name(self):
        probe = CapabilityProbe(which=lambda name: "/bin/" + name if name != "podman" else None)
        probe.has("ss")
        probe.has("podman")
        probe.has("docker")
        assert [c.name for c in probe.capabilities()] == ["docker", "podman", "ss"]
        assert [c.present for c in probe.capabilities()] == [True, False, True]

    def test_readable_files(self, tmp_path):
        existing = tmp_path / "os-release"
        existing.write_text('NAME="Debian GNU/Linux"\n')
        probe = CapabilityProbe()
        assert probe.readable(str(existing)) is True
        assert probe.readable(str(tmp_path / "missing")) is False


def test_detect_system():
    info = SystemDetector().detect_system()
    assert isinstance(info, SystemInfo)
    assert info.hostname
    assert info.python_version.count(".") >= 1
