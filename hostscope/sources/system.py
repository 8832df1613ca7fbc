"""
Host identity, OS/kernel, CPU and memory sections.
"""

import os
import platform
import socket
from typing import Optional

from hostscope.sources.base import CommandCandidate, DataSource, FileCandidate, FunctionCandidate, Section


def format_uptime(seconds: float) -> str:
    """Render seconds the way ``uptime -p`` does: 'up 2 days, 3 hours, 4 minutes'."""
    minutes_total = int(seconds // 60)
    parts = []
    for name, size in (("week", 7 * 24 * 60), ("day", 24 * 60), ("hour", 60), ("minute", 1)):
        count, minutes_total = divmod(minutes_total, size)
        if count:
            parts.append(f"{count} {name}{'s' if count != 1 else ''}")
    return "up " + (", ".join(parts) if parts else "0 minutes")


def read_proc_uptime(path: str = "/proc/uptime") -> Optional[str]:
    with open(path, "r", encoding="utf-8") as f:
        fields = f.read().split()
    return format_uptime(float(fields[0])) if fields else None


def first_fields(count: int):
    """Transform keeping the first ``count`` whitespace-separated fields."""
    def _transform(text: str) -> str:
        return " ".join(text.split()[:count])
    return _transform


def load_average() -> str:
    return " ".join(f"{value:.2f}" for value in os.getloadavg())


def kernel_summary() -> str:
    u = platform.uname()
    return f"{u.system} {u.node} {u.release} {u.version} {u.machine}"


PROFILE = Section(
    key="profile",
    title="SERVER PROFILE",
    sources=[
        DataSource("profile.hostname", "Hostname", [
            CommandCandidate(["hostname"]),
            FunctionCandidate(socket.gethostname, name="socket.gethostname"),
        ]),
        DataSource("profile.fqdn", "FQDN", [
            CommandCandidate(["hostname", "-f"]),
            FunctionCandidate(socket.getfqdn, name="socket.getfqdn"),
        ]),
        DataSource("profile.uptime", "Uptime", [
            CommandCandidate(["uptime", "-p"]),
            FunctionCandidate(read_proc_uptime, name="read_proc_uptime"),
        ]),
        DataSource("profile.load", "Load (1/5/15)", [
            FileCandidate("/proc/loadavg", transform=first_fields(3)),
            FunctionCandidate(load_average, name="os.getloadavg"),
        ]),
    ],
)

OS_KERNEL = Section(
    key="os",
    title="OS / KERNEL",
    sources=[
        DataSource("os.hostnamectl", "hostnamectl", [
            CommandCandidate(["hostnamectl"]),
        ]),
        DataSource("os.release", "OS release", [
            FileCandidate("/etc/os-release"),
            FileCandidate("/usr/lib/os-release"),
        ]),
        DataSource("os.kernel", "Kernel", [
            CommandCandidate(["uname", "-a"]),
            FunctionCandidate(kernel_summary, name="platform.uname"),
        ]),
        # systemd-detect-virt prints "none" and exits 1 on bare metal
        DataSource("os.virtualization", "Virtualization", [
            CommandCandidate(["systemd-detect-virt"], ok_codes=(0, 1)),
        ]),
        DataSource("os.cgroup", "Container cgroup", [
            FileCandidate("/proc/1/cgroup", max_lines=1),
        ]),
    ],
)

CPU = Section(
    key="cpu",
    title="CPU",
    sources=[
        DataSource("cpu.info", "CPU", [
            CommandCandidate(["lscpu"]),
            FileCandidate("/proc/cpuinfo", line_filter=r"^model name", max_lines=1),
        ]),
    ],
)

MEMORY = Section(
    key="memory",
    title="MEMORY",
    sources=[
        DataSource("memory.free", "free", [
            CommandCandidate(["free", "-h"]),
        ]),
        DataSource("memory.meminfo", "/proc/meminfo", [
            FileCandidate("/proc/meminfo", max_lines=5),
        ]),
    ],
)
