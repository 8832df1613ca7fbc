"""
Time synchronisation and a short list of kernel parameters.
"""

from hostscope.sources.base import CommandCandidate, DataSource, Section

SYSCTL_PREFIXES = r"^(net\.|vm\.|fs\.|kernel\.)"

TIME_SYNC = Section(
    key="timesync",
    title="TIME SYNC",
    sources=[
        DataSource("timesync.status", "Time sync", [
            CommandCandidate(["timedatectl", "status"]),
            CommandCandidate(["chronyc", "tracking"]),
            CommandCandidate(["ntpq", "-p"]),
        ]),
    ],
)

# sysctl -a exits non-zero on unreadable keys while still printing the rest
SYSCTL = Section(
    key="sysctl",
    title="KERNEL PARAMETERS (short)",
    sources=[
        DataSource("sysctl.short", "sysctl", [
            CommandCandidate(
                ["sysctl", "-a"],
                ok_codes=(0, 255),
                line_filter=SYSCTL_PREFIXES,
                max_lines=100,
            ),
        ]),
    ],
)
