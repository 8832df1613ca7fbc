"""
Container runtimes.
"""

from hostscope.sources.base import CommandCandidate, DataSource, ElevationMode, Section

PS_FORMAT = "table {{.ID}}\t{{.Image}}\t{{.Status}}\t{{.Names}}"

CONTAINERS = Section(
    key="containers",
    title="CONTAINERS",
    sources=[
        DataSource("containers.docker_info", "Docker info", [
            CommandCandidate(["docker", "info"], elevation=ElevationMode.OPTIONAL, max_lines=40, timeout=20),
        ]),
        DataSource("containers.docker_ps", "Docker containers", [
            CommandCandidate(
                ["docker", "ps", "--format", PS_FORMAT],
                elevation=ElevationMode.OPTIONAL,
                accept_empty=True,
                timeout=20,
            ),
        ]),
        DataSource("containers.podman_ps", "Podman containers", [
            CommandCandidate(["podman", "ps", "--format", PS_FORMAT], accept_empty=True, timeout=20),
        ]),
    ],
)
