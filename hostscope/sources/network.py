"""
Network sections: addresses, routing, DNS and listening sockets.
"""

from hostscope.sources.base import CommandCandidate, DataSource, ElevationMode, FileCandidate, Section

ADDRESSES = Section(
    key="network.addresses",
    title="NETWORK: Addresses",
    sources=[
        DataSource("network.addresses", "Addresses", [
            CommandCandidate(["ip", "-br", "a"]),
            CommandCandidate(["ifconfig", "-a"]),
        ]),
    ],
)

ROUTING = Section(
    key="network.routing",
    title="NETWORK: Routing",
    sources=[
        DataSource("network.routes", "Routes", [
            CommandCandidate(["ip", "route"]),
            CommandCandidate(["route", "-n"]),
            FileCandidate("/proc/net/route"),
        ]),
    ],
)

DNS = Section(
    key="network.dns",
    title="NETWORK: DNS",
    sources=[
        DataSource("network.resolvectl", "resolvectl", [
            CommandCandidate(["resolvectl", "status"], timeout=10),
        ]),
        DataSource("network.resolv_conf", "/etc/resolv.conf", [
            FileCandidate("/etc/resolv.conf"),
        ]),
    ],
)

# The privileged view adds owning processes; the plain view still lists sockets.
LISTENING_PORTS = Section(
    key="network.ports",
    title="NETWORK: Listening Ports",
    sources=[
        DataSource("network.ports", "Listening Ports", [
            CommandCandidate(["ss", "-tulpen"], elevation=ElevationMode.OPTIONAL),
            CommandCandidate(["ss", "-tuln"]),
            CommandCandidate(["netstat", "-tulpen"], elevation=ElevationMode.OPTIONAL),
            CommandCandidate(["netstat", "-tuln"]),
        ]),
    ],
)
