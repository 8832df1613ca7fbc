"""
Firewall rulesets. Most of these need root to read anything at all.
"""

from hostscope.sources.base import CommandCandidate, DataSource, ElevationMode, Section

ROOT = ElevationMode.MANDATORY

FIREWALL = Section(
    key="firewall",
    title="FIREWALL",
    sources=[
        DataSource("firewall.ufw", "UFW status", [
            CommandCandidate(["ufw", "status"], elevation=ROOT),
        ]),
        DataSource("firewall.firewalld_state", "firewalld state", [
            CommandCandidate(["firewall-cmd", "--state"], ok_codes=(0, 252)),
        ]),
        DataSource("firewall.firewalld_rules", "firewalld rules", [
            CommandCandidate(["firewall-cmd", "--list-all"], elevation=ElevationMode.OPTIONAL),
        ]),
        DataSource("firewall.iptables", "iptables", [
            CommandCandidate(["iptables", "-S"], elevation=ROOT),
        ]),
        DataSource("firewall.nftables", "nftables", [
            CommandCandidate(["nft", "list", "ruleset"], elevation=ROOT, accept_empty=True),
        ]),
    ],
)
