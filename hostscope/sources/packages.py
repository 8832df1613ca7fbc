"""
Package manager detection and pending updates.

Refreshing the package index (``apt update``) is deliberately absent:
it writes to the host, so the apt view reflects the last refresh.
"""

from hostscope.sources.base import CommandCandidate, DataSource, ElevationMode, FunctionCandidate, Section

PACKAGE_MANAGERS = (
    ("apt", "apt (Debian/Ubuntu)"),
    ("dnf", "dnf (RHEL/CentOS/Fedora)"),
    ("yum", "yum (RHEL/CentOS)"),
    ("zypper", "zypper (SUSE)"),
)


def apt_upgradable(text: str) -> str:
    """Strip 'Listing...' and the '/suite version arch' tail from apt output."""
    names = []
    for line in text.splitlines():
        if not line.strip() or line.startswith("Listing"):
            continue
        names.append(line.split("/", 1)[0])
    return "\n".join(names)


def check_update_names(text: str) -> str:
    """First column of the three-field lines of ``dnf/yum check-update``."""
    names = []
    for line in text.splitlines():
        fields = line.split()
        if len(fields) == 3:
            names.append(fields[0])
    return "\n".join(names)


def _manager_candidate(tool: str, description: str) -> FunctionCandidate:
    return FunctionCandidate(lambda: description, name=f"detect_{tool}", requires=(tool,))


# dnf/yum check-update exit 100 when updates are pending, 0 when none
PACKAGES = Section(
    key="packages",
    title="PACKAGES / UPDATES",
    sources=[
        DataSource("packages.manager", "Package Manager", [
            *(_manager_candidate(tool, description) for tool, description in PACKAGE_MANAGERS),
            FunctionCandidate(lambda: "unknown", name="unknown_manager"),
        ]),
        DataSource("packages.updates", "Pending updates", [
            CommandCandidate(
                ["apt", "-qq", "list", "--upgradable"],
                transform=apt_upgradable,
                accept_empty=True,
                timeout=60,
            ),
            CommandCandidate(
                ["dnf", "-q", "check-update"],
                ok_codes=(0, 100),
                transform=check_update_names,
                accept_empty=True,
                timeout=120,
            ),
            CommandCandidate(
                ["yum", "-q", "check-update"],
                ok_codes=(0, 100),
                transform=check_update_names,
                accept_empty=True,
                timeout=120,
            ),
            CommandCandidate(["zypper", "lu"], elevation=ElevationMode.OPTIONAL, timeout=120),
        ]),
    ],
)
