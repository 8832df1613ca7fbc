"""
The default section plan and section selection.
"""

from typing import List, Optional, Sequence

from hostscope.sources.base import Section
from hostscope.sources.containers import CONTAINERS
from hostscope.sources.firewall import FIREWALL
from hostscope.sources.kernel import SYSCTL, TIME_SYNC
from hostscope.sources.network import ADDRESSES, DNS, LISTENING_PORTS, ROUTING
from hostscope.sources.packages import PACKAGES
from hostscope.sources.processes import PROCESSES
from hostscope.sources.services import CRON, SERVICES, TIMERS, USERS
from hostscope.sources.storage import BLOCK_DEVICES, FILESYSTEMS, RAID_LVM
from hostscope.sources.system import CPU, MEMORY, OS_KERNEL, PROFILE

DEFAULT_PLAN: List[Section] = [
    PROFILE,
    OS_KERNEL,
    CPU,
    MEMORY,
    BLOCK_DEVICES,
    FILESYSTEMS,
    RAID_LVM,
    ADDRESSES,
    ROUTING,
    DNS,
    LISTENING_PORTS,
    USERS,
    SERVICES,
    TIMERS,
    PACKAGES,
    FIREWALL,
    PROCESSES,
    CRON,
    CONTAINERS,
    TIME_SYNC,
    SYSCTL,
]


def section_keys(plan: Sequence[Section] = DEFAULT_PLAN) -> List[str]:
    return [section.key for section in plan]


def select_sections(
    only: Optional[Sequence[str]] = None,
    skip: Optional[Sequence[str]] = None,
    plan: Sequence[Section] = DEFAULT_PLAN,
) -> List[Section]:
    """
    Filter the plan by section key, keeping plan order.

    A key selects itself and any dotted sub-keys, so ``storage`` matches
    ``storage.block`` and ``storage.fs``.

    Raises:
        ValueError: if a key matches no section
    """
    def matches(section: Section, key: str) -> bool:
        return section.key == key or section.key.startswith(key + ".")

    for key in [*(only or []), *(skip or [])]:
        if not any(matches(section, key) for section in plan):
            raise ValueError(f"Unknown section: {key}")

    selected = []
    for section in plan:
        if only and not any(matches(section, key) for key in only):
            continue
        if skip and any(matches(section, key) for key in skip):
            continue
        selected.append(section)
    return selected
