"""
Block device, filesystem and RAID/LVM sections.
"""

from hostscope.sources.base import CommandCandidate, DataSource, ElevationMode, FileCandidate, Section

OPTIONAL = ElevationMode.OPTIONAL

BLOCK_DEVICES = Section(
    key="storage.block",
    title="STORAGE: Block Devices",
    sources=[
        DataSource("storage.lsblk", "Block devices", [
            CommandCandidate(["lsblk", "-o", "NAME,SIZE,TYPE,MOUNTPOINT,FSTYPE,MODEL,UUID"]),
            FileCandidate("/proc/partitions"),
        ]),
    ],
)

FILESYSTEMS = Section(
    key="storage.fs",
    title="STORAGE: Filesystems",
    sources=[
        DataSource("storage.df", "Filesystems", [
            CommandCandidate(["df", "-hT"]),
            FileCandidate("/proc/mounts"),
        ]),
    ],
)

RAID_LVM = Section(
    key="storage.raid",
    title="STORAGE: RAID/LVM (if any)",
    sources=[
        DataSource("storage.mdadm", "mdadm", [
            CommandCandidate(["mdadm", "--detail", "--scan"], elevation=OPTIONAL, accept_empty=True),
            FileCandidate("/proc/mdstat"),
        ]),
        DataSource("storage.pvs", "Physical volumes", [
            CommandCandidate(["pvs"], elevation=OPTIONAL, accept_empty=True),
        ]),
        DataSource("storage.vgs", "Volume groups", [
            CommandCandidate(["vgs"], elevation=OPTIONAL, accept_empty=True),
        ]),
        DataSource("storage.lvs", "Logical volumes", [
            CommandCandidate(["lvs"], elevation=OPTIONAL, accept_empty=True),
        ]),
    ],
)
