"""
Top processes by CPU and memory.
"""

from hostscope.sources.base import CommandCandidate, DataSource, Section

PS_FIELDS = "pid,ppid,cmd,%cpu,%mem"
TOP_LINES = 15  # header + 14 processes


def _top(sort_key: str) -> CommandCandidate:
    return CommandCandidate(["ps", "-eo", PS_FIELDS, f"--sort=-{sort_key}"], max_lines=TOP_LINES)


PROCESSES = Section(
    key="processes",
    title="TOP PROCESSES",
    sources=[
        DataSource("processes.cpu", "By CPU", [_top("%cpu")]),
        DataSource("processes.mem", "By MEM", [_top("%mem")]),
    ],
)
