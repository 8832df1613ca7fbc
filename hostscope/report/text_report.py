"""
Plain-text renderer: the classic aligned server-profile layout.
"""

from __future__ import annotations

from typing import List

from hostscope.core.report import Report, SourceEntry

DIVIDER = "=" * 68
KEY_WIDTH = 22


def kv(key: str, value: str) -> str:
    return f"{key:<{KEY_WIDTH}} {value}"


def entry_value(entry: SourceEntry) -> str:
    return entry.text if entry.status != "empty" else "(none)"


def _section(lines: List[str], title: str) -> None:
    lines.append("")
    lines.append(DIVIDER)
    lines.append(f"## {title}")


def _entry(lines: List[str], entry: SourceEntry) -> None:
    value = entry_value(entry)
    note = f" ({entry.note})" if entry.note else ""
    if "\n" not in value:
        lines.append(kv(entry.label, value + note))
        return
    lines.append(f"--- {entry.label}{note}")
    lines.append(value)


def render_text(report: Report) -> str:
    """Render a report as aligned plain text."""
    lines: List[str] = []
    _section(lines, "HOSTSCOPE REPORT")
    lines.append(kv("Generated at", report.generated_at_start.isoformat(timespec="seconds")))
    lines.append(kv("Host", report.host.hostname))
    lines.append(kv("Platform", report.host.platform))
    lines.append(kv("Elevated", "yes" if report.elevated else "no"))

    for section in report.sections:
        _section(lines, section.title)
        for entry in section.entries:
            _entry(lines, entry)

    _section(lines, "DONE")
    lines.append(kv("Completed at", report.generated_at_end.isoformat(timespec="seconds")))
    if report.truncated:
        lines.append(kv("Truncated", "yes (run deadline exceeded)"))
    lines.append(DIVIDER)
    return "\n".join(lines) + "\n"
