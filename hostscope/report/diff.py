"""
Compare two reports entry by entry, ignoring timestamps.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from hostscope.core.report import Report, SourceEntry

EntryKey = Tuple[str, str]  # (section title, entry label)


@dataclass
class EntryChange:
    section: str
    label: str
    kind: str  # 'added', 'removed', 'changed'
    diff: List[str] = field(default_factory=list)


def _index(report: Report) -> Dict[EntryKey, SourceEntry]:
    return {
        (section.title, entry.label): entry
        for section in report.sections
        for entry in section.entries
    }


def diff_reports(old: Report, new: Report, context: int = 2) -> List[EntryChange]:
    """
    List entries that differ between two reports.

    Order follows ``new`` for changed and added entries; removed entries
    come last in ``old`` order.
    """
    before = _index(old)
    after = _index(new)
    changes: List[EntryChange] = []

    for key, entry in after.items():
        section, label = key
        previous = before.get(key)
        if previous is None:
            changes.append(EntryChange(section, label, "added"))
            continue
        if (previous.text, previous.status, previous.note) == (entry.text, entry.status, entry.note):
            continue
        lines = list(
            difflib.unified_diff(
                previous.text.splitlines(),
                entry.text.splitlines(),
                fromfile=f"old/{label}",
                tofile=f"new/{label}",
                n=context,
                lineterm="",
            )
        )
        if previous.status != entry.status:
            lines.insert(0, f"status: {previous.status} -> {entry.status}")
        changes.append(EntryChange(section, label, "changed", lines))

    for key in before:
        if key not in after:
            changes.append(EntryChange(key[0], key[1], "removed"))

    return changes
