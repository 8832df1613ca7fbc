"""
Report models: the ordered, immutable output of a collection run.
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from hostscope.core.detector import Capability, SystemInfo

UNAVAILABLE = "unavailable"


class SourceEntry(BaseModel):
    """One labelled text block in a section."""

    model_config = ConfigDict(frozen=True)

    label: str
    text: str
    status: str  # 'ok', 'empty', 'unavailable'
    source: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def unavailable(cls, label: str, note: Optional[str] = None) -> "SourceEntry":
        return cls(label=label, text=UNAVAILABLE, status="unavailable", note=note)

    @property
    def available(self) -> bool:
        return self.status != "unavailable"


class SectionResult(BaseModel):
    """Entries of one section, in declared order."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    entries: Tuple[SourceEntry, ...] = ()

    @property
    def available_count(self) -> int:
        return sum(1 for e in self.entries if e.available)


class Report(BaseModel):
    """A complete host snapshot."""

    model_config = ConfigDict(frozen=True)

    generated_at_start: datetime
    generated_at_end: datetime
    host: SystemInfo
    elevated: bool = False
    truncated: bool = False
    capabilities: Tuple[Capability, ...] = ()
    sections: Tuple[SectionResult, ...] = ()

    def section(self, title_or_key: str) -> Optional[SectionResult]:
        for result in self.sections:
            if title_or_key in (result.title, result.key):
                return result
        return None

    def content(self) -> list:
        """Report content without timestamps, for comparing snapshots."""
        return [s.model_dump(mode="json") for s in self.sections]
