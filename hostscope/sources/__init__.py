"""
Data sources and the default section plan.
"""

from hostscope.sources.base import (
    Candidate,
    CommandCandidate,
    DataSource,
    ElevationMode,
    FileCandidate,
    FunctionCandidate,
    ProbeContext,
    Section,
)
from hostscope.sources.plan import DEFAULT_PLAN, section_keys, select_sections

__all__ = [
    "Candidate",
    "CommandCandidate",
    "DataSource",
    "ElevationMode",
    "FileCandidate",
    "FunctionCandidate",
    "ProbeContext",
    "Section",
    "DEFAULT_PLAN",
    "section_keys",
    "select_sections",
]
