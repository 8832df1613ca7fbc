"""
Core functionality components.
"""

from hostscope.core.collector import Collector
from hostscope.core.config import AppConfig
from hostscope.core.detector import Capability, CapabilityProbe, SystemDetector, SystemInfo
from hostscope.core.elevation import ElevationPolicy, NoElevation, SudoElevation
from hostscope.core.executor import ExecutionResult, Executor
from hostscope.core.report import Report, SectionResult, SourceEntry

__all__ = [
    "AppConfig",
    "Capability",
    "CapabilityProbe",
    "Collector",
    "ElevationPolicy",
    "ExecutionResult",
    "Executor",
    "NoElevation",
    "Report",
    "SectionResult",
    "SourceEntry",
    "SudoElevation",
    "SystemDetector",
    "SystemInfo",
]
