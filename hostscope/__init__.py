"""
HostScope - Read-only host inventory collector
"""

from hostscope.__version__ import __version__
from hostscope.core.collector import Collector
from hostscope.core.config import AppConfig
from hostscope.core.report import Report

__all__ = [
    "AppConfig",
    "Collector",
    "Report",
    "__version__",
]
