"""
Storage and logging components.
"""

from hostscope.storage.logger import setup_logging
from hostscope.storage.csv_handler import CSVHandler
from hostscope.storage.snapshot import list_snapshots, load_snapshot, save_snapshot

__all__ = [
    "setup_logging",
    "CSVHandler",
    "list_snapshots",
    "load_snapshot",
    "save_snapshot",
]
