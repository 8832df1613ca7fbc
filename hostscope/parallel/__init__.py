"""
Concurrent section execution.
"""

from hostscope.parallel.executor import OrderedTaskRunner, ParallelRunConfig, TaskOutcome

__all__ = [
    "OrderedTaskRunner",
    "ParallelRunConfig",
    "TaskOutcome",
]
