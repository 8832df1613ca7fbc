"""
Bounded worker pool for section execution.
Results are returned in submission order, whatever order tasks finish in.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from loguru import logger

from hostscope.core.deadline import Deadline


@dataclass
class ParallelRunConfig:
    """Configuration for the section worker pool."""
    max_workers: int = 1
    deadline: Optional[float] = None  # Seconds for the whole run


@dataclass
class TaskOutcome:
    """What happened to one submitted task."""
    index: int
    done: bool
    value: Any = None
    error: Optional[str] = None


class OrderedTaskRunner:
    """
    Run zero-argument callables on a pool of daemon threads and collect their
    results by submission index.

    Tasks that have not finished when the deadline expires are abandoned
    and reported with ``done=False``; the runner does not wait for them.
    """

    def __init__(self, config: Optional[ParallelRunConfig] = None):
        """
        Initialize the runner.

        Args:
            config: Worker count and run deadline
        """
        self.config = config or ParallelRunConfig()

    def run(
        self,
        tasks: List[Callable[[], Any]],
        deadline: Optional[Deadline] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> List[TaskOutcome]:
        """
        Execute tasks and return one outcome per task, in task order.

        Args:
            tasks: Callables to execute
            deadline: Shared run deadline (defaults to config.deadline)
            progress_callback: Optional callback for progress updates (completed, total)

        Returns:
            List of TaskOutcome objects, index-aligned with ``tasks``
        """
        deadline = deadline or Deadline(self.config.deadline)
        total = len(tasks)
        outcomes = [TaskOutcome(index=i, done=False) for i in range(total)]
        if not tasks:
            return outcomes

        pending: "queue.Queue" = queue.Queue()
        for index, task in enumerate(tasks):
            pending.put((index, task))
        finished: "queue.Queue" = queue.Queue()
        stop = threading.Event()

        def _worker() -> None:
            while not stop.is_set():
                try:
                    index, task = pending.get_nowait()
                except queue.Empty:
                    return
                try:
                    finished.put(TaskOutcome(index=index, done=True, value=task()))
                except Exception as e:
                    logger.exception(f"Task {index} failed")
                    finished.put(TaskOutcome(index=index, done=True, error=str(e)))

        # Daemon threads: a task still blocked at the deadline must not hold the process open
        for n in range(min(max(1, self.config.max_workers), total)):
            threading.Thread(target=_worker, name=f"hostscope-{n}", daemon=True).start()

        completed = 0
        try:
            while completed < total:
                outcome = finished.get(timeout=deadline.remaining())
                outcomes[outcome.index] = outcome
                completed += 1
                if progress_callback:
                    progress_callback(completed, total)
        except queue.Empty:
            logger.warning(f"Run deadline reached with {total - completed} task(s) unfinished")
        finally:
            stop.set()

        return outcomes
