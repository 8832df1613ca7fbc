"""
Collection orchestrator: runs a section plan and assembles the Report.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence

from loguru import logger

from hostscope.core.deadline import Deadline
from hostscope.core.detector import CapabilityProbe, SystemDetector
from hostscope.core.executor import DEFAULT_TIMEOUT, Executor
from hostscope.core.report import Report, SectionResult, SourceEntry
from hostscope.parallel.executor import OrderedTaskRunner, ParallelRunConfig
from hostscope.sources.base import DEADLINE_EXCEEDED, ProbeContext, Section

INTERNAL_ERROR = "internal error"


class SectionRun:
    """Resolves one section, keeping finished entries visible while it runs."""

    def __init__(self, section: Section, ctx: ProbeContext):
        self.section = section
        self.ctx = ctx
        self.entries: List[SourceEntry] = []

    def __call__(self) -> SectionResult:
        logger.debug(f"Collecting section: {self.section.title}")
        for source in self.section.sources:
            try:
                entry = source.resolve(self.ctx)
            except Exception:
                logger.exception(f"{source.key}: unexpected failure")
                entry = SourceEntry.unavailable(source.label, note=INTERNAL_ERROR)
            self.entries.append(entry)
        return self.result()

    def result(self) -> SectionResult:
        """Snapshot of the section; sources not reached yet are unavailable."""
        entries = list(self.entries)
        for source in self.section.sources[len(entries):]:
            entries.append(SourceEntry.unavailable(source.label, note=DEADLINE_EXCEEDED))
        return SectionResult(key=self.section.key, title=self.section.title, entries=tuple(entries))


class Collector:
    """Run a plan of sections against this host."""

    def __init__(
        self,
        executor: Optional[Executor] = None,
        probe: Optional[CapabilityProbe] = None,
        timeout: float = DEFAULT_TIMEOUT,
        deadline: Optional[float] = None,
        workers: int = 1,
        detector: Optional[SystemDetector] = None,
    ):
        """
        Args:
            executor: Command executor (carries the elevation policy)
            probe: Capability probe; a fresh one is created per run when omitted
            timeout: Default per-command timeout in seconds
            deadline: Whole-run deadline in seconds, None for unbounded
            workers: Sections run concurrently when greater than 1
            detector: Host identity detector
        """
        self.executor = executor or Executor()
        self.probe = probe
        self.timeout = timeout
        self.deadline = deadline
        self.workers = workers
        self.detector = detector or SystemDetector()

    def run(
        self,
        plan: Sequence[Section],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> Report:
        """Execute every section in plan order and return the Report."""
        started = datetime.now().astimezone()
        deadline = Deadline(self.deadline)
        ctx = ProbeContext(
            probe=self.probe or CapabilityProbe(),
            executor=self.executor,
            deadline=deadline,
            timeout=self.timeout,
        )
        logger.info(f"Collecting {len(plan)} section(s) with {self.workers} worker(s)")

        runs = [SectionRun(section, ctx) for section in plan]
        runner = OrderedTaskRunner(ParallelRunConfig(max_workers=self.workers, deadline=self.deadline))
        outcomes = runner.run(runs, deadline=deadline, progress_callback=progress_callback)

        sections = []
        truncated = False
        for run, outcome in zip(runs, outcomes):
            if outcome.done and outcome.error is None:
                sections.append(outcome.value)
                continue
            if not outcome.done:
                truncated = True
            sections.append(run.result())

        finished = datetime.now().astimezone()
        logger.info(f"Collection finished in {(finished - started).total_seconds():.1f}s")
        return Report(
            generated_at_start=started,
            generated_at_end=finished,
            host=self.detector.detect_system(),
            elevated=self.executor.can_elevate(),
            truncated=truncated,
            capabilities=tuple(ctx.probe.capabilities()),
            sections=tuple(sections),
        )
