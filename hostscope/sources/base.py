"""
Data sources and their fallback candidates.

A DataSource resolves one fact by trying its candidates in declared
order: a structured/modern tool first, then legacy tools, then raw
pseudo-files or in-process fallbacks. The first candidate that is
available and succeeds wins; when none does, the source resolves to the
``unavailable`` marker. Nothing in here raises past ``resolve()``.
"""

import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from loguru import logger

from hostscope.core.deadline import Deadline
from hostscope.core.detector import CapabilityProbe
from hostscope.core.executor import DEFAULT_TIMEOUT, ExecutionResult
from hostscope.core.report import SourceEntry

PERMISSION_LIMITED = "permission-limited"
REQUIRES_ELEVATION = "requires elevation"
DEADLINE_EXCEEDED = "deadline exceeded"


class ElevationMode(str, Enum):
    """How a candidate uses elevation."""

    NONE = "none"
    OPTIONAL = "optional"  # elevate if possible, else run unprivileged
    MANDATORY = "mandatory"  # skip the candidate unless elevation works


@dataclass
class ProbeContext:
    """Per-run collaborators handed to every candidate."""

    probe: CapabilityProbe
    executor: object  # Executor or a test double with run()/can_elevate()
    deadline: Deadline = field(default_factory=lambda: Deadline(None))
    timeout: float = DEFAULT_TIMEOUT


class Candidate(ABC):
    """One fallback method within a DataSource."""

    def __init__(
        self,
        requires: Sequence[str] = (),
        accept_empty: bool = False,
        max_lines: Optional[int] = None,
        line_filter: Optional[str] = None,
        transform: Optional[Callable[[str], str]] = None,
        empty_note: Optional[str] = None,
    ):
        self.requires = tuple(requires)
        self.accept_empty = accept_empty
        self.empty_note = empty_note
        self.max_lines = max_lines
        self.line_filter = re.compile(line_filter) if line_filter else None
        self.transform = transform

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable form, e.g. the command line."""

    def missing(self, ctx: ProbeContext) -> Optional[str]:
        """Reason this candidate cannot run here, or None."""
        for tool in self.requires:
            if not ctx.probe.has(tool):
                return f"{tool} not installed"
        return None

    @abstractmethod
    def attempt(self, ctx: ProbeContext) -> ExecutionResult:
        """Run the candidate. Must not raise."""

    def shape(self, text: str) -> str:
        """Apply transform, then line filter, then line limit."""
        if self.transform is not None:
            text = self.transform(text)
        lines = text.splitlines()
        if self.line_filter is not None:
            lines = [line for line in lines if self.line_filter.search(line)]
        if self.max_lines is not None:
            lines = lines[: self.max_lines]
        return "\n".join(lines).rstrip()

    def accepts(self, result: ExecutionResult, text: str) -> bool:
        if not result.success:
            return False
        return bool(text.strip()) or self.accept_empty


class CommandCandidate(Candidate):
    """Run an external tool."""

    def __init__(
        self,
        command: Sequence[str],
        elevation: ElevationMode = ElevationMode.NONE,
        timeout: Optional[float] = None,
        ok_codes: Sequence[int] = (0,),
        requires: Optional[Sequence[str]] = None,
        **kwargs,
    ):
        super().__init__(requires=(command[0],) if requires is None else requires, **kwargs)
        self.command = list(command)
        self.elevation = ElevationMode(elevation)
        self.timeout = timeout
        self.ok_codes = tuple(ok_codes)

    def describe(self) -> str:
        return " ".join(self.command)

    def missing(self, ctx: ProbeContext) -> Optional[str]:
        reason = super().missing(ctx)
        if reason is None and self.elevation is ElevationMode.MANDATORY:
            if not ctx.executor.can_elevate():
                return REQUIRES_ELEVATION
        return reason

    def attempt(self, ctx: ProbeContext) -> ExecutionResult:
        timeout = ctx.deadline.clamp(self.timeout or ctx.timeout)
        return ctx.executor.run(
            self.command,
            timeout=timeout,
            elevate=self.elevation is not ElevationMode.NONE,
            ok_codes=self.ok_codes,
        )

    def limited(self, result: ExecutionResult) -> bool:
        """True when an elevated view was wanted but we ran unprivileged."""
        return self.elevation is ElevationMode.OPTIONAL and not result.elevated


class FileCandidate(Candidate):
    """Read a pseudo-file or configuration file."""

    def __init__(self, path: str, **kwargs):
        super().__init__(**kwargs)
        self.path = path

    def describe(self) -> str:
        return self.path

    def missing(self, ctx: ProbeContext) -> Optional[str]:
        if not ctx.probe.readable(self.path):
            return f"{self.path} not readable"
        return super().missing(ctx)

    def attempt(self, ctx: ProbeContext) -> ExecutionResult:
        start = time.time()
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            return ExecutionResult.failed(self.path, "error", str(e), time.time() - start)
        return ExecutionResult(
            command=self.path,
            return_code=0,
            stdout=text,
            stderr="",
            duration=time.time() - start,
            success=True,
            reason="ok",
        )


class FunctionCandidate(Candidate):
    """Compute the value in-process; None or an exception means failure."""

    def __init__(self, func: Callable[[], Optional[str]], name: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.func = func
        self.name = name or getattr(func, "__name__", "function")

    def describe(self) -> str:
        return f"{self.name}()"

    def attempt(self, ctx: ProbeContext) -> ExecutionResult:
        start = time.time()
        try:
            text = self.func()
        except Exception as e:
            logger.debug(f"{self.describe()} failed: {e}")
            return ExecutionResult.failed(self.describe(), "error", str(e), time.time() - start)
        if text is None:
            return ExecutionResult.failed(self.describe(), "error", "no value", time.time() - start)
        return ExecutionResult(
            command=self.describe(),
            return_code=0,
            stdout=str(text),
            stderr="",
            duration=time.time() - start,
            success=True,
            reason="ok",
        )


class DataSource:
    """Resolve one labelled fact through an ordered candidate chain."""

    def __init__(self, key: str, label: str, candidates: Sequence[Candidate]):
        self.key = key
        self.label = label
        self.candidates = list(candidates)

    def __repr__(self) -> str:
        return f"DataSource({self.key!r})"

    def resolve(self, ctx: ProbeContext) -> SourceEntry:
        needs_elevation = False
        for candidate in self.candidates:
            if ctx.deadline.expired():
                logger.warning(f"{self.key}: run deadline reached, giving up")
                return SourceEntry.unavailable(self.label, note=DEADLINE_EXCEEDED)

            reason = candidate.missing(ctx)
            if reason is not None:
                needs_elevation = needs_elevation or reason == REQUIRES_ELEVATION
                logger.debug(f"{self.key}: skipping {candidate.describe()} ({reason})")
                continue

            result = candidate.attempt(ctx)
            text = candidate.shape(result.stdout) if result.success else ""
            if candidate.accepts(result, text):
                note = None if text else candidate.empty_note
                if isinstance(candidate, CommandCandidate) and candidate.limited(result):
                    note = PERMISSION_LIMITED
                return SourceEntry(
                    label=self.label,
                    text=text,
                    status="ok" if text else "empty",
                    source=candidate.describe(),
                    note=note,
                )
            logger.debug(
                f"{self.key}: {candidate.describe()} rejected "
                f"(reason: {result.reason}, return code: {result.return_code})"
            )

        logger.info(f"{self.key}: no candidate succeeded")
        return SourceEntry.unavailable(self.label, note=REQUIRES_ELEVATION if needs_elevation else None)


@dataclass
class Section:
    """A titled group of data sources, resolved in declared order."""

    key: str
    title: str
    sources: List[DataSource] = field(default_factory=list)
