"""
System and tool detection.
"""

import os
import platform
import shutil
import socket
import sys
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class SystemInfo(BaseModel):
    """System information model."""

    model_config = ConfigDict(frozen=True)

    os_type: str  # 'Linux', 'Darwin', ...
    platform: str
    python_version: str
    hostname: str


class Capability(BaseModel):
    """Whether a named tool is available on this host."""

    model_config = ConfigDict(frozen=True)

    name: str
    present: bool


class SystemDetector:
    """Detect system information."""

    def detect_system(self) -> SystemInfo:
        """Detect current system information."""
        return SystemInfo(
            os_type=platform.system(),
            platform=platform.platform(),
            python_version=sys.version.split()[0],
            hostname=socket.gethostname(),
        )


class CapabilityProbe:
    """
    Answer "is tool/file X available on this host?".

    Answers are memoized for the lifetime of the probe; one probe is
    created per collection run, so host state is sampled once per run.
    """

    def __init__(
        self,
        which: Callable[[str], Optional[str]] = shutil.which,
        can_read: Optional[Callable[[str], bool]] = None,
    ):
        self._which = which
        self._can_read = can_read or (lambda path: os.access(path, os.R_OK))
        self._tools: Dict[str, Capability] = {}
        self._files: Dict[str, bool] = {}

    def check(self, tool: str) -> Capability:
        """Return the (cached) Capability record for a tool."""
        capability = self._tools.get(tool)
        if capability is None:
            try:
                present = self._which(tool) is not None
            except OSError:
                present = False
            capability = Capability(name=tool, present=present)
            self._tools[tool] = capability
        return capability

    def has(self, tool: str) -> bool:
        """Check if a tool resolves on PATH."""
        return self.check(tool).present

    def readable(self, path: str) -> bool:
        """Check if a file can be read by this process."""
        if path not in self._files:
            try:
                self._files[path] = bool(self._can_read(path))
            except OSError:
                self._files[path] = False
        return self._files[path]

    def capabilities(self) -> List[Capability]:
        """Tools queried so far, sorted by name."""
        return sorted(self._tools.values(), key=lambda c: c.name)
