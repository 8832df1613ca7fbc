"""
Privilege elevation policies.

The collector never prompts: elevation is used only when it works
non-interactively, otherwise probes run with the caller's privileges.
"""

import os
import shutil
from typing import Callable, List, Optional, Sequence

from loguru import logger

from hostscope.core.executor import DEFAULT_TIMEOUT, ExecutionResult, run_process


class ElevationPolicy:
    """Base policy: elevation is never available."""

    name = "none"

    def available(self) -> bool:
        return False

    def run(
        self,
        command: List[str],
        timeout: float = DEFAULT_TIMEOUT,
        ok_codes: Sequence[int] = (0,),
    ) -> ExecutionResult:
        return run_process(command, timeout=timeout, ok_codes=ok_codes)


class NoElevation(ElevationPolicy):
    """Selected by ``--elevate never``."""


class SudoElevation(ElevationPolicy):
    """
    Passwordless sudo.

    ``available()`` is True for root, or when ``sudo -n true`` succeeds.
    The check runs at most once per policy instance.
    """

    name = "sudo"

    def __init__(
        self,
        which: Callable[[str], Optional[str]] = shutil.which,
        geteuid: Callable[[], int] = os.geteuid,
        runner: Callable[..., ExecutionResult] = run_process,
    ):
        self._which = which
        self._geteuid = geteuid
        self._runner = runner
        self._available: Optional[bool] = None
        self._is_root: Optional[bool] = None

    def is_root(self) -> bool:
        if self._is_root is None:
            self._is_root = self._geteuid() == 0
        return self._is_root

    def available(self) -> bool:
        if self._available is None:
            if self.is_root():
                self._available = True
            elif self._which("sudo") is None:
                self._available = False
            else:
                check = self._runner(["sudo", "-n", "true"], timeout=5)
                self._available = check.success
            logger.debug(f"Non-interactive elevation available: {self._available}")
        return self._available

    def wrap(self, command: List[str]) -> List[str]:
        if self.is_root():
            return list(command)
        return ["sudo", "-n", "--", *command]

    def run(
        self,
        command: List[str],
        timeout: float = DEFAULT_TIMEOUT,
        ok_codes: Sequence[int] = (0,),
    ) -> ExecutionResult:
        result = self._runner(
            self.wrap(command),
            timeout=timeout,
            ok_codes=ok_codes,
            label=" ".join(command),
        )
        return result.model_copy(update={"elevated": True})


def build_policy(mode: str) -> ElevationPolicy:
    """Map the ``elevate`` config value to a policy."""
    if mode == "never":
        return NoElevation()
    return SudoElevation()
