"""Locating and invoking the external CLIs the checks observe."""

from __future__ import annotations

import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import logging


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    exit_code: int
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Combined output, stdout first, like `cmd 2>&1` for short runs."""
        if self.stdout and self.stderr:
            return self.stdout.rstrip("\n") + "\n" + self.stderr
        return self.stdout or self.stderr


class CommandRunner:
    """Resolves executables on PATH and runs them to completion.

    Every invocation blocks until the child exits. Failures to spawn and
    expired timeouts are folded into a CommandResult with exit code -1 so
    callers only ever inspect results.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        timeout: float | None = None,
    ) -> None:
        self.logger = logger
        self.timeout = timeout

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def run(self, cmd: list[str]) -> CommandResult:
        if self.logger:
            self.logger.debug(f"Command: {' '.join(cmd)}")

        start = time.monotonic()
        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            duration = time.monotonic() - start
            if self.logger:
                self.logger.debug(f"Command timed out after {duration:.2f}s")
            return CommandResult(
                stdout="",
                stderr=f"Command timed out after {self.timeout}s: {' '.join(cmd)}",
                exit_code=-1,
                duration_seconds=duration,
            )
        except OSError as e:
            duration = time.monotonic() - start
            if self.logger:
                self.logger.debug(f"Command failed after {duration:.2f}s: {e}")
            return CommandResult(
                stdout="", stderr=str(e), exit_code=-1, duration_seconds=duration
            )

        duration = time.monotonic() - start
        if self.logger:
            self.logger.debug(
                f"Command completed in {duration:.2f}s with exit code {proc.returncode}"
            )
            if proc.stderr:
                self.logger.debug(f"[stderr] {proc.stderr.rstrip()}")

        return CommandResult(
            stdout=proc.stdout,
            stderr=proc.stderr,
            exit_code=proc.returncode,
            duration_seconds=duration,
        )
