"""Base data structures shared by every check."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from preflight.config import PreflightConfig
from preflight.process import CommandResult, CommandRunner

if TYPE_CHECKING:
    import logging


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    INFO = "info"


_SEVERITY = {
    CheckStatus.INFO: 0,
    CheckStatus.PASS: 1,
    CheckStatus.WARN: 2,
    CheckStatus.FAIL: 3,
}


@dataclass
class CheckResult:
    """A single status line of a check.

    Attributes:
        status: How the line is flagged when printed.
        message: Headline text.
        details: Indented follow-up lines, printed verbatim.
    """

    status: CheckStatus
    message: str
    details: list[str] = field(default_factory=list)


@dataclass
class CheckReport:
    name: str
    title: str
    results: list[CheckResult] = field(default_factory=list)
    fatal: bool = False

    def add(self, status: CheckStatus, message: str, *details: str) -> None:
        self.results.append(CheckResult(status, message, list(details)))

    @property
    def status(self) -> CheckStatus:
        if not self.results:
            return CheckStatus.INFO
        return max((r.status for r in self.results), key=_SEVERITY.__getitem__)

    @property
    def messages(self) -> list[str]:
        return [r.message for r in self.results]


@dataclass
class CheckContext:
    """Everything a check may read. Only `aws_path` and `identity` are written,
    by the tool and identity checks respectively. `now` pins the clock check's
    reading of the system time."""

    config: PreflightConfig
    runner: CommandRunner
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    platform: str = sys.platform
    logger: logging.Logger | None = None
    aws_path: str | None = None
    identity: CommandResult | None = None
    now: datetime | None = None

    @property
    def is_windows(self) -> bool:
        return self.platform.startswith("win")

    def env(self, name: str) -> str | None:
        """Return the variable's value, treating an empty string as unset."""
        return self.environ.get(name) or None

    def aws(self, *args: str) -> CommandResult:
        result = self.runner.run([self.aws_path or self.config.aws_cli, *args])
        if self.logger:
            self.logger.debug(
                f"aws {' '.join(args)} took {result.duration_seconds:.2f}s"
                f" (exit code {result.exit_code})"
            )
        return result


@dataclass(frozen=True)
class Check:
    """A named check. Calling it runs the body against a fresh report."""

    name: str
    title: str
    body: Callable[[CheckContext, CheckReport], None]

    def __call__(self, ctx: CheckContext) -> CheckReport:
        report = CheckReport(self.name, self.title)
        self.body(ctx, report)
        return report


CheckBody = Callable[[CheckContext, CheckReport], None]


def check(name: str, title: str) -> Callable[[CheckBody], Check]:
    def decorator(body: CheckBody) -> Check:
        return Check(name, title, body)

    return decorator
