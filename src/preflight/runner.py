from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

from preflight.checks import CHECKS, Check, CheckContext, CheckReport
from preflight.config import PreflightConfig
from preflight.process import CommandRunner
from preflight.reporting import console


@dataclass
class RunOutcome:
    identity_verified: bool
    reports: list[CheckReport] = field(default_factory=list)
    stopped_at: str | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.identity_verified else 1


class Runner:
    """Runs the checks in order, printing each report as soon as it exists."""

    def __init__(
        self,
        config: PreflightConfig,
        logger: logging.Logger | None = None,
        command_runner: CommandRunner | None = None,
        environ: Mapping[str, str] | None = None,
        platform: str | None = None,
        checks: tuple[Check, ...] = CHECKS,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger("preflight")
        self.command_runner = command_runner or CommandRunner(
            logger=self.logger, timeout=config.command_timeout
        )
        self.environ = dict(os.environ) if environ is None else dict(environ)
        self.platform = platform or sys.platform
        self.checks = checks

    def execute(self) -> RunOutcome:
        ctx = CheckContext(
            config=self.config,
            runner=self.command_runner,
            environ=self.environ,
            platform=self.platform,
            logger=self.logger,
        )
        outcome = RunOutcome(identity_verified=False)
        total = len(self.checks)

        self.logger.debug("Starting preflight run")
        console.print_header()

        for index, check in enumerate(self.checks, start=1):
            console.print_check_title(index, total, check.title)
            report = check(ctx)
            console.print_report(report)
            outcome.reports.append(report)
            self.logger.debug(f"Check '{report.name}' finished: {report.status.value}")

            if report.fatal:
                outcome.stopped_at = report.name
                self.logger.debug(f"Stopping run after fatal check '{report.name}'")
                return outcome

        outcome.identity_verified = ctx.identity is not None and ctx.identity.succeeded
        if outcome.identity_verified:
            console.print_summary()
        return outcome
