"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from preflight.checks.base import CheckContext
from preflight.config import PreflightConfig
from preflight.process import CommandResult, CommandRunner

IDENTITY_JSON = '{"UserId":"U1","Account":"123","Arn":"arn:aws:iam::123:user/x"}'


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up preflight loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("preflight")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


class FakeCommandRunner(CommandRunner):
    """CommandRunner that never spawns anything.

    `installed` maps executable names to resolved paths; `responses` maps
    argument tuples (without the executable) to canned results. Unknown
    commands fail with exit code 1.
    """

    def __init__(
        self,
        installed: dict[str, str] | None = None,
        responses: dict[tuple[str, ...], CommandResult] | None = None,
    ) -> None:
        super().__init__()
        self.installed = installed or {}
        self.responses = responses or {}
        self.calls: list[list[str]] = []

    def which(self, name: str) -> str | None:
        return self.installed.get(name)

    def run(self, cmd: list[str]) -> CommandResult:
        self.calls.append(cmd)
        response = self.responses.get(tuple(cmd[1:]))
        if response is None:
            return CommandResult(stdout="", stderr="unknown command", exit_code=1)
        return response

    def count(self, *args: str) -> int:
        return sum(1 for call in self.calls if tuple(call[1:]) == args)


def ok(stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(stdout=stdout, stderr=stderr, exit_code=0)


def failed(stderr: str, exit_code: int = 255) -> CommandResult:
    return CommandResult(stdout="", stderr=stderr, exit_code=exit_code)


IDENTITY_ARGS = ("sts", "get-caller-identity", "--output", "json")


def _healthy_runner(
    installed: dict[str, str] | None = None, **overrides: CommandResult
) -> FakeCommandRunner:
    """A machine with aws and terraform installed and valid credentials.

    Keyword overrides replace the canned `identity`, `region`, `version`
    (aws --version) or `terraform` responses.
    """
    responses = {
        ("--version",): ok("aws-cli/2.15.0 Python/3.11.6 Linux/6.5.0 exe/x86_64\n"),
        ("configure", "get", "region"): ok("us-east-1\n"),
        IDENTITY_ARGS: ok(IDENTITY_JSON + "\n"),
        ("version",): ok("Terraform v1.7.5\non linux_amd64\n"),
    }
    keys = {
        "identity": IDENTITY_ARGS,
        "region": ("configure", "get", "region"),
        "version": ("--version",),
        "terraform": ("version",),
    }
    for name, result in overrides.items():
        responses[keys[name]] = result
    if installed is None:
        installed = {
            "aws": "/usr/local/bin/aws",
            "terraform": "/usr/local/bin/terraform",
        }
    return FakeCommandRunner(installed=installed, responses=responses)


@pytest.fixture
def healthy_runner():
    return _healthy_runner


@pytest.fixture
def aws_home(tmp_path: Path) -> Path:
    """An empty home directory; no ~/.aws files exist yet."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def make_context(aws_home: Path):
    def _make(
        runner: CommandRunner | None = None,
        environ: dict[str, str] | None = None,
        platform: str = "linux",
        **config: object,
    ) -> CheckContext:
        env = {"HOME": str(aws_home)}
        env.update(environ or {})
        ctx = CheckContext(
            config=PreflightConfig(**config),
            runner=runner or _healthy_runner(),
            environ=env,
            platform=platform,
        )
        ctx.aws_path = "/usr/local/bin/aws"
        return ctx

    return _make
