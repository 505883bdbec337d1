"""Inspection of the per-user AWS credentials and config files."""

from __future__ import annotations

import re
from pathlib import Path

from preflight.checks.base import CheckContext, CheckReport, CheckStatus, check
from preflight.checks.environment import PROFILE

_SECTION_RE = re.compile(r"^\[([^\]]*)\]")


def read_section_names(path: Path) -> list[str]:
    """Return the `[section]` header names of an INI-like file, in order.

    Only header lines are looked at; key/value lines are never parsed.
    """
    names: list[str] = []
    with open(path, encoding="utf-8-sig", errors="replace") as f:
        for line in f:
            if m := _SECTION_RE.match(line):
                names.append(m.group(1).strip())
    return names


def read_config_profiles(path: Path) -> list[str]:
    """Profile names declared in an AWS config file.

    The config file spells named profiles `[profile NAME]`; `[default]` stays
    bare. Other sections such as `[sso-session NAME]` are skipped.
    """
    profiles: list[str] = []
    for name in read_section_names(path):
        if name == "default":
            profiles.append(name)
        elif name.startswith("profile "):
            profiles.append(name[len("profile ") :].strip())
    return profiles


@check("credentials_file", "Checking AWS credentials file")
def check_credentials_file(ctx: CheckContext, report: CheckReport) -> None:
    path = ctx.config.credentials_path(ctx.environ)

    if not path.is_file():
        report.add(CheckStatus.WARN, f"Credentials file not found: {path}")
        report.add(CheckStatus.INFO, f"Run '{ctx.config.aws_cli} configure' to create it")
        return

    report.add(CheckStatus.PASS, f"Credentials file exists: {path}")
    try:
        sections = read_section_names(path)
    except OSError as e:
        report.add(CheckStatus.WARN, f"Could not read credentials file: {e}")
        return

    if "default" in sections:
        report.add(CheckStatus.PASS, "Default profile found")
    else:
        report.add(CheckStatus.WARN, "No [default] profile in credentials file")

    if sections:
        report.add(CheckStatus.INFO, f"Available profiles: {', '.join(sections)}")

    profile = ctx.env(PROFILE)
    if profile and profile != "default" and profile not in sections:
        _report_profile_outside_credentials(ctx, report, profile)


def _report_profile_outside_credentials(
    ctx: CheckContext, report: CheckReport, profile: str
) -> None:
    config_path = ctx.config.config_path(ctx.environ)
    try:
        config_profiles = (
            read_config_profiles(config_path) if config_path.is_file() else []
        )
    except OSError:
        config_profiles = []

    if profile in config_profiles:
        report.add(
            CheckStatus.INFO,
            f"Profile '{profile}' from {PROFILE} is defined in {config_path}",
        )
    else:
        report.add(
            CheckStatus.WARN,
            f"Profile '{profile}' from {PROFILE} not found in credentials or config file",
        )


@check("config_file", "Checking AWS config file")
def check_config_file(ctx: CheckContext, report: CheckReport) -> None:
    path = ctx.config.config_path(ctx.environ)

    if not path.is_file():
        report.add(CheckStatus.WARN, f"Config file not found: {path}")
        return

    report.add(CheckStatus.PASS, f"Config file exists: {path}")

    result = ctx.aws("configure", "get", "region")
    region = result.stdout.strip() if result.succeeded else ""
    if region:
        report.add(CheckStatus.PASS, f"Default region configured: {region}")
    else:
        report.add(
            CheckStatus.WARN,
            "No default region configured",
            f"Set with: {ctx.config.aws_cli} configure set region us-east-1",
        )
