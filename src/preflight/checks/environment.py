"""Inspection of the AWS credential environment variables."""

from __future__ import annotations

from preflight.checks.base import CheckContext, CheckReport, CheckStatus, check

ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
SESSION_TOKEN = "AWS_SESSION_TOKEN"
PROFILE = "AWS_PROFILE"

CREDENTIAL_VARIABLES = (ACCESS_KEY_ID, SECRET_ACCESS_KEY, SESSION_TOKEN, PROFILE)


def has_whitespace(value: str) -> bool:
    return any(ch.isspace() for ch in value)


def strip_whitespace_hint(name: str, windows: bool = False) -> str:
    if windows:
        return f"Fix: $env:{name} = $env:{name} -replace '\\s', ''"
    return f"Fix: export {name}=$(echo \"${name}\" | tr -d '[:space:]')"


def _inspect_secret(
    ctx: CheckContext, report: CheckReport, name: str, preview: int
) -> None:
    value = ctx.env(name)
    if value is None:
        report.add(CheckStatus.WARN, f"{name} not set in environment")
        return

    report.add(
        CheckStatus.PASS,
        f"{name} is set",
        f"Value: {value[:preview]}... (showing first {preview} chars)",
    )
    if has_whitespace(value):
        report.add(
            CheckStatus.FAIL,
            f"WARNING: {name} contains whitespace!",
            "This will cause authentication failures.",
            strip_whitespace_hint(name, ctx.is_windows),
        )


@check("environment", "Checking environment variables")
def check_environment_variables(ctx: CheckContext, report: CheckReport) -> None:
    _inspect_secret(ctx, report, ACCESS_KEY_ID, ctx.config.access_key_preview)
    _inspect_secret(ctx, report, SECRET_ACCESS_KEY, ctx.config.secret_key_preview)

    if ctx.env(SESSION_TOKEN):
        report.add(CheckStatus.PASS, f"{SESSION_TOKEN} is set (temporary credentials)")
    else:
        report.add(CheckStatus.INFO, f"{SESSION_TOKEN} not set (long-term credentials)")

    if profile := ctx.env(PROFILE):
        report.add(CheckStatus.PASS, f"{PROFILE} is set: {profile}")
    else:
        report.add(CheckStatus.INFO, f"{PROFILE} not set (will use 'default' profile)")

    if not any(ctx.env(name) for name in CREDENTIAL_VARIABLES):
        report.add(
            CheckStatus.INFO,
            "No AWS environment variables set",
            f"Credentials will be loaded from {ctx.config.credentials_path(ctx.environ)}",
        )
