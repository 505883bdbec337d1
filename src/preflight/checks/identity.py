"""Credential validation through STS GetCallerIdentity, and the clock-skew
heuristic that reads its output."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, ValidationError

from preflight.checks.base import CheckContext, CheckReport, CheckStatus, check
from preflight.process import CommandResult

IDENTITY_COMMAND = ("sts", "get-caller-identity", "--output", "json")

COMMON_CAUSES = (
    "Invalid or expired credentials",
    "Special characters in secret key not properly quoted",
    "Spaces in credentials",
    "System clock skew (time difference > 5 minutes)",
    "Incorrect AWS region or endpoint",
)

REMEDIATION_STEPS = (
    "Verify credentials: aws configure",
    'Check for spaces: echo "[$AWS_SECRET_ACCESS_KEY]"',
    "Regenerate credentials in AWS IAM Console",
    "See TROUBLESHOOTING.md for detailed solutions",
)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

CLOCK_FIX_POSIX = "sudo ntpdate -s time.nist.gov"
CLOCK_FIX_WINDOWS = "w32tm /resync"


class CallerIdentity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    UserId: str
    Account: str
    Arn: str


def parse_identity(text: str) -> CallerIdentity | None:
    try:
        return CallerIdentity.model_validate_json(text)
    except ValidationError:
        return None


def numbered(items: tuple[str, ...] | list[str]) -> list[str]:
    return [f"{i}. {item}" for i, item in enumerate(items, start=1)]


@check("identity", "Testing AWS credentials with STS GetCallerIdentity")
def check_identity(ctx: CheckContext, report: CheckReport) -> None:
    result = ctx.aws(*IDENTITY_COMMAND)
    ctx.identity = result

    if not result.succeeded:
        if ctx.logger:
            ctx.logger.debug(f"Identity check failed with exit code {result.exit_code}")
        report.fatal = True
        report.add(CheckStatus.FAIL, "AWS credential validation FAILED")
        report.add(CheckStatus.FAIL, "Error output:", *result.output.rstrip().splitlines())
        report.add(CheckStatus.WARN, "Common causes:", *numbered(COMMON_CAUSES))
        report.add(CheckStatus.WARN, "Next steps:", *numbered(REMEDIATION_STEPS))
        return

    report.add(CheckStatus.PASS, "AWS credentials are VALID!")
    identity = parse_identity(result.stdout)
    if identity is None:
        report.add(CheckStatus.INFO, "Account Details:", *result.output.rstrip().splitlines())
    else:
        report.add(
            CheckStatus.INFO,
            "Account Details:",
            f"UserId:  {identity.UserId}",
            f"Account: {identity.Account}",
            f"Arn:     {identity.Arn}",
        )


def is_clock_skewed(result: CommandResult | None, marker: str) -> bool:
    return result is not None and marker in result.output


@check("clock", "Checking system time for clock skew")
def check_clock_skew(ctx: CheckContext, report: CheckReport) -> None:
    now = ctx.now or datetime.now(timezone.utc)
    report.add(CheckStatus.PASS, f"Current system time: {now.strftime(TIME_FORMAT)}")

    result = ctx.identity
    if ctx.config.recheck_identity or result is None:
        result = ctx.aws(*IDENTITY_COMMAND)

    if is_clock_skewed(result, ctx.config.skew_marker):
        fix = CLOCK_FIX_WINDOWS if ctx.is_windows else CLOCK_FIX_POSIX
        report.add(
            CheckStatus.FAIL,
            "System clock is out of sync with AWS servers!",
            f"Fix: {fix}",
        )
    else:
        report.add(CheckStatus.PASS, "System time appears to be in sync")
