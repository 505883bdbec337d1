from preflight.checks.base import (
    Check,
    CheckContext,
    CheckReport,
    CheckResult,
    CheckStatus,
)
from preflight.checks.environment import check_environment_variables
from preflight.checks.files import check_config_file, check_credentials_file
from preflight.checks.identity import check_clock_skew, check_identity
from preflight.checks.tools import check_aws_cli, check_terraform

# Run order matters: the identity check records the output the clock check reads.
CHECKS: tuple[Check, ...] = (
    check_aws_cli,
    check_environment_variables,
    check_credentials_file,
    check_config_file,
    check_identity,
    check_clock_skew,
    check_terraform,
)

__all__ = [
    "CHECKS",
    "Check",
    "CheckContext",
    "CheckReport",
    "CheckResult",
    "CheckStatus",
    "check_aws_cli",
    "check_clock_skew",
    "check_config_file",
    "check_credentials_file",
    "check_environment_variables",
    "check_identity",
    "check_terraform",
]
