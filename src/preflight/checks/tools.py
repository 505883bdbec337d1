"""Presence checks for the AWS CLI and Terraform."""

from __future__ import annotations

from preflight.checks.base import CheckContext, CheckReport, CheckStatus, check

AWS_CLI_INSTALL_URL = "https://aws.amazon.com/cli/"
TERRAFORM_INSTALL_URL = "https://www.terraform.io/downloads"


def _first_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[0] if lines else ""


@check("aws_cli", "Checking AWS CLI installation")
def check_aws_cli(ctx: CheckContext, report: CheckReport) -> None:
    path = ctx.runner.which(ctx.config.aws_cli)
    if path is None:
        report.fatal = True
        report.add(CheckStatus.FAIL, "AWS CLI is not installed")
        report.add(CheckStatus.WARN, f"Please install AWS CLI: {AWS_CLI_INSTALL_URL}")
        return

    ctx.aws_path = path
    # aws v1 prints its version on stderr
    version = ctx.aws("--version").output.strip()
    report.add(CheckStatus.PASS, "AWS CLI is installed", f"Version: {version}")


@check("terraform", "Checking Terraform installation")
def check_terraform(ctx: CheckContext, report: CheckReport) -> None:
    path = ctx.runner.which(ctx.config.terraform_cli)
    if path is None:
        report.add(CheckStatus.WARN, "Terraform is not installed")
        report.add(CheckStatus.INFO, f"Install from: {TERRAFORM_INSTALL_URL}")
        return

    version = _first_line(ctx.runner.run([path, "version"]).output)
    report.add(CheckStatus.PASS, "Terraform is installed", f"Version: {version}")
