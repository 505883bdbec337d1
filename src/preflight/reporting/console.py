"""Colorized console rendering of check reports."""

from __future__ import annotations

import typer

from preflight.checks.base import CheckReport, CheckStatus

NEXT_STEPS = (
    "Navigate to a lesson directory (e.g., cd lessons/day03/)",
    "Initialize Terraform: terraform init",
    "Plan your infrastructure: terraform plan",
    "Apply changes: terraform apply",
)

_ICONS = {
    CheckStatus.PASS: "✅",
    CheckStatus.FAIL: "❌",
    CheckStatus.WARN: "⚠️ ",
    CheckStatus.INFO: "ℹ️ ",
}

_COLORS = {
    CheckStatus.PASS: typer.colors.GREEN,
    CheckStatus.FAIL: typer.colors.RED,
    CheckStatus.WARN: typer.colors.YELLOW,
    CheckStatus.INFO: typer.colors.YELLOW,
}

_BOX_WIDTH = 52


def banner(*lines: str) -> None:
    typer.secho("╔" + "═" * _BOX_WIDTH + "╗", fg=typer.colors.BLUE)
    for line in lines:
        typer.secho(f"║{line.center(_BOX_WIDTH)}║", fg=typer.colors.BLUE)
    typer.secho("╚" + "═" * _BOX_WIDTH + "╝", fg=typer.colors.BLUE)
    typer.echo("")


def print_header() -> None:
    banner(
        "AWS Credential Verification",
        "Diagnose authentication issues before Terraform",
    )


def print_check_title(index: int, total: int, title: str) -> None:
    typer.secho(f"[{index}/{total}] {title}...", fg=typer.colors.BLUE)


def print_report(report: CheckReport) -> None:
    for result in report.results:
        typer.secho(
            f"{_ICONS[result.status]} {result.message}", fg=_COLORS[result.status]
        )
        for line in result.details:
            typer.echo(f"    {line}")
    typer.echo("")


def print_summary() -> None:
    """Only reached when every check ran, so the credentials are valid."""
    banner("VERIFICATION SUMMARY")
    typer.secho(
        f"{_ICONS[CheckStatus.PASS]} All checks passed! You're ready to use Terraform with AWS.",
        fg=typer.colors.GREEN,
    )
    typer.echo("")
    typer.secho("Next steps:", fg=typer.colors.GREEN)
    for i, step in enumerate(NEXT_STEPS, start=1):
        typer.echo(f"  {i}. {step}")
    typer.echo("")
    typer.secho("Happy Terraforming! 🚀", fg=typer.colors.GREEN)
