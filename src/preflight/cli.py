from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(
    name="preflight",
    help="Verify AWS credentials before running Terraform",
)


@app.command()
def run(
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to a preflight YAML config"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to stderr"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Also write debug output to this file"
    ),
):
    """Run every credential check in order and report the result."""
    import yaml
    from pydantic import ValidationError

    from preflight.config import PreflightConfig, load_config
    from preflight.runner import Runner
    from preflight.verbose import setup_logger

    if config is None:
        preflight_config = PreflightConfig()
    else:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            preflight_config = load_config(config_path)
        except (yaml.YAMLError, ValidationError, ValueError) as e:
            typer.echo(f"Error: invalid config {config}: {e}", err=True)
            raise typer.Exit(1)

    logger = setup_logger(
        Path(debug_log) if debug_log else None,
        verbose=verbose,
        logger_name="preflight",
    )

    outcome = Runner(config=preflight_config, logger=logger).execute()

    if outcome.exit_code != 0:
        raise typer.Exit(outcome.exit_code)
