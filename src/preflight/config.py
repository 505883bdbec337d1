from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from expandvars import expand
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CREDENTIALS_FILE = "${AWS_SHARED_CREDENTIALS_FILE:-~/.aws/credentials}"
DEFAULT_CONFIG_FILE = "${AWS_CONFIG_FILE:-~/.aws/config}"


class PreflightConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    aws_cli: str = "aws"
    terraform_cli: str = "terraform"
    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    config_file: str = DEFAULT_CONFIG_FILE
    access_key_preview: int = Field(default=12, ge=0)
    secret_key_preview: int = Field(default=5, ge=0)
    skew_marker: str = "RequestTimeTooSkewed"
    recheck_identity: bool = False
    command_timeout: float | None = Field(default=None, gt=0)

    @field_validator("aws_cli", "terraform_cli", "skew_marker")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    def credentials_path(self, environ: Mapping[str, str] | None = None) -> Path:
        return resolve_path(self.credentials_file, environ)

    def config_path(self, environ: Mapping[str, str] | None = None) -> Path:
        return resolve_path(self.config_file, environ)


def resolve_path(value: str, environ: Mapping[str, str] | None = None) -> Path:
    """Expand ${VAR} / ${VAR:-default} references, then a leading ~."""
    env = os.environ if environ is None else environ
    expanded = expand(value, environ=env)
    if expanded.startswith("~") and env.get("HOME"):
        expanded = env["HOME"] + expanded[1:]
    return Path(expanded).expanduser()


def load_config(path: Path) -> PreflightConfig:
    """Load and validate a preflight config from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return PreflightConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    return PreflightConfig(**raw)
