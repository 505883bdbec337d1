"""Pre-flight checks for AWS credentials before running Terraform."""

__version__ = "0.1.0"
