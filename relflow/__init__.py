"""relflow: release orchestration for package repositories."""

__version__ = "0.1.0"
