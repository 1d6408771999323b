"""
Data Models Layer.

This package contains the data structures passed between the pipeline stages:
the validated run configuration, manifest entries and session statistics.
"""

from .config import BasicCredentials, Credentials, RunConfig, credentials_from_cli
from .entry import RelativeEntry
from .stats import SessionStats

__all__ = [
    "BasicCredentials",
    "Credentials",
    "RelativeEntry",
    "RunConfig",
    "SessionStats",
    "credentials_from_cli",
]
