"""
Pydantic models for the run configuration.
Built once at startup and passed down to every component.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Username and password both set to this value selects anonymous mode.
ANONYMOUS_SENTINEL = "-"

DEFAULT_MANIFEST_FILE = "downloadlist.txt"
DEFAULT_DOWNLOAD_ROOT = "."

DiscoveryBackend = Literal["wget", "listing"]


class BasicCredentials(BaseModel):
    """HTTP basic-auth credentials shared by the crawler and the downloader."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)


# No credentials means anonymous access: neither adapter sends auth flags.
Credentials = BasicCredentials | None


def credentials_from_cli(username: str, password: str) -> Credentials:
    """
    Translates the positional username/password pair into credentials.
    Only the pair ('-', '-') means anonymous; any other combination is used as-is.
    """
    if username == ANONYMOUS_SENTINEL and password == ANONYMOUS_SENTINEL:
        return None
    return BasicCredentials(username=username, password=password)


class RunConfig(BaseModel):
    """A validated, immutable configuration for a single invocation."""

    model_config = ConfigDict(frozen=True)

    root_url: str
    credentials: BasicCredentials | None = None
    extra_downloader_args: tuple[str, ...] = ()
    manifest_path: Path = Path(DEFAULT_MANIFEST_FILE)
    download_root: str = DEFAULT_DOWNLOAD_ROOT
    discovery_backend: DiscoveryBackend = "wget"
    log_level: str = "INFO"

    @field_validator("root_url")
    @classmethod
    def validate_root_url(cls, v: str) -> str:
        """Rejects a blank root URL."""
        v = v.strip()
        if not v:
            raise ValueError("Root URL cannot be empty.")
        return v

    @field_validator("download_root")
    @classmethod
    def validate_download_root(cls, v: str) -> str:
        """Falls back to the current directory when the value is blank."""
        return v or DEFAULT_DOWNLOAD_ROOT

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures the level is one the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @property
    def is_anonymous(self) -> bool:
        return self.credentials is None

    @property
    def required_commands(self) -> tuple[str, ...]:
        """External commands that must be in PATH for this run."""
        if self.discovery_backend == "wget":
            return ("wget", "aria2c")
        return ("aria2c",)
