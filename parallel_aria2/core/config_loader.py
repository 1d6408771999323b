"""
Builds the run configuration from command-line values and the environment.
"""

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from parallel_aria2.exceptions import ConfigurationError, UsageError
from parallel_aria2.models.config import (
    DEFAULT_DOWNLOAD_ROOT,
    DEFAULT_MANIFEST_FILE,
    RunConfig,
    credentials_from_cli,
)

log = logging.getLogger(__name__)

ENV_MANIFEST_FILE = "DOWNLOAD_LIST_FILE"
ENV_DOWNLOAD_ROOT = "DOWNLOAD_ROOT_DIR"
ENV_DISCOVERY = "PARALLEL_ARIA2_DISCOVERY"
ENV_LOG_LEVEL = "PARALLEL_ARIA2_LOG_LEVEL"


class ConfigLoader:
    """
    The only place that reads the environment. Components receive the
    resulting RunConfig instead.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def _get(self, key: str, default: str) -> str:
        # Empty values count as unset.
        return self.environ.get(key) or default

    def get_env_settings(self) -> dict[str, Any]:
        """Reads the environment-backed settings into a dictionary."""
        return {
            "manifest_path": Path(self._get(ENV_MANIFEST_FILE, DEFAULT_MANIFEST_FILE)),
            "download_root": self._get(ENV_DOWNLOAD_ROOT, DEFAULT_DOWNLOAD_ROOT),
            "discovery_backend": self._get(ENV_DISCOVERY, "wget").strip().lower(),
            "log_level": self._get(ENV_LOG_LEVEL, "INFO"),
        }

    def load(
        self,
        username: str | None,
        password: str | None,
        root_url: str | None,
        extra_args: Sequence[str] = (),
    ) -> RunConfig:
        """
        Validates the positional arguments and merges them with the environment.

        Raises:
            UsageError: If username, password or URL is missing.
            ConfigurationError: If a value fails validation.
        """
        if username is None or password is None or root_url is None:
            raise UsageError("Missing required arguments.")

        settings = self.get_env_settings()
        try:
            config = RunConfig(
                root_url=root_url,
                credentials=credentials_from_cli(username, password),
                extra_downloader_args=tuple(extra_args),
                **settings,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        log.debug(f"Loaded configuration: {config!r}")
        return config
