"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class ParallelAria2Error(Exception):
    """Base exception for all application-specific errors."""


class UsageError(ParallelAria2Error):
    """Raised when required command-line arguments are missing."""


class ConfigurationError(ParallelAria2Error):
    """Raised when environment settings fail validation."""


class DependencyError(ParallelAria2Error):
    """Raised when a required external command is not available in PATH."""


class DiscoveryError(ParallelAria2Error):
    """
    Raised when crawling the root URL yields no URLs at all.

    The cause is ambiguous: a wrong URL, rejected credentials and a genuinely
    empty tree all look the same from the outside.
    """


class FilesystemError(ParallelAria2Error):
    """Raised when the download root or a per-entry directory cannot be created."""


class ManifestEmptyError(ParallelAria2Error):
    """Raised when every discovered URL was filtered out of the manifest."""


class TransferError(ParallelAria2Error):
    """Raised when the external downloader exits with a non-zero status."""

    def __init__(self, exit_status: int, message: str | None = None) -> None:
        self.exit_status = exit_status
        super().__init__(message or f"aria2c exited with status {exit_status}.")
