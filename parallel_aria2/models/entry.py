"""
The manifest entry produced by the relative path mapper.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RelativeEntry:
    """A discovered file URL bound to the local directory it will be saved in."""

    remote_url: str
    relative_dir: str
    file_name: str
    local_dir: str

    def manifest_block(self) -> str:
        """
        Renders the entry in aria2c input-file syntax: the URL on its own line,
        followed by an option line that starts with a single space.
        """
        return f"{self.remote_url}\n dir={self.local_dir}\n"
