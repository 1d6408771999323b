import io
from pathlib import Path

import pytest
from rich.console import Console

from parallel_aria2.discovery import DiscoveryAdapter
from parallel_aria2.models.config import RunConfig


class FakeDiscovery(DiscoveryAdapter):
    """Returns a fixed URL list and records what it was called with."""

    name = "fake"

    def __init__(self, urls=None, error=None):
        self.urls = list(urls or [])
        self.error = error
        self.calls = []

    async def discover(self, root_url, credentials):
        self.calls.append((root_url, credentials))
        if self.error is not None:
            raise self.error
        return list(self.urls)


class FakeTransfer:
    def __init__(self, status=0):
        self.status = status
        self.calls = []

    async def transfer(self, manifest_path, credentials, extra_args=()):
        self.calls.append((Path(manifest_path), credentials, tuple(extra_args)))
        return self.status


@pytest.fixture
def quiet_console():
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides):
        values = {
            "root_url": "https://ex.com/data/",
            "manifest_path": tmp_path / "downloadlist.txt",
            "download_root": str(tmp_path / "mirror"),
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make
