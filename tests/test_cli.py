import pytest
from typer.testing import CliRunner

from parallel_aria2 import __version__
from parallel_aria2.cli import app as app_module
from parallel_aria2.exceptions import DiscoveryError, TransferError
from parallel_aria2.models.stats import SessionStats

runner = CliRunner()


class RecordingSession:
    """Stands in for MirrorSession and records the config it received."""

    instances = []
    outcome = None

    def __init__(self, config, console=None):
        self.config = config
        self.stats = SessionStats()
        RecordingSession.instances.append(self)

    async def run(self):
        if RecordingSession.outcome is not None:
            raise RecordingSession.outcome
        self.stats.transfer_status = 0
        return 0


@pytest.fixture(autouse=True)
def fake_session(monkeypatch):
    RecordingSession.instances = []
    RecordingSession.outcome = None
    monkeypatch.setattr(app_module, "MirrorSession", RecordingSession)
    for key in (
        "DOWNLOAD_LIST_FILE",
        "DOWNLOAD_ROOT_DIR",
        "PARALLEL_ARIA2_DISCOVERY",
        "PARALLEL_ARIA2_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    return RecordingSession


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_exits_zero(flag):
    result = runner.invoke(app_module.app, [flag])

    assert result.exit_code == 0
    assert "USERNAME" in result.output
    assert RecordingSession.instances == []


def test_version():
    result = runner.invoke(app_module.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.parametrize("args", [[], ["alice"], ["alice", "s3cret"]])
def test_missing_arguments_exit_one(args):
    result = runner.invoke(app_module.app, args)

    assert result.exit_code == 1
    assert RecordingSession.instances == []


def test_successful_run_passes_extra_args_through():
    result = runner.invoke(
        app_module.app,
        ["alice", "s3cret", "https://ex.com/data/", "--max-tries=3", "-x4"],
    )

    assert result.exit_code == 0
    config = RecordingSession.instances[0].config
    assert config.root_url == "https://ex.com/data/"
    assert config.credentials.username == "alice"
    assert config.extra_downloader_args == ("--max-tries=3", "-x4")


def test_anonymous_sentinel():
    result = runner.invoke(app_module.app, ["-", "-", "https://ex.com/data/"])

    assert result.exit_code == 0
    assert RecordingSession.instances[0].config.credentials is None


def test_environment_is_read_once_into_config(tmp_path):
    result = runner.invoke(
        app_module.app,
        ["-", "-", "https://ex.com/data/"],
        env={
            "DOWNLOAD_LIST_FILE": str(tmp_path / "files.txt"),
            "DOWNLOAD_ROOT_DIR": str(tmp_path / "mirror"),
        },
    )

    assert result.exit_code == 0
    config = RecordingSession.instances[0].config
    assert config.manifest_path == tmp_path / "files.txt"
    assert config.download_root == str(tmp_path / "mirror")


def test_invalid_backend_exits_one():
    result = runner.invoke(
        app_module.app,
        ["-", "-", "https://ex.com/data/"],
        env={"PARALLEL_ARIA2_DISCOVERY": "curl"},
    )

    assert result.exit_code == 1
    assert RecordingSession.instances == []


def test_fatal_error_exits_one():
    RecordingSession.outcome = DiscoveryError("No URLs were discovered.")

    result = runner.invoke(app_module.app, ["-", "-", "https://ex.com/data/"])

    assert result.exit_code == 1


def test_transfer_status_becomes_exit_code():
    RecordingSession.outcome = TransferError(7)

    result = runner.invoke(app_module.app, ["-", "-", "https://ex.com/data/"])

    assert result.exit_code == 7


def test_transfer_killed_by_signal_maps_to_shell_convention():
    RecordingSession.outcome = TransferError(-15)

    result = runner.invoke(app_module.app, ["-", "-", "https://ex.com/data/"])

    assert result.exit_code == 143


@pytest.mark.parametrize("password", ["-hunter2", "--help", "-h", "--version"])
def test_password_starting_with_dash_is_taken_literally(password):
    result = runner.invoke(app_module.app, ["alice", password, "https://ex.com/data/"])

    assert result.exit_code == 0
    config = RecordingSession.instances[0].config
    assert config.credentials.username == "alice"
    assert config.credentials.password == password


def test_arguments_after_url_are_forwarded_verbatim():
    result = runner.invoke(
        app_module.app,
        ["-", "-", "https://ex.com/data/", "--max-tries=3", "--", "-h"],
    )

    assert result.exit_code == 0
    assert RecordingSession.instances[0].config.extra_downloader_args == (
        "--max-tries=3",
        "--",
        "-h",
    )
