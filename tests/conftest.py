"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from primo_cli.config import Config, ConfigModel  # noqa: E402
from primo_cli.storage import Storage, reset_storage  # noqa: E402


@pytest.fixture
def config(tmp_path):
    """A configuration whose files all live under a temporary directory."""
    return ConfigModel(
        data_dir=str(tmp_path / "data"),
        backup_dir=str(tmp_path / "data" / "backups"),
        show_banner=False,
        no_color=True,
    )


@pytest.fixture
def storage(config):
    return Storage(config)


@pytest.fixture(autouse=True)
def reset_globals():
    """Keep cached config and storage from leaking between tests."""
    Config.reset()
    reset_storage()
    yield
    Config.reset()
    reset_storage()
