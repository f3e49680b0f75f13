"""Pytest configuration and shared fixtures."""

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskpal.config import Config, ConfigModel  # noqa: E402
from taskpal.parser import CommandParser, DateTimeParser  # noqa: E402
from taskpal.storage import Storage  # noqa: E402

from fakes import FakeStorage  # noqa: E402


FIXED_TODAY = date(2026, 10, 18)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the default data directory at a temp dir and reset cached config."""
    home = tmp_path / "home"
    monkeypatch.setenv("TASKPAL_HOME", str(home))
    Config._instance = None
    yield home
    Config._instance = None


@pytest.fixture
def config(tmp_path):
    return ConfigModel(data_dir=str(tmp_path / "data"))


@pytest.fixture
def storage(config):
    return Storage(config)


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def date_parser():
    return DateTimeParser(today=lambda: FIXED_TODAY)


@pytest.fixture
def parser(date_parser):
    return CommandParser(date_parser)
