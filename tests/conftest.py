"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from design_lab.config import Config, HOME_ENV_VAR  # noqa: E402
from design_lab.token_engine import MemoryStyleSink, get_catalog  # noqa: E402


@pytest.fixture
def catalog():
    """The built-in catalog."""
    return get_catalog()


@pytest.fixture
def memory_sink():
    return MemoryStyleSink()


@pytest.fixture
def design_home(tmp_path, monkeypatch):
    """Point the data directory at a temporary folder and drop cached config."""
    home = tmp_path / "design_home"
    monkeypatch.setenv(HOME_ENV_VAR, str(home))
    Config._instance = None
    yield home
    Config._instance = None
