"""Shared fixtures for fuzzy-clone tests."""

import os
import sys

import pytest

# Ensure tests/fakes/ is on sys.path so test files can import the fakes
# unambiguously (avoids conftest module name collisions).
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "fakes"))


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point HOME and XDG_CACHE_HOME into tmp_path and drop fz environment variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    for name in (
        "FUZZY_CLONE_CONFIG",
        "USE_CWD",
        "FUZZY_CLONE_FLATTEN_DESTINATION",
        "FUZZY_CLONE_ROOT",
        "FUZZY_CLONE_GITHUB_TOKEN",
        "GITHUB_ACCESS_TOKEN",
        "FUZZY_CLONE_CACHE_COOLDOWN",
        "FUZZY_CLONE_CLONE_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return home
