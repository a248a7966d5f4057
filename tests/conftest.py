"""Shared fixtures for mudsettings tests."""

import os

import pytest

# Only QtCore is used, but pytest-qt still creates a QApplication
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from mudsettings.config import JsonSettingsFile, SettingsStore


@pytest.fixture
def settings_file(tmp_path):
    """A JSON settings file in a throwaway config directory."""
    return JsonSettingsFile(tmp_path / "config")


@pytest.fixture
def store(settings_file):
    """A store backed by settings_file, closed after the test."""
    s = SettingsStore(settings_file)
    yield s
    s.close()


@pytest.fixture
def memory_store():
    """A store with no persistence at all."""
    return SettingsStore()
