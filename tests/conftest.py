"""Shared fixtures: plain-text output and an isolated data directory."""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'scripts'))

from store import Store


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv('NO_COLOR', '1')
    monkeypatch.delenv('FORCE_COLOR', raising=False)
    monkeypatch.setenv('WEEKCAL_DIR', str(tmp_path / 'data'))


@pytest.fixture
def store(tmp_path):
    return Store(tmp_path / 'data')
