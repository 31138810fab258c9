"""Shared pytest fixtures."""

from __future__ import annotations

import os
import random

import pytest

from core.config import AppSettings
from tests.fakes import PRIMARY_URL, SECONDARY_URL


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep the user's real .env and DAILY_QUOTE_* variables out of tests."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("DAILY_QUOTE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        primary_url=PRIMARY_URL,
        secondary_url=SECONDARY_URL,
        fetch_timeout_seconds=0.2,
        _env_file=None,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
