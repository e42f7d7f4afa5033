"""Shared pytest fixtures for timetype tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import timedelta, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sqlite_engine() -> Generator[Engine]:
    """In-memory SQLite engine."""
    engine = create_engine("sqlite://", echo=False)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def plus_three() -> timezone:
    """A fixed-offset zone that needs no tz database."""
    return timezone(timedelta(hours=3))


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config env vars set."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "TIMETYPE_CONFIG",
        "TIMETYPE_ZONE",
        "TIMETYPE_VERBOSE",
        "TIMETYPE_JSON_OUTPUT",
        "TIMETYPE_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    tt = logging.getLogger("timetype")
    tt_level = tt.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    tt.setLevel(tt_level)
