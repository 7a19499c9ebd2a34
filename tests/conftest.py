"""Shared test fixtures for the step test suite."""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

BUILD_STARTED = datetime(2026, 2, 10, 14, 0, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic ClockPort: ``sleep`` advances ``now`` unless frozen."""

    def __init__(self, start: datetime = BUILD_STARTED, *, frozen: bool = False) -> None:
        self.current = start
        self.frozen = frozen
        self.sleeps: list[float] = []

    def now(self) -> datetime:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if not self.frozen:
            self.current += timedelta(seconds=seconds)


def write_artifact(path: Path, content: bytes = b"artifact", modified_at: datetime = BUILD_STARTED) -> Path:
    """Create *path* (with parents) and set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    ts = modified_at.timestamp()
    os.utime(path, (ts, ts))
    return path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def frozen_clock() -> FakeClock:
    return FakeClock(frozen=True)


@pytest.fixture
def deploy_dir(tmp_path: Path) -> Path:
    path = tmp_path / "deploy"
    path.mkdir()
    return path


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def build_started() -> datetime:
    return BUILD_STARTED


@pytest.fixture
def make_artifact():
    """Factory fixture wrapping ``write_artifact``."""
    return write_artifact
