"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from rehumanize.config import RehumanizeConfig, ServiceConfig, load_config


class SequenceRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, *values: float) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


class SleepRecorder:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def default_config(tmp_path: Path) -> RehumanizeConfig:
    """Load the bundled defaults, ignoring any real user config."""
    return load_config(user_config_path=tmp_path / "missing.toml")


@pytest.fixture
def test_config() -> RehumanizeConfig:
    """Config pointing at a fake host with a known API key."""
    return RehumanizeConfig(
        service=ServiceConfig(base_url="https://humanize.test", api_key="test-key"),
    )


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_rng() -> type[SequenceRandom]:
    """Factory for random sources with pinned draws."""
    return SequenceRandom
