"""Shared fixtures. pygame runs headless through SDL's dummy drivers."""
from __future__ import annotations

import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from chillflap.clock import ManualClock
from chillflap.data_models import GameConfig
from chillflap.game_loop import GameLoop
from chillflap.score_store import MemoryScoreStore


class RecordingAudio:
    """Audio player that remembers what it was asked to do."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def play(self) -> None:
        self.calls.append("play")

    def stop(self) -> None:
        self.calls.append("stop")


@pytest.fixture
def config() -> GameConfig:
    return GameConfig(screen_width=400, screen_height=800, pipe_gap=120)


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def store() -> MemoryScoreStore:
    return MemoryScoreStore()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def loop(config, store, clock, audio) -> GameLoop:
    return GameLoop(score_store=store, config=config, clock=clock, audio=audio,
                    rng=random.Random(1234))
