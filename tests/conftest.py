"""Shared fixtures."""

import random

import pytest

from tictactoe.core.bus import EventBus
from tictactoe.core.config import reset_settings
from tictactoe.core.types import Player, PlayerKind


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_players():
    """Build a roster numbered 1..n from a marker string, e.g. ``"XO"``."""

    def build(markers: str, kind: PlayerKind = PlayerKind.HUMAN) -> list[Player]:
        return [Player(number=i + 1, marker=m, kind=kind) for i, m in enumerate(markers)]

    return build


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from .env files and leftover singletons."""
    monkeypatch.chdir(tmp_path)
    for key in ("GAME_MODE", "GAME_GRID_SIZE", "GAME_PLAYERS", "AI_SEED",
                "AI_OFFENSE_THRESHOLD", "AI_MOVE_DELAY", "UI_COLOR", "UI_HIGHLIGHT_CHAIN"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()
