"""Core infrastructure for the Tic-Tac-Toe system."""

from .bus import EventBus, get_event_bus, reset_event_bus
from .config import (
    AISettings,
    GameSettings,
    Settings,
    UISettings,
    get_settings,
    reset_settings,
)
from .errors import GameContextUnavailableError
from .events import Event, EventType
from .types import (
    ConnectedCell,
    GameContext,
    GamePhase,
    Grid,
    Move,
    Player,
    PlayerKind,
)


__all__ = [
    # Config
    "get_settings",
    "reset_settings",
    "Settings",
    "GameSettings",
    "AISettings",
    "UISettings",
    # Types
    "Player",
    "PlayerKind",
    "GamePhase",
    "Grid",
    "ConnectedCell",
    "Move",
    "GameContext",
    # Errors
    "GameContextUnavailableError",
    # Events
    "Event",
    "EventType",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
]
