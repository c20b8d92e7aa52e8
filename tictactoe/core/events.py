"""
Event definitions for the Tic-Tac-Toe system.

Events enable loose coupling between modules.
The engine publishes events without knowing who consumes them.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of events in the system."""

    GAME_STARTED = auto()
    TURN_CHANGED = auto()
    CELL_MARKED = auto()
    INVALID_CELL = auto()
    GAME_COMPLETED = auto()  # Winner is None on a draw
    GAME_RESET = auto()


@dataclass
class Event:
    """
    Base event structure.

    Attributes:
        type: The type of event
        data: Event-specific payload
        timestamp: When the event was created
        source: Which module created the event
    """

    type: EventType
    data: Any = None
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"

    def __str__(self) -> str:
        return f"[{self.source}] {self.type.name}: {self.data}"
