"""Turn rotation."""

import random


class TurnScheduler:
    """Tracks whose turn it is.

    Starts unset. The first ``advance()`` picks a random seat, every later
    one moves to the next seat, wrapping around the roster.
    """

    def __init__(self, roster_size: int, rng: random.Random | None = None):
        if roster_size < 1:
            raise ValueError(f"Roster size must be >= 1, got {roster_size}")
        self.roster_size = roster_size
        self.rng = rng or random.Random()
        self._index: int | None = None

    @property
    def current_index(self) -> int | None:
        return self._index

    @property
    def is_set(self) -> bool:
        return self._index is not None

    def advance(self) -> int:
        """Move to the next seat and return its roster index."""
        if self._index is None:
            self._index = self.rng.randrange(self.roster_size)
        else:
            self._index = (self._index + 1) % self.roster_size
        return self._index

    def reset(self) -> None:
        """Back to unset; the next ``advance()`` picks a random seat again."""
        self._index = None
