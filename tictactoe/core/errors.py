"""Exceptions raised by the game core."""


class GameContextUnavailableError(RuntimeError):
    """Raised when a selection is requested without a live game context.

    This always points at a lifecycle bug in the caller (e.g. asking for a
    move before ``GameEngine.start()``), so it is never caught by the core.
    """
