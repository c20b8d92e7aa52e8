"""
CLI for Tic-Tac-Toe.

Usage:
    python -m tictactoe --help
    python -m tictactoe play
    python -m tictactoe play --mode frenzy --grid-size 5 --players 3
    python -m tictactoe watch --mode frenzy --players 4 --grid-size 6 --seed 7
"""

import logging
import random
import time
from collections.abc import Callable
from typing import Annotated

import typer

from ..ai.heuristic import HeuristicAI
from ..ai.interface import CellSelector
from ..core.config import get_settings
from ..core.types import GameContext, Grid, Move, Player, PlayerKind, is_valid_marker
from ..game.connectivity import find_connected_cell
from ..game.engine import GameEngine
from ..game.rules import GAME_MODES, GameModeRule, GridSizePolicy, get_mode


app = typer.Typer(
    name="tictactoe",
    help="N-player Tic-Tac-Toe with Classic and Frenzy modes.",
    add_completion=False,
)

MAIN_MENU = "Tic-Tac-Toe\n-----------\n" + "".join(
    f"{i}. {mode.title}\n" for i, mode in enumerate(GAME_MODES, start=1)
)

YES = {"y", "yes"}
NO = {"n", "no"}

CLEAR_SCREEN = "\033[H\033[2J\033[3J"


# ─────────────────────────────────────────────────────────────
# RENDERING
# ─────────────────────────────────────────────────────────────


def grid_layout_text(grid: Grid, color: bool = True, highlight_chain: int = 3) -> str:
    """Render the grid; empty cells show their number, runs are cyan."""
    separator = "-----" * grid.size + "-\n"
    lines = []

    for row in range(grid.size):
        lines.append(separator)
        cells = []
        for column in range(grid.size):
            marker = grid.marker_at(row, column)
            text = f"{marker or grid.cell_number(row, column):>2}"

            if (
                color
                and marker is not None
                and find_connected_cell(grid, row, column, marker, highlight_chain).total_connected >= 3
            ):
                text = typer.style(text, fg=typer.colors.BRIGHT_CYAN)
            cells.append(text)
        lines.append("| " + " | ".join(cells) + " | \n")

    lines.append(separator)
    return "".join(lines)


def score_text(players: list[Player]) -> str:
    return "Score: \n" + "".join(f"{player.label}: {player.score}\n" for player in players)


def player_turn_text(player: Player) -> str:
    return f"{player.label} turn...\n"


def result_text(winner: Player | None) -> str:
    if winner is None:
        return "Game over! The game ends with draw.\n"
    return f"Game over! {winner.label} has won!\n"


def move_text(move: Move, player: Player) -> str:
    text = f"{player.label} selected '{move.cell}'"
    if move.score_gained > 0:
        text += f", gained +{move.score_gained} points"
    return text


def _clear() -> None:
    typer.echo(CLEAR_SCREEN, nl=False)


def board_text(engine: GameEngine, history: list[str]) -> str:
    """Header, move history, scores and grid, as shown every turn."""
    settings = get_settings()
    return (
        engine.rule.header()
        + "\n"
        + "".join(f"{line}\n\n" for line in history)
        + score_text(engine.players)
        + "\n"
        + grid_layout_text(engine.grid, settings.ui.color, settings.ui.highlight_chain)
    )


# ─────────────────────────────────────────────────────────────
# PROMPTS
# ─────────────────────────────────────────────────────────────


def _prompt_until(message: str, parse: Callable[[str], object | None], error: str):
    """Prompt until ``parse`` returns something other than None."""
    while True:
        value = parse(typer.prompt(message, default="", show_default=False).strip())
        if value is not None:
            return value
        typer.echo(f"\n** {error}\n")


def _parse_int(raw: str, minimum: int) -> int | None:
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= minimum else None


class PromptSelector(CellSelector):
    """Human player: asks for a cell number on the terminal."""

    def select_cell(self, context: GameContext) -> int:
        def parse(raw: str) -> int | None:
            try:
                cell = int(raw)
            except ValueError:
                return None
            return cell if cell in context.available_cells else None

        return _prompt_until("Select cell by number", parse, "Invalid cell number, please reselect!")

    def get_name(self) -> str:
        return "Terminal prompt"


def prompt_mode() -> GameModeRule | None:
    """Main menu. Returns None when the user quits with 'q'."""
    typer.echo(MAIN_MENU)

    def parse(raw: str) -> GameModeRule | str | None:
        if raw.lower() == "q":
            return "q"
        index = _parse_int(raw, 1)
        if index is None or index > len(GAME_MODES):
            return None
        return GAME_MODES[index - 1]

    choice = _prompt_until("Select game mode (q to quit)", parse, "Invalid game mode, please reselect!")
    return None if choice == "q" else choice


def prompt_grid_size() -> int:
    return _prompt_until(
        "Input grid size (min 3)",
        lambda raw: _parse_int(raw, Grid.MIN_SIZE),
        "Invalid grid size, please reinput!",
    )


def prompt_player_count() -> int:
    return _prompt_until(
        "Input number of players (min 2)",
        lambda raw: _parse_int(raw, 2),
        "Invalid number of players, please reinput!",
    )


def prompt_players(total: int) -> list[Player]:
    """Ask each player for a unique marker and whether it is a bot."""
    players: list[Player] = []
    used_markers: set[str] = set()

    while len(players) < total:
        number = len(players) + 1
        typer.echo(f"\n{len(players)}/{total} Players are set.\nSetting up player-{number}...")

        marker = _prompt_until(
            "Marker (1 char)",
            lambda raw: raw if is_valid_marker(raw) and raw not in used_markers else None,
            "Invalid marker, please reinput!",
        )
        used_markers.add(marker)

        def parse_kind(raw: str) -> PlayerKind | None:
            answer = raw.lower()
            if answer in YES:
                return PlayerKind.BOT
            if answer in NO:
                return PlayerKind.HUMAN
            return None

        kind = _prompt_until("As a bot? (y/n)", parse_kind, "Invalid player option, please reselect!")
        player = Player(number=number, marker=marker, kind=kind)
        players.append(player)
        typer.echo(f"{player.label} is ready!")

    return players


def prompt_rematch() -> bool:
    return typer.prompt("Rematch? (y/n)", default="", show_default=False).strip().lower() in YES


# ─────────────────────────────────────────────────────────────
# GAME LOOP
# ─────────────────────────────────────────────────────────────


def run_game(
    engine: GameEngine,
    selectors: dict[PlayerKind, CellSelector],
    bot_delay: float = 0.0,
) -> Player | None:
    """Play one round until the mode rule says it is over.

    Returns:
        The winner, or None on a draw
    """
    history: list[str] = []

    while not engine.is_game_over:
        player = engine.current_player
        if player is None:
            player = engine.start()

        _clear()
        typer.echo(board_text(engine, history))
        typer.echo(player_turn_text(player))

        cell = engine.request_cell(selectors)
        move = engine.play_turn(cell)
        if move is None:
            continue

        history.append(move_text(move, player))
        if player.kind == PlayerKind.BOT and bot_delay > 0:
            time.sleep(bot_delay)

    _clear()
    typer.echo(board_text(engine, history))
    winner = engine.winner()
    typer.echo(result_text(winner))
    return winner


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _make_rng(seed: int | None) -> random.Random:
    if seed is None:
        seed = get_settings().ai.seed
    return random.Random(seed)


@app.command()
def play(
    mode: Annotated[str | None, typer.Option("--mode", "-m", help="classic or frenzy")] = None,
    grid_size: Annotated[int | None, typer.Option("--grid-size", "-g", help="Grid size for Frenzy (min 3)")] = None,
    players: Annotated[int | None, typer.Option("--players", "-n", help="Number of players (min 2)")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed for turn order and bots")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """
    Play an interactive game with any mix of humans and bots.

    Examples:
        play                              # menus for everything
        play --mode frenzy -g 5 -n 3      # skip the setup questions
    """
    _configure_logging(verbose)
    settings = get_settings()
    rng = _make_rng(seed)
    selectors: dict[PlayerKind, CellSelector] = {
        PlayerKind.HUMAN: PromptSelector(),
        PlayerKind.BOT: HeuristicAI(offense_threshold=settings.ai.offense_threshold),
    }

    try:
        rule = _resolve_mode(mode)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e

    while rule is not None:
        typer.echo(rule.header())
        size = grid_size
        if rule.grid_size_policy == GridSizePolicy.EXPLICIT and size is None:
            size = prompt_grid_size()
        roster = prompt_players(players if players is not None else prompt_player_count())

        try:
            engine = GameEngine(roster, rule, grid_size=size, rng=rng)
        except ValueError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(1) from e

        engine.start()
        while True:
            run_game(engine, selectors, settings.ai.move_delay)
            if not prompt_rematch():
                break
            engine.reset()

        # Back to the main menu with no preset options
        grid_size = players = None
        _clear()
        rule = prompt_mode()

    typer.echo("Bye!")


def _resolve_mode(mode: str | None) -> GameModeRule | None:
    if mode is None:
        return prompt_mode()
    return get_mode(mode)


@app.command()
def watch(
    mode: Annotated[str | None, typer.Option("--mode", "-m", help="classic or frenzy")] = None,
    players: Annotated[int | None, typer.Option("--players", "-n", help="Number of bots (min 2)")] = None,
    grid_size: Annotated[int | None, typer.Option("--grid-size", "-g", help="Grid size for Frenzy (min 3)")] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed for turn order and bots")] = None,
    delay: Annotated[float | None, typer.Option("--delay", "-d", help="Seconds between moves")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """Watch bots play one game against each other."""
    _configure_logging(verbose)
    settings = get_settings()
    markers = "XOABCDEFGHIJKLMNPQRSTUVWYZ"

    try:
        rule = get_mode(mode or settings.game.mode)
        count = players if players is not None else settings.game.players
        if not 2 <= count <= len(markers):
            raise ValueError(f"Number of bots must be between 2 and {len(markers)}, got {count}")
        roster = [Player(number=i + 1, marker=markers[i], kind=PlayerKind.BOT) for i in range(count)]
        engine = GameEngine(
            roster,
            rule,
            grid_size=grid_size if grid_size is not None else settings.game.grid_size,
            rng=_make_rng(seed),
        )
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e

    ai = HeuristicAI(offense_threshold=settings.ai.offense_threshold)
    typer.echo(f"Bots: {ai.get_name()}")
    engine.start()

    try:
        run_game(
            engine,
            {PlayerKind.BOT: ai},
            delay if delay is not None else settings.ai.move_delay,
        )
    except KeyboardInterrupt:
        typer.echo("\nStopped.")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
