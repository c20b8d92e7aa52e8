"""Tests for the game engine (board, scoring, turn flow)."""

import random

import pytest

from tictactoe.ai.interface import CellSelector
from tictactoe.core.errors import GameContextUnavailableError
from tictactoe.core.events import EventType
from tictactoe.core.types import GamePhase, PlayerKind
from tictactoe.game.engine import GameEngine
from tictactoe.game.rules import CLASSIC, FRENZY


class RecordingSelector(CellSelector):
    """Returns the first available cell and remembers every context."""

    def __init__(self):
        self.contexts = []

    def select_cell(self, context):
        self.contexts.append(context)
        return context.available_cells[0]

    def get_name(self):
        return "Recording"


def play(engine, cells):
    return [engine.play_turn(cell) for cell in cells]


class TestEngineSetup:

    def test_classic_grid_size(self, make_players, bus):
        engine = GameEngine(make_players("XOA"), CLASSIC, bus=bus)
        assert engine.grid_size == 4

    def test_frenzy_grid_size(self, make_players, bus):
        engine = GameEngine(make_players("XO"), FRENZY, grid_size=6, bus=bus)
        assert engine.grid_size == 6

    def test_frenzy_without_size(self, make_players, bus):
        with pytest.raises(ValueError):
            GameEngine(make_players("XO"), FRENZY, bus=bus)

    def test_needs_two_players(self, make_players, bus):
        with pytest.raises(ValueError):
            GameEngine(make_players("X"), bus=bus)

    def test_duplicate_markers(self, make_players, bus):
        with pytest.raises(ValueError):
            GameEngine(make_players("XX"), bus=bus)

    def test_numbers_must_follow_turn_order(self, make_players, bus):
        players = make_players("XO")
        players.reverse()
        with pytest.raises(ValueError):
            GameEngine(players, bus=bus)

    def test_start_seeds_turn_from_rng(self, make_players, bus):
        expected = random.Random(9).randrange(3)
        engine = GameEngine(make_players("XOA"), rng=random.Random(9), bus=bus)
        assert engine.phase == GamePhase.WAITING_FOR_START
        first = engine.start()
        assert first.number == expected + 1
        assert engine.phase == GamePhase.IN_PROGRESS
        assert bus.get_event_log()[-1].type == EventType.GAME_STARTED


class TestMarking:

    def test_mark_before_start_fails(self, make_players, bus):
        engine = GameEngine(make_players("XO"), bus=bus)
        assert engine.mark_cell(0) is False
        assert engine.grid.available_cells() == list(range(9))

    def test_occupied_cell(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), rng=rng, bus=bus)
        engine.start()
        assert engine.mark_cell(4) is True
        before = engine.grid
        assert engine.mark_cell(4) is False
        assert engine.grid == before
        assert bus.get_event_log()[-1].type == EventType.INVALID_CELL

    @pytest.mark.parametrize("cell", [-1, 9, 100])
    def test_out_of_range(self, make_players, bus, rng, cell):
        engine = GameEngine(make_players("XO"), rng=rng, bus=bus)
        engine.start()
        assert engine.mark_cell(cell) is False
        assert engine.grid.available_cells() == list(range(9))

    def test_rejected_turn_keeps_player(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), rng=rng, bus=bus)
        engine.start()
        engine.play_turn(0)
        current = engine.current_player
        assert engine.play_turn(0) is None
        assert engine.current_player is current

    def test_mark_scores_total_connected(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), FRENZY, grid_size=5, rng=rng, bus=bus)
        engine.start()
        player = engine.current_player
        for cell in (0, 1):
            engine.mark_cell(cell)
        assert player.score == 0
        engine.mark_cell(2)
        assert player.score == 3
        assert player.last_score == 0
        assert player.score_gained == 3


class TestClassicFlow:

    def test_completes_on_first_scoring_move(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), CLASSIC, rng=rng, bus=bus)
        first = engine.start()

        moves = play(engine, [0, 3, 1, 4])
        assert all(move is not None for move in moves)
        assert not engine.is_complete()
        assert not engine.is_game_over

        last = engine.play_turn(2)
        assert last.player_number == first.number
        assert last.score_gained == 3
        assert engine.is_game_over
        assert engine.winner() is first

        completed = [e for e in bus.get_event_log() if e.type == EventType.GAME_COMPLETED]
        assert completed[-1].data["winner"] == first.number

    def test_turns_alternate(self, make_players, bus, rng):
        engine = GameEngine(make_players("XOA"), CLASSIC, rng=rng, bus=bus)
        first = engine.start()
        engine.play_turn(0)
        assert engine.current_player.number == first.number % 3 + 1

    def test_play_after_game_over(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), CLASSIC, rng=rng, bus=bus)
        engine.start()
        play(engine, [0, 3, 1, 4, 2])
        with pytest.raises(GameContextUnavailableError):
            engine.play_turn(5)

    def test_mark_after_game_over_is_rejected(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), CLASSIC, rng=rng, bus=bus)
        engine.start()
        play(engine, [0, 3, 1, 4, 2])
        before = engine.grid
        scores = [p.score for p in engine.players]

        assert engine.mark_cell(6) is False
        assert engine.grid == before
        assert [p.score for p in engine.players] == scores
        assert bus.get_event_log()[-1].type == EventType.INVALID_CELL


class TestFrenzyFlow:

    def test_scores_accumulate_until_grid_full(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), FRENZY, grid_size=3, rng=rng, bus=bus)
        first = engine.start()
        second = engine.players[first.number % 2]

        play(engine, range(8))
        assert first.score == 3  # diagonal 2-4-6
        assert not engine.is_game_over

        engine.play_turn(8)  # diagonal 0-4-8
        assert engine.is_game_over
        assert first.score == 6
        assert second.score == 0
        assert engine.winner() is first
        assert [move.cell for move in engine.history] == list(range(9))

    def test_draw_on_tied_scores(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), FRENZY, grid_size=3, rng=rng, bus=bus)
        engine.start()
        for player in engine.players:
            player.set_score(3)
        assert engine.winner() is None


class TestReset:

    def test_reset_clears_round(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), CLASSIC, rng=rng, bus=bus)
        engine.start()
        play(engine, [0, 3, 1, 4, 2])
        assert engine.is_game_over

        first = engine.reset()
        assert engine.phase == GamePhase.IN_PROGRESS
        assert engine.current_player is first
        assert engine.history == []
        assert engine.grid.available_cells() == list(range(9))
        assert all(p.score == 0 and p.last_score == 0 for p in engine.players)

        types = [e.type for e in bus.get_event_log(limit=2)]
        assert types == [EventType.GAME_RESET, EventType.GAME_STARTED]


class TestSelection:

    def test_request_before_start(self, make_players, bus):
        engine = GameEngine(make_players("XO"), bus=bus)
        with pytest.raises(GameContextUnavailableError):
            engine.request_cell({PlayerKind.HUMAN: RecordingSelector()})
        with pytest.raises(GameContextUnavailableError):
            engine.context()

    def test_dispatch_by_kind(self, make_players, bus, rng):
        players = make_players("XO")
        players[1].kind = PlayerKind.BOT
        human, bot = RecordingSelector(), RecordingSelector()
        engine = GameEngine(players, rng=rng, bus=bus)
        engine.start()

        for _ in range(2):
            cell = engine.request_cell({PlayerKind.HUMAN: human, PlayerKind.BOT: bot})
            engine.play_turn(cell)

        assert len(human.contexts) == 1
        assert len(bot.contexts) == 1
        assert human.contexts[0].acting.kind == PlayerKind.HUMAN
        assert bot.contexts[0].acting.kind == PlayerKind.BOT

    def test_missing_selector(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), rng=rng, bus=bus)
        engine.start()
        with pytest.raises(GameContextUnavailableError):
            engine.request_cell({PlayerKind.BOT: RecordingSelector()})

    def test_context_is_read_only(self, make_players, bus, rng):
        engine = GameEngine(make_players("XO"), rng=rng, bus=bus)
        engine.start()
        engine.play_turn(4)
        context = engine.context()

        assert context.available_cells == (0, 1, 2, 3, 5, 6, 7, 8)
        assert context.acting.number == engine.current_player.number
        with pytest.raises(ValueError):
            context.grid.mark(0, 0, context.acting.marker)

        context.acting.set_score(99)
        assert engine.current_player.score == 0
        assert engine.grid.marker_at(0, 0) is None
