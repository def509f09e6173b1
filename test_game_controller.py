"""
Tests for the game controller and the console front end.

Usage:
    python test_game_controller.py
    pytest test_game_controller.py
"""

import sys

import pytest

from logic.config import GameConfig
from logic.game_controller import GameController
from logic.game_state import Difficulty, Mode, Player
from logic.win_checker import Outcome
from main import ConsoleGame


class FixedRandom:
    """random() always returns `value`, choice() always takes the first item."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def random(self):
        return self.value

    def choice(self, items):
        return items[0]


class FakeScheduler:
    """Collects deferred callbacks instead of running them on a timer."""

    def __init__(self):
        self.pending = {}
        self.delays = []
        self._next_handle = 0

    def schedule(self, delay_ms, callback):
        self._next_handle += 1
        self.pending[self._next_handle] = callback
        self.delays.append(delay_ms)
        return self._next_handle

    def cancel(self, handle):
        self.pending.pop(handle, None)

    def run_all(self):
        callbacks = list(self.pending.values())
        self.pending.clear()
        for callback in callbacks:
            callback()


def play(controller, moves):
    for index in moves:
        assert controller.on_cell_selected(index), f"move {index} was rejected"


# ==================== TWO PLAYERS ====================

def test_initial_state():
    controller = GameController()
    assert controller.mode == Mode.HUMAN_VS_HUMAN
    assert controller.difficulty == Difficulty.MEDIUM
    assert controller.current_player == Player.X
    assert controller.board.empty_cells() == list(range(9))
    assert controller.score.as_dict() == {"X": 0, "O": 0, "tie": 0}
    assert controller.message == "Player X's Turn"


def test_players_alternate():
    controller = GameController()
    play(controller, [4])
    assert controller.current_player == Player.O
    play(controller, [0])
    assert controller.current_player == Player.X
    assert controller.board.serialize()[:5] == ["O", "", "", "", "X"]


def test_win_ends_round():
    controller = GameController()
    play(controller, [0, 3, 1, 4, 2])

    assert controller.is_game_over
    assert controller.status.outcome is Outcome.WON
    assert controller.status.winner == Player.X
    assert controller.winning_line == (0, 1, 2)
    assert controller.score.as_dict() == {"X": 1, "O": 0, "tie": 0}
    assert controller.message == "Player X Wins!"


def test_moves_ignored_after_win():
    controller = GameController()
    play(controller, [0, 3, 1, 4, 2])
    board_before = controller.board.serialize()

    assert not controller.on_cell_selected(5)
    assert not controller.on_cell_selected(8)
    assert controller.board.serialize() == board_before
    assert controller.current_player == Player.X
    assert controller.score.x == 1


def test_draw_counts_tie():
    controller = GameController()
    play(controller, [0, 1, 2, 4, 3, 5, 7, 6, 8])

    assert controller.status.outcome is Outcome.DRAWN
    assert controller.winning_line is None
    assert controller.score.as_dict() == {"X": 0, "O": 0, "tie": 1}
    assert controller.message == "It's a Draw!"
    assert not controller.on_cell_selected(0)


def test_invalid_moves_change_nothing():
    controller = GameController()
    play(controller, [4])

    for index in [4, -1, 9, "3", None]:
        assert not controller.on_cell_selected(index)
        assert controller.board.serialize() == ["", "", "", "", "X", "", "", "", ""]
        assert controller.current_player == Player.O


def test_restart_keeps_score():
    controller = GameController()
    play(controller, [0, 3, 1, 4, 2])

    controller.restart()

    assert not controller.is_game_over
    assert controller.board.empty_cells() == list(range(9))
    assert controller.current_player == Player.X
    assert controller.score.x == 1
    assert controller.on_cell_selected(0)


def test_restart_mid_round_resets_turn():
    controller = GameController()
    play(controller, [0])
    controller.restart()
    assert controller.current_player == Player.X


def test_new_game_clears_score():
    controller = GameController()
    play(controller, [0, 3, 1, 4, 2])
    controller.restart()
    play(controller, [0, 1, 2, 4, 3, 5, 7, 6, 8])

    controller.new_game()

    assert controller.score.as_dict() == {"X": 0, "O": 0, "tie": 0}
    assert controller.board.empty_cells() == list(range(9))
    assert controller.current_player == Player.X


def test_scores_accumulate_across_rounds():
    controller = GameController()
    play(controller, [0, 3, 1, 4, 2])
    controller.restart()
    play(controller, [0, 3, 1, 4, 8, 5])
    assert controller.score.as_dict() == {"X": 1, "O": 1, "tie": 0}


def test_listeners_get_snapshots():
    controller = GameController()
    snapshots = []
    controller.add_listener(snapshots.append)

    play(controller, [0])
    assert snapshots[-1].board[0] == "X"
    assert snapshots[-1].current_player == Player.O
    assert snapshots[-1].message == "Player O's Turn"

    play(controller, [3, 1, 4, 2])
    assert snapshots[-1].is_game_over
    assert snapshots[-1].winning_line == (0, 1, 2)
    assert snapshots[-1].score == {"X": 1, "O": 0, "tie": 0}

    count = len(snapshots)
    controller.remove_listener(snapshots.append)
    controller.restart()
    assert len(snapshots) == count


# ==================== AGAINST THE AI ====================

def test_ai_replies_immediately_without_scheduler():
    controller = GameController(mode=Mode.HUMAN_VS_AI, difficulty=Difficulty.HARD, rng=FixedRandom())
    play(controller, [0])

    assert controller.board.serialize()[4] == "O"
    assert controller.current_player == Player.X
    assert not controller.is_ai_thinking


def test_ai_move_is_delayed():
    scheduler = FakeScheduler()
    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        difficulty=Difficulty.HARD,
        rng=FixedRandom(),
        schedule=scheduler.schedule,
        cancel=scheduler.cancel
    )
    play(controller, [0])

    assert controller.is_ai_thinking
    assert scheduler.delays == [GameConfig.AI_MOVE_DELAY_MS]
    assert controller.board.serialize()[4] == ""

    scheduler.run_all()

    assert controller.board.serialize()[4] == "O"
    assert not controller.is_ai_thinking


def test_human_cannot_move_for_ai():
    scheduler = FakeScheduler()
    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        rng=FixedRandom(),
        schedule=scheduler.schedule,
        cancel=scheduler.cancel
    )
    play(controller, [0])

    assert not controller.on_cell_selected(1)
    assert controller.board.serialize()[1] == ""
    assert controller.current_player == Player.O


def test_restart_cancels_pending_ai_move():
    scheduler = FakeScheduler()
    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        rng=FixedRandom(),
        schedule=scheduler.schedule,
        cancel=scheduler.cancel
    )
    play(controller, [0])
    controller.restart()

    assert scheduler.pending == {}
    assert controller.board.empty_cells() == list(range(9))


def test_stale_ai_move_is_skipped():
    """Without a cancel hook the callback still fires, but does nothing."""
    scheduler = FakeScheduler()
    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        difficulty=Difficulty.HARD,
        rng=FixedRandom(),
        schedule=scheduler.schedule
    )
    play(controller, [0])
    controller.restart()
    play(controller, [8])

    # Two callbacks pending: the stale one from round 1 and the live one
    scheduler.run_all()

    board = controller.board.serialize()
    assert board.count("O") == 1
    assert board[8] == "X" and board[0] == ""
    assert board[4] == "O"


def test_stale_ai_move_after_mode_switch():
    scheduler = FakeScheduler()
    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        rng=FixedRandom(),
        schedule=scheduler.schedule
    )
    play(controller, [0])
    controller.switch_mode(Mode.HUMAN_VS_HUMAN)
    scheduler.run_all()

    assert controller.board.empty_cells() == list(range(9))
    assert controller.current_player == Player.X


def test_stale_ai_move_after_new_game():
    scheduler = FakeScheduler()
    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        rng=FixedRandom(),
        schedule=scheduler.schedule
    )
    play(controller, [0])
    controller.new_game()
    scheduler.run_all()

    assert controller.board.empty_cells() == list(range(9))


def test_ai_can_win_and_score():
    controller = GameController(mode=Mode.HUMAN_VS_AI, difficulty=Difficulty.HARD, rng=FixedRandom())

    play(controller, [0])   # AI takes center 4
    play(controller, [8])   # AI takes corner 2
    play(controller, [1])   # AI completes 2-4-6

    assert controller.status.winner == Player.O
    assert controller.winning_line == (2, 4, 6)
    assert controller.score.as_dict() == {"X": 0, "O": 1, "tie": 0}
    assert not controller.on_cell_selected(3)


def test_ai_blocks_human():
    controller = GameController(mode=Mode.HUMAN_VS_AI, difficulty=Difficulty.HARD, rng=FixedRandom())

    play(controller, [0])   # AI takes center 4
    play(controller, [1])   # X threatens 2
    assert controller.board.serialize()[2] == "O"
    assert controller.ai.last_rule == "block"
    assert not controller.is_game_over


def test_ai_wins_instead_of_blocking():
    controller = GameController(mode=Mode.HUMAN_VS_AI, difficulty=Difficulty.HARD, rng=FixedRandom())

    play(controller, [4])   # AI takes corner 0
    play(controller, [8])   # 0-4-8 is dead, AI takes corner 2
    assert controller.board.serialize()[2] == "O"
    play(controller, [6])   # X threatens 7, O can win at 1
    assert controller.board.serialize()[1] == "O"
    assert controller.board.serialize()[7] == ""
    assert controller.status.winner == Player.O


def test_switch_mode_accepts_value_string():
    controller = GameController()
    play(controller, [0])
    controller.switch_mode("pvc")

    assert controller.mode == Mode.HUMAN_VS_AI
    assert controller.board.empty_cells() == list(range(9))

    with pytest.raises(ValueError):
        controller.switch_mode("online")


def test_set_difficulty():
    controller = GameController(mode=Mode.HUMAN_VS_AI)
    controller.set_difficulty("hard")
    assert controller.difficulty == Difficulty.HARD
    assert controller.ai.difficulty == Difficulty.HARD

    controller.set_difficulty(Difficulty.EASY)
    assert controller.difficulty == Difficulty.EASY

    with pytest.raises(ValueError):
        controller.set_difficulty("impossible")


def test_ai_opens_when_it_starts():
    config = GameConfig()
    config.STARTING_PLAYER = Player.O

    controller = GameController(
        mode=Mode.HUMAN_VS_AI,
        difficulty=Difficulty.HARD,
        rng=FixedRandom(),
        config=config
    )
    assert controller.board.serialize()[4] == "O"
    assert controller.current_player == Player.X

    controller.restart()
    assert controller.board.serialize()[4] == "O"


def test_quiet_config_prints_nothing(capsys):
    config = GameConfig()
    config.VERBOSE = False

    controller = GameController(mode=Mode.HUMAN_VS_AI, config=config)
    play(controller, [0])
    controller.on_cell_selected(0)
    controller.restart()

    assert capsys.readouterr().out == ""


# ==================== CONSOLE ====================

def test_console_commands():
    game = ConsoleGame(mode=Mode.HUMAN_VS_HUMAN, seed=0)
    controller = game.controller

    game.handle_command("4")
    assert controller.board.serialize()[4] == "X"

    game.handle_command("r")
    assert controller.board.empty_cells() == list(range(9))

    game.handle_command("m")
    assert controller.mode == Mode.HUMAN_VS_AI

    game.handle_command("d hard")
    assert controller.difficulty == Difficulty.HARD

    game.handle_command("0")
    assert controller.board.serialize()[4] == "O"

    game.handle_command("n")
    assert controller.board.empty_cells() == list(range(9))

    game.handle_command("q")
    assert not game.is_running


def test_console_bad_input(capsys):
    game = ConsoleGame(seed=0)
    game.handle_command("d impossible")
    game.handle_command("hello")
    game.handle_command("12")

    out = capsys.readouterr().out
    assert "Unknown difficulty" in out
    assert "Unknown command" in out
    assert game.controller.board.empty_cells() == list(range(9))


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
