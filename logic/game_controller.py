"""
Game controller for Tic Tac Toe.
Owns the board, turn order, mode, difficulty and score, and is the only
thing that changes them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .ai_player import AIPlayer
from .config import GameConfig
from .game_state import Board, Difficulty, Mode, Player, Score
from .move_validator import InvalidMove, MoveValidator
from .win_checker import IN_PROGRESS, GameStatus, Line, Outcome, WinChecker


# schedule(delay_ms, callback) -> handle, e.g. Tk's root.after
Scheduler = Callable[[int, Callable[[], None]], Any]


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs to draw the current game."""
    board: Tuple[str, ...]
    current_player: Player
    mode: Mode
    difficulty: Difficulty
    score: Dict[str, int]
    status: GameStatus
    is_ai_thinking: bool
    message: str

    @property
    def winning_line(self) -> Optional[Line]:
        return self.status.line

    @property
    def is_game_over(self) -> bool:
        return self.status.is_over


class GameController:
    """
    Runs rounds of Tic Tac Toe for two humans or a human against the AI.

    Game flow:
    1. A move request arrives (human click or AI decision)
    2. The mark is placed on the board
    3. The board is evaluated - a win or draw ends the round and scores it
    4. Otherwise the turn passes; in HUMAN_VS_AI the AI's reply is scheduled
       after a short delay

    Requests that break the rules (occupied cell, bad index, round over,
    AI's turn) are ignored and leave the game untouched.
    """

    def __init__(
        self,
        mode: Optional[Mode] = None,
        difficulty: Optional[Difficulty] = None,
        rng=None,
        schedule: Optional[Scheduler] = None,
        cancel: Optional[Callable[[Any], None]] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize the controller.

        Args:
            mode: Starting mode (Mode or "pvp"/"pvc").
            difficulty: Starting AI difficulty (Difficulty or its name).
            rng: Randomness source passed to the AI.
            schedule: Defers a callback, schedule(delay_ms, callback) -> handle.
                Without one the AI replies immediately.
            cancel: Cancels a handle returned by schedule.
            config: Game configuration.
        """
        self.config = config or GameConfig()

        self.board = Board()
        self.win_checker = WinChecker()
        self.validator = MoveValidator()
        self.ai = AIPlayer(
            self.config.AI_PLAYER,
            difficulty if difficulty is not None else self.config.DEFAULT_DIFFICULTY,
            rng=rng,
            config=self.config
        )

        self.mode = Mode(mode) if mode is not None else self.config.DEFAULT_MODE
        self.score = Score()
        self.current_player = self.config.STARTING_PLAYER
        self.status: GameStatus = IN_PROGRESS

        self._schedule = schedule
        self._cancel = cancel
        self._pending_ai_move = None
        # Bumped on every restart so stale AI callbacks can tell they are stale
        self._round = 0
        self._listeners: List[Callable[[GameSnapshot], None]] = []

        if self.is_ai_thinking:
            self._schedule_ai_move()

    # ==================== OBSERVABLE STATE ====================

    @property
    def difficulty(self) -> Difficulty:
        return self.ai.difficulty

    @property
    def is_game_over(self) -> bool:
        return self.status.is_over

    @property
    def winning_line(self) -> Optional[Line]:
        return self.status.line

    @property
    def is_ai_thinking(self) -> bool:
        """True while the AI owes a move."""
        return (
            self.mode == Mode.HUMAN_VS_AI
            and not self.is_game_over
            and self.current_player == self.ai.player
        )

    @property
    def message(self) -> str:
        if self.status.outcome is Outcome.WON:
            return f"Player {self.status.winner.value} Wins!"
        if self.status.outcome is Outcome.DRAWN:
            return "It's a Draw!"
        return f"Player {self.current_player.value}'s Turn"

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=tuple(self.board.serialize()),
            current_player=self.current_player,
            mode=self.mode,
            difficulty=self.difficulty,
            score=self.score.as_dict(),
            status=self.status,
            is_ai_thinking=self.is_ai_thinking,
            message=self.message,
        )

    def add_listener(self, callback: Callable[[GameSnapshot], None]):
        """Call `callback(snapshot)` after every state change."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[GameSnapshot], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ==================== CONTROLS ====================

    def on_cell_selected(self, index: int) -> bool:
        """
        Handle a human clicking a cell.

        Args:
            index: Cell index (0-8).

        Returns:
            True if the move was played, False if it was ignored.
        """
        result = self.validator.validate_move(
            self.board,
            index,
            is_game_over=self.is_game_over,
            is_ai_thinking=self.is_ai_thinking
        )
        if not result.is_valid:
            self._log(f"Ignored move {index!r}: {result.error_message}")
            return False

        return self._play(index)

    def restart(self):
        """Clear the board for a new round. Scores are kept."""
        self._cancel_pending_ai_move()
        self._round += 1

        self.board.reset()
        self.current_player = self.config.STARTING_PLAYER
        self.status = IN_PROGRESS

        self._log(f"Round {self._round + 1}: {self.message}")
        self._notify()

        if self.is_ai_thinking:
            self._schedule_ai_move()

    def new_game(self):
        """Zero the score board and start a new round."""
        self.score.reset()
        self._log("Scores cleared.")
        self.restart()

    def switch_mode(self, mode):
        """
        Switch between HUMAN_VS_HUMAN and HUMAN_VS_AI, then restart.

        Args:
            mode: Mode or its value ("pvp" / "pvc").
        """
        self.mode = Mode(mode)
        self._log(f"Mode set to: {self.mode.name}")
        self.restart()

    def set_difficulty(self, level):
        """
        Set the AI difficulty. Takes effect on the AI's next move.

        Args:
            level: Difficulty or its name ("easy", "medium", "hard").
        """
        self.ai.difficulty = Difficulty.parse(level)
        self._log(f"Difficulty set to: {self.ai.difficulty.name}")
        self._notify()

    # ==================== TURN HANDLING ====================

    def _play(self, index: int) -> bool:
        """Place the current player's mark and settle the result."""
        player = self.current_player
        try:
            self.board.apply(index, player)
        except InvalidMove as e:
            self._log(f"Ignored move {index!r}: {e}")
            return False

        self._log(f"{player.value} plays {index}")

        self.status = self.win_checker.status(self.board)
        if self.status.outcome is Outcome.WON:
            self.score.record_win(self.status.winner)
            self._log(f"{self.message} Line: {self.status.line}")
        elif self.status.outcome is Outcome.DRAWN:
            self.score.record_tie()
            self._log(self.message)
        else:
            self.current_player = player.opposite()

        self._notify()

        if self.is_ai_thinking:
            self._schedule_ai_move()

        return True

    def _schedule_ai_move(self):
        round_id = self._round
        if self._schedule is None:
            self._ai_move(round_id)
            return
        self._pending_ai_move = self._schedule(
            self.config.AI_MOVE_DELAY_MS,
            lambda: self._ai_move(round_id)
        )

    def _ai_move(self, round_id: int):
        """Play the AI's move, unless the game moved on since it was scheduled."""
        if round_id != self._round or not self.is_ai_thinking:
            self._log("Skipping stale AI move.")
            return

        self._pending_ai_move = None
        move = self.ai.choose_move(self.board)
        self._play(move)

    def _cancel_pending_ai_move(self):
        if self._pending_ai_move is not None and self._cancel is not None:
            self._cancel(self._pending_ai_move)
        self._pending_ai_move = None

    def _notify(self):
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for callback in list(self._listeners):
            callback(snapshot)

    def _log(self, text: str):
        if self.config.VERBOSE:
            print(text)
