"""
AI player for Tic Tac Toe.
Picks moves with a fixed-priority heuristic, mixed with random play on
the lower difficulty levels.
"""

from typing import Optional

import numpy as np

from .config import GameConfig
from .game_state import Board, Difficulty, Player
from .win_checker import WinChecker


class AIPlayer:
    """
    An AI that plays Tic Tac Toe using a fixed-priority heuristic.

    Heuristic order (first rule with a candidate wins):
    1. Win now - complete one of our own lines
    2. Block - fill the cell that would complete the opponent's line
    3. Center - take cell 4
    4. Corner - a random free corner
    5. Anything - a random free cell

    EASY always plays randomly, HARD always plays the heuristic and MEDIUM
    flips a coin on every move.
    """

    def __init__(
        self,
        player: Player = Player.O,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng=None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize the AI player.

        Args:
            player: Which mark the AI plays (default: O).
            difficulty: EASY, MEDIUM or HARD (a name string is accepted).
            rng: Randomness source with random() and choice(seq).
                Defaults to numpy.random.default_rng().
            config: Game configuration.
        """
        self.player = player
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config or GameConfig()
        self.win_checker = WinChecker()

        # Which rule produced the last move, and how many cells were probed (for debugging)
        self.last_rule: Optional[str] = None
        self.cells_probed = 0

    def choose_move(self, board: Board) -> int:
        """
        Choose the AI's next move for the current difficulty.

        Args:
            board: Current board. Left unchanged.

        Returns:
            Index of an empty cell.

        Raises:
            ValueError: If the board has no empty cell.
        """
        if board.is_full():
            raise ValueError("No empty cells left to play")

        self.cells_probed = 0

        if self.difficulty == Difficulty.EASY:
            move = self.get_random_move(board)
        elif self.difficulty == Difficulty.MEDIUM:
            if self.rng.random() < self.config.MEDIUM_HEURISTIC_PROBABILITY:
                move = self.get_best_move(board)
            else:
                move = self.get_random_move(board)
        else:
            move = self.get_best_move(board)

        if self.config.VERBOSE:
            print(f"AI ({self.player.value}, {self.difficulty.name}) plays {move} [{self.last_rule}]")

        return move

    def get_best_move(self, board: Board) -> int:
        """
        Apply the heuristic to the current position.

        Args:
            board: Current board. Every probe is rolled back.

        Returns:
            Index of an empty cell.
        """
        move = self._find_winning_cell(board, self.player)
        if move is not None:
            self.last_rule = "win"
            return move

        move = self._find_winning_cell(board, self.player.opposite())
        if move is not None:
            self.last_rule = "block"
            return move

        if board.is_empty(self.config.CENTER):
            self.last_rule = "center"
            return self.config.CENTER

        corners = [i for i in self.config.CORNERS if board.is_empty(i)]
        if corners:
            self.last_rule = "corner"
            return int(self.rng.choice(corners))

        return self.get_random_move(board)

    def get_random_move(self, board: Board) -> int:
        """Pick any empty cell, uniformly at random."""
        self.last_rule = "random"
        return int(self.rng.choice(board.empty_cells()))

    def _find_winning_cell(self, board: Board, player: Player) -> Optional[int]:
        """
        Find the first empty cell (lowest index) that wins for a player.

        Args:
            board: Board to probe.
            player: Whose mark to try.

        Returns:
            The cell index, or None if no single move wins.
        """
        for index in board.empty_cells():
            self.cells_probed += 1
            with board.probe(index, player):
                winner = self.win_checker.status(board).winner
            if winner == player:
                return index
        return None


# Quick test
if __name__ == "__main__":
    print("Testing AIPlayer...")

    ai = AIPlayer(Player.O, Difficulty.HARD)

    # Test 1: AI should take the win rather than block
    board = Board.from_string("OO.XX....")
    board.print_board()
    move = ai.choose_move(board)
    assert move == 2, f"Expected 2, got {move}"
    print("✓ AI correctly takes the win!")

    # Test 2: AI should block
    board = Board.from_string("XX.......")
    board.print_board()
    move = ai.choose_move(board)
    assert move == 2, f"Expected 2, got {move}"
    print("✓ AI correctly blocks the win!")

    print("\nAIPlayer test done!")
