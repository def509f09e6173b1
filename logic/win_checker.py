"""
Win checker for Tic Tac Toe.
Checks if a player has won or if the game is a draw.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .game_state import Board, Cell, Player


Line = Tuple[int, int, int]


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAWN = "drawn"


@dataclass(frozen=True)
class GameStatus:
    """
    Result of evaluating a board.

    `winner` and `line` are only set when outcome is WON.
    """
    outcome: Outcome
    winner: Optional[Player] = None
    line: Optional[Line] = None

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS


IN_PROGRESS = GameStatus(Outcome.IN_PROGRESS)
DRAWN = GameStatus(Outcome.DRAWN)


class WinChecker:
    """
    Checks for win conditions in Tic Tac Toe.

    Win condition: 3 identical marks in a row
    (horizontally, vertically, or diagonally).

    Lines are scanned in the order below and the first match wins, so the
    reported line is deterministic even on boards with two complete lines.
    """

    WINNING_LINES: List[Line] = [
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    ]

    def winning_line(self, board: Board) -> Optional[Line]:
        """
        Get the winning line if there is one.

        Args:
            board: The board to check.

        Returns:
            The first complete line as a tuple of cell indices, or None.
        """
        for a, b, c in self.WINNING_LINES:
            if board[a] is not Cell.EMPTY and board[a] == board[b] == board[c]:
                return (a, b, c)
        return None

    def check_winner(self, board: Board) -> Optional[Player]:
        """
        Check if there's a winner.

        Returns:
            The winning Player, or None if no winner yet.
        """
        line = self.winning_line(board)
        if line is None:
            return None
        return Player(board[line[0]].value)

    def is_draw(self, board: Board) -> bool:
        """A draw is a full board with no winning line."""
        return board.is_full() and self.winning_line(board) is None

    def status(self, board: Board) -> GameStatus:
        """
        Evaluate a board. Has no side effects, so it can be called after
        every simulated move.

        Args:
            board: The board to evaluate.

        Returns:
            WON with winner and line, DRAWN, or IN_PROGRESS.
        """
        line = self.winning_line(board)
        if line is not None:
            return GameStatus(
                Outcome.WON,
                winner=Player(board[line[0]].value),
                line=line
            )
        if board.is_full():
            return DRAWN
        return IN_PROGRESS


# Quick test
if __name__ == "__main__":
    print("Testing WinChecker...")

    checker = WinChecker()

    for layout in ["XXX......", "XOXOXOOXO", "XOXOXOOX."]:
        board = Board.from_string(layout)
        print(f"{layout}: {checker.status(board)}")

    print("\nWinChecker test done!")
