"""
Move validator for Tic Tac Toe.
Validates that move requests follow the rules.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .game_state import Board


class InvalidMove(Exception):
    """A mark was requested on an out-of-range index or an occupied cell."""


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates move requests before they reach the board.

    Rules:
    1. The round must not be over
    2. Humans cannot move while the AI is thinking
    3. The index must be 0-8
    4. Can only place on empty cells
    """

    def validate_move(
        self,
        board: "Board",
        index: int,
        is_game_over: bool = False,
        is_ai_thinking: bool = False
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to mark (0-8).
            is_game_over: True once the round has a result.
            is_ai_thinking: True while an AI move is pending.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if is_ai_thinking:
            return ValidationResult(
                is_valid=False,
                error_message="Wait for the AI to move!"
            )

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(board):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be 0-8."
            )

        if not board.is_empty(index):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].value}"
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: "Board", is_game_over: bool = False) -> List[int]:
        """
        Get all valid moves for the player to act.

        Args:
            board: Current board.
            is_game_over: True once the round has a result.

        Returns:
            Empty cell indices, or an empty list once the round is over.
        """
        if is_game_over:
            return []
        return board.empty_cells()
