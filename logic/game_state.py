"""
Game state for Tic Tac Toe.
Marks, the 9-cell board, game modes, difficulty levels and the score board.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List

from .move_validator import InvalidMove


BOARD_CELLS = 9


class Cell(Enum):
    """What a single board cell holds."""
    EMPTY = ""
    X = "X"
    O = "O"


class Player(Enum):
    """The two marks. X always opens a round."""
    X = "X"
    O = "O"

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.O if self == Player.X else Player.X

    @property
    def cell(self) -> Cell:
        """The cell value this player leaves on the board."""
        return Cell(self.value)


class Mode(Enum):
    """Who sits on the O side."""
    HUMAN_VS_HUMAN = "pvp"
    HUMAN_VS_AI = "pvc"


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Heuristic half of the time
    HARD = 3      # Heuristic every move

    @classmethod
    def parse(cls, level) -> "Difficulty":
        """Accept a Difficulty or its name in any case ("hard", "Hard")."""
        if isinstance(level, cls):
            return level
        try:
            return cls[str(level).upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {level!r}") from None


@dataclass
class Board:
    """
    The 3x3 grid, stored row-major as 9 cells.

    Index layout:
        0 | 1 | 2
        3 | 4 | 5
        6 | 7 | 8
    """

    cells: List[Cell] = field(
        default_factory=lambda: [Cell.EMPTY for _ in range(BOARD_CELLS)]
    )

    def __post_init__(self):
        if len(self.cells) != BOARD_CELLS:
            raise ValueError(f"A board has {BOARD_CELLS} cells, got {len(self.cells)}")

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __len__(self) -> int:
        return BOARD_CELLS

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    @classmethod
    def from_string(cls, layout: str) -> "Board":
        """
        Build a board from a 9 character string such as "XX.OO....".

        Args:
            layout: "X", "O" for marks; ".", "_", "-" or " " for empty cells.

        Returns:
            A new Board.
        """
        cells = []
        for char in layout:
            if char in "XxOo":
                cells.append(Cell(char.upper()))
            elif char in "._- ":
                cells.append(Cell.EMPTY)
            else:
                raise ValueError(f"Unexpected board character: {char!r}")
        return cls(cells=cells)

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is Cell.EMPTY

    def apply(self, index: int, player: Player) -> "Board":
        """
        Place a player's mark.

        Args:
            index: Cell index (0-8).
            player: Whose mark to place.

        Returns:
            This board, updated.

        Raises:
            InvalidMove: If the index is out of range or the cell is taken.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_CELLS:
            raise InvalidMove(f"Invalid position {index!r}. Must be 0-8.")
        if not self.is_empty(index):
            raise InvalidMove(f"Cell {index} is already occupied by {self.cells[index].value}")

        self.cells[index] = player.cell
        return self

    @contextmanager
    def probe(self, index: int, player: Player) -> Iterator["Board"]:
        """
        Tentatively place a mark, rolling it back when the block exits.

        Used to test "what if" moves on the real board. The cell is cleared
        even if the body raises.
        """
        self.apply(index, player)
        try:
            yield self
        finally:
            self.cells[index] = Cell.EMPTY

    def is_full(self) -> bool:
        """True when no cell is empty."""
        return Cell.EMPTY not in self.cells

    def empty_cells(self) -> List[int]:
        """
        Get all empty cells on the board.

        Returns:
            Empty cell indices in ascending order.
        """
        return [i for i, cell in enumerate(self.cells) if cell is Cell.EMPTY]

    def reset(self):
        """Clear every cell."""
        self.cells = [Cell.EMPTY for _ in range(BOARD_CELLS)]

    def copy(self) -> "Board":
        return Board(cells=list(self.cells))

    def serialize(self) -> List[str]:
        """Cell values as strings ("X", "O" or "") for renderers."""
        return [cell.value for cell in self.cells]

    def print_board(self):
        """Print the board to console. Empty cells show their index."""
        print()
        for row in range(3):
            marks = []
            for col in range(3):
                index = row * 3 + col
                marks.append(self.cells[index].value or str(index))
            print(" " + " | ".join(marks))
            if row < 2:
                print("---+---+---")
        print()


@dataclass
class Score:
    """Rounds won by each mark plus ties, kept across restarts."""
    x: int = 0
    o: int = 0
    tie: int = 0

    def record_win(self, player: Player):
        if player == Player.X:
            self.x += 1
        else:
            self.o += 1

    def record_tie(self):
        self.tie += 1

    def reset(self):
        self.x = 0
        self.o = 0
        self.tie = 0

    def as_dict(self) -> Dict[str, int]:
        return {"X": self.x, "O": self.o, "tie": self.tie}


# Quick test
if __name__ == "__main__":
    print("Testing Board...")

    board = Board()
    for index, player in [(4, Player.X), (0, Player.O), (8, Player.X)]:
        print(f"{player.value} moves to {index}")
        board.apply(index, player)
    board.print_board()

    with board.probe(2, Player.O):
        print(f"Probing O at 2: {board.serialize()}")
    print(f"After probe:    {board.serialize()}")

    print("\nBoard test done!")
