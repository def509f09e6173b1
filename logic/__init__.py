"""
Logic module for Tic Tac Toe.
Handles the board, rules, AI opponent and turn sequencing.
"""

from .game_state import Board, Cell, Player, Mode, Difficulty, Score
from .move_validator import MoveValidator, InvalidMove
from .win_checker import WinChecker, GameStatus, Outcome
from .ai_player import AIPlayer
from .game_controller import GameController, GameSnapshot
from .config import GameConfig

__version__ = "1.0.0"
