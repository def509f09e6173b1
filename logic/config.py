"""
Game configuration for Tic Tac Toe.
Turn order, AI pacing and default settings.
"""

from .game_state import Difficulty, Mode, Player


class GameConfig:
    """
    Configuration class for game settings.
    Override attributes on an instance to change a single controller.
    """

    # ==================== PLAYERS ====================
    STARTING_PLAYER = Player.X   # Opens every round
    AI_PLAYER = Player.O         # The AI's mark in HUMAN_VS_AI mode

    # ==================== DEFAULTS ====================
    DEFAULT_MODE = Mode.HUMAN_VS_HUMAN
    DEFAULT_DIFFICULTY = Difficulty.MEDIUM

    # ==================== AI SETTINGS ====================
    # Pause before the AI answers a human move (milliseconds)
    AI_MOVE_DELAY_MS = 600

    # Chance that MEDIUM plays the heuristic move instead of a random one
    MEDIUM_HEURISTIC_PROBABILITY = 0.5

    # Preferred cells once there is nothing to win or block
    CENTER = 4
    CORNERS = (0, 2, 6, 8)

    # ==================== OUTPUT ====================
    # Print moves and results to the console
    VERBOSE = True
