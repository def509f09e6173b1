"""
Display module for Tic Tac Toe.
Board geometry, colours and Pillow rendering used by the UI.
"""

from .config import DisplayConfig
from .board_renderer import BoardRenderer
