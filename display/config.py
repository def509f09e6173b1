"""
Display configuration for Tic Tac Toe.
Board geometry and colours shared by the renderer and the UI.
"""


class DisplayConfig:
    """
    Configuration class for display settings.
    All sizes are in pixels.
    """

    # ==================== BOARD GEOMETRY ====================
    CELL_SIZE = 120
    CELL_GAP = 12                 # Space between cells (the grid lines)
    BOARD_SIZE = CELL_SIZE * 3 + CELL_GAP * 2   # 384 pixels

    # ==================== MARKS ====================
    MARK_MARGIN = 28              # Distance from cell edge to mark
    MARK_WIDTH = 12               # Stroke width of X and O

    # ==================== WINNING LINE ====================
    WIN_LINE_WIDTH = 8
    # How far the line reaches past the centres of the end cells
    WIN_LINE_OVERHANG = 0.4       # Fraction of CELL_SIZE

    # ==================== COLOURS ====================
    BACKGROUND = "#2c3e50"
    CELL_COLOR = "#ecf0f1"
    WIN_CELL_COLOR = "#f9e79f"
    WIN_LINE_COLOR = "#27ae60"
    X_COLOR = "#3498db"
    O_COLOR = "#e74c3c"
    TEXT_COLOR = "#ffffff"
    PANEL_COLOR = "#34495e"
    BUTTON_COLOR = "#2d3748"
    ACTIVE_BUTTON_COLOR = "#10b981"

    DIFFICULTY_COLORS = {
        "EASY": "#4ade80",
        "MEDIUM": "#fbbf24",
        "HARD": "#f87171",
    }

    FONT = "Segoe UI"

    def player_color(self, mark: str) -> str:
        """Colour used for a mark ("X" or "O")."""
        return self.X_COLOR if mark == "X" else self.O_COLOR
