"""
Board renderer for Tic Tac Toe.
Draws the board, the marks and the winning line into a Pillow image, and
maps click coordinates back to cell indices.
"""

import math
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .config import DisplayConfig


Point = Tuple[float, float]


class BoardRenderer:
    """
    Renders a 3x3 board.

    Cells are laid out row-major with CELL_GAP pixels between them:
        0 | 1 | 2
        3 | 4 | 5
        6 | 7 | 8
    """

    def __init__(self, config: Optional[DisplayConfig] = None):
        self.config = config or DisplayConfig()

    @property
    def size(self) -> int:
        return self.config.CELL_SIZE * 3 + self.config.CELL_GAP * 2

    def cell_origin(self, index: int) -> Tuple[int, int]:
        """Top-left pixel of a cell."""
        row, col = divmod(index, 3)
        step = self.config.CELL_SIZE + self.config.CELL_GAP
        return col * step, row * step

    def cell_center(self, index: int) -> Point:
        x, y = self.cell_origin(index)
        half = self.config.CELL_SIZE / 2
        return x + half, y + half

    def cell_at(self, x: float, y: float) -> Optional[int]:
        """
        Find the cell under a pixel.

        Args:
            x: Horizontal pixel position.
            y: Vertical pixel position.

        Returns:
            Cell index, or None on a grid gap or outside the board.
        """
        if not (0 <= x < self.size and 0 <= y < self.size):
            return None

        step = self.config.CELL_SIZE + self.config.CELL_GAP
        col, x_offset = divmod(int(x), step)
        row, y_offset = divmod(int(y), step)

        if x_offset >= self.config.CELL_SIZE or y_offset >= self.config.CELL_SIZE:
            return None  # Clicked a gap

        return row * 3 + col

    def line_endpoints(self, line: Sequence[int]) -> Tuple[Point, Point]:
        """
        Geometry of the strike-through for a winning line.

        The segment runs through the centres of the first and last cell and
        overhangs each by WIN_LINE_OVERHANG * CELL_SIZE.

        Args:
            line: Three cell indices, e.g. (0, 4, 8).

        Returns:
            ((x1, y1), (x2, y2)).
        """
        (x1, y1) = self.cell_center(line[0])
        (x2, y2) = self.cell_center(line[-1])

        length = math.hypot(x2 - x1, y2 - y1)
        overhang = self.config.CELL_SIZE * self.config.WIN_LINE_OVERHANG
        dx = (x2 - x1) / length * overhang
        dy = (y2 - y1) / length * overhang

        return (x1 - dx, y1 - dy), (x2 + dx, y2 + dy)

    def render(
        self,
        board: Sequence[str],
        winning_line: Optional[Sequence[int]] = None,
        strike: bool = True
    ) -> Image.Image:
        """
        Draw the board.

        Args:
            board: 9 cell values ("X", "O" or "").
            winning_line: Cells to highlight, if any.
            strike: Also draw the line through the winning cells.

        Returns:
            RGB image of size x size pixels.
        """
        cfg = self.config
        image = Image.new("RGB", (self.size, self.size), cfg.BACKGROUND)
        draw = ImageDraw.Draw(image)

        highlighted = set(winning_line or ())

        for index, mark in enumerate(board):
            x, y = self.cell_origin(index)
            fill = cfg.WIN_CELL_COLOR if index in highlighted else cfg.CELL_COLOR
            draw.rounded_rectangle(
                [x, y, x + cfg.CELL_SIZE - 1, y + cfg.CELL_SIZE - 1],
                radius=8,
                fill=fill
            )

            if mark == "X":
                self._draw_x(draw, x, y)
            elif mark == "O":
                self._draw_o(draw, x, y)

        if winning_line and strike:
            start, end = self.line_endpoints(winning_line)
            draw.line([start, end], fill=cfg.WIN_LINE_COLOR, width=cfg.WIN_LINE_WIDTH)

        return image

    def _draw_x(self, draw: ImageDraw.ImageDraw, x: int, y: int):
        cfg = self.config
        left = x + cfg.MARK_MARGIN
        top = y + cfg.MARK_MARGIN
        right = x + cfg.CELL_SIZE - cfg.MARK_MARGIN
        bottom = y + cfg.CELL_SIZE - cfg.MARK_MARGIN
        draw.line([(left, top), (right, bottom)], fill=cfg.X_COLOR, width=cfg.MARK_WIDTH)
        draw.line([(right, top), (left, bottom)], fill=cfg.X_COLOR, width=cfg.MARK_WIDTH)

    def _draw_o(self, draw: ImageDraw.ImageDraw, x: int, y: int):
        cfg = self.config
        draw.ellipse(
            [
                x + cfg.MARK_MARGIN,
                y + cfg.MARK_MARGIN,
                x + cfg.CELL_SIZE - cfg.MARK_MARGIN,
                y + cfg.CELL_SIZE - cfg.MARK_MARGIN,
            ],
            outline=cfg.O_COLOR,
            width=cfg.MARK_WIDTH
        )
