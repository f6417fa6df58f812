"""
Board Geometry Module - Pixel layout of the board and cell-to-pixel mapping.
"""

from dataclasses import dataclass
from typing import Tuple

# Board dimensions (rows x cols)
ROW_COUNT = 8
COL_COUNT = 8


@dataclass(frozen=True)
class BoardGeometry:
    """
    Resolved pixel geometry of the board inside a captured image.

    Attributes:
        left: X of the top-left corner of cell (0, 0)
        top: Y of the top-left corner of cell (0, 0)
        cell_width: Horizontal cell pitch in pixels
        cell_height: Vertical cell pitch in pixels
        rows: Number of board rows
        cols: Number of board columns
    """
    left: int
    top: int
    cell_width: int
    cell_height: int
    rows: int = ROW_COUNT
    cols: int = COL_COUNT

    def contains(self, row: int, col: int) -> bool:
        """Check whether (row, col) is a cell of this board."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell_origin(self, row: int, col: int) -> Tuple[int, int]:
        """
        Get the top-left pixel of a cell.

        Raises:
            IndexError: If the cell lies outside the board
        """
        if not self.contains(row, col):
            raise IndexError(f"Cell ({row},{col}) outside {self.rows}x{self.cols} board")
        return (self.left + col * self.cell_width,
                self.top + row * self.cell_height)

    def cell_center(self, row: int, col: int) -> Tuple[int, int]:
        """
        Get the center pixel of a cell.

        x = left + col * cell_width + cell_width // 2, y analogous.

        Raises:
            IndexError: If the cell lies outside the board
        """
        x, y = self.cell_origin(row, col)
        return (x + self.cell_width // 2, y + self.cell_height // 2)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """Board area as (x, y, width, height)."""
        return (self.left, self.top,
                self.cols * self.cell_width, self.rows * self.cell_height)
