"""
Board Module - Immutable 8x8 jewel board representation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from .geometry import ROW_COUNT, COL_COUNT


class PieceColor(Enum):
    """Jewel colors in solver iteration order. WHITE is the neutral color."""
    RED = "R"
    PURPLE = "P"
    BLUE = "B"
    GREEN = "G"
    YELLOW = "Y"
    ORANGE = "O"
    WHITE = "W"

    @property
    def letter(self) -> str:
        """Single-letter code used in board dumps."""
        return self.value

    @classmethod
    def from_letter(cls, letter: str) -> 'PieceColor':
        """
        Look up a color by its single-letter code.

        Raises:
            ValueError: If the letter is not a known color code
        """
        return cls(letter.upper())


@dataclass(frozen=True)
class Board:
    """
    Immutable board of classified jewel colors.

    Uses tuple-of-tuples for hashability and immutability.
    Always ROW_COUNT x COL_COUNT; row 0 is the top row.

    Attributes:
        grid: Tuple of rows, each a tuple of PieceColor
    """
    grid: Tuple[Tuple[PieceColor, ...], ...]

    def __post_init__(self):
        if len(self.grid) != ROW_COUNT or any(len(row) != COL_COUNT for row in self.grid):
            shape = f"{len(self.grid)}x{len(self.grid[0]) if self.grid else 0}"
            raise ValueError(f"Board must be {ROW_COUNT}x{COL_COUNT}, got {shape}")
        for row in self.grid:
            for cell in row:
                if not isinstance(cell, PieceColor):
                    raise TypeError(f"Board cells must be PieceColor, got {cell!r}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[PieceColor]]) -> 'Board':
        """
        Create Board from a nested sequence (e.g. scanner output).

        Args:
            rows: Row-major 2D sequence of PieceColor

        Returns:
            Board instance with immutable grid
        """
        return cls(grid=tuple(tuple(row) for row in rows))

    @classmethod
    def from_string(cls, text: str) -> 'Board':
        """
        Create Board from letter codes, one row per line.

        Whitespace inside a row is ignored, so "R G B ..." and "RGB..."
        are both accepted.

        Example:
            Board.from_string('''
                RGBYRGBY
                ...
            ''')
        """
        rows = []
        for line in text.strip().splitlines():
            letters = "".join(line.split())
            if letters:
                rows.append([PieceColor.from_letter(ch) for ch in letters])
        return cls.from_rows(rows)

    def to_string(self) -> str:
        """Render the board as letter codes, one row per line."""
        return "\n".join(
            "".join(cell.letter for cell in row) for row in self.grid
        )

    def get_cell(self, row: int, col: int) -> PieceColor:
        """
        Get the color at a cell.

        Raises:
            IndexError: If the cell lies outside the board
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row},{col}) outside board")
        return self.grid[row][col]

    def color_mask(self, color: PieceColor) -> Tuple[Tuple[int, ...], ...]:
        """
        Build the occupancy mask for one color.

        Returns:
            Tuple of rows with 1 where the cell holds the color, else 0
        """
        return tuple(
            tuple(1 if cell is color else 0 for cell in row)
            for row in self.grid
        )

    def count(self, color: PieceColor) -> int:
        """Count cells holding the given color."""
        return sum(1 for row in self.grid for cell in row if cell is color)

    @property
    def rows(self) -> int:
        """Get number of rows in board."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Get number of columns in board."""
        return len(self.grid[0])

    def to_list(self) -> List[List[PieceColor]]:
        """Convert to mutable 2D list representation."""
        return [list(row) for row in self.grid]
