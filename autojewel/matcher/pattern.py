"""
Pattern Module - Compiled match shape.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Pattern:
    """
    A single orientation of a match shape, compiled to a bitmask.

    Cells are flattened row-major. In required_mask the top-left cell is
    bit (side_length**2 - 1) and the bottom-right cell is bit 0.

    Attributes:
        side_length: 3 or 4
        required_mask: Cells that must hold the searched color
        move_src_index: Flattened index of the cell to drag from
        move_dst_index: Flattened index of the cell to drop onto
        priority: Number of required cells (popcount of required_mask)
        shape: Cell string the pattern was compiled from
    """
    side_length: int
    required_mask: int
    move_src_index: int
    move_dst_index: int
    priority: int
    shape: str = ""

    @property
    def cell_count(self) -> int:
        """Number of cells in the pattern window."""
        return self.side_length * self.side_length

    @property
    def src_offset(self) -> Tuple[int, int]:
        """(row, col) of the source cell inside the window."""
        return divmod(self.move_src_index, self.side_length)

    @property
    def dst_offset(self) -> Tuple[int, int]:
        """(row, col) of the destination cell inside the window."""
        return divmod(self.move_dst_index, self.side_length)

    def matches(self, window_mask: int) -> bool:
        """True if every required cell is set in the window mask."""
        return (window_mask & self.required_mask) == self.required_mask

    def mask_string(self) -> str:
        """Required mask as a zero-padded binary string (debug output)."""
        return format(self.required_mask, f"0{self.cell_count}b")
