"""
Solution Module - Match candidates and the selected swap.
"""

from dataclasses import dataclass
from typing import Tuple

from .board import PieceColor
from .pattern import Pattern


@dataclass(frozen=True)
class MatchCandidate:
    """
    A pattern that fits the board at one window position.

    Attributes:
        pattern: Matched pattern
        top_row: Board row of the window's top-left cell
        top_col: Board column of the window's top-left cell
        color: Color whose occupancy mask matched
    """
    pattern: Pattern
    top_row: int
    top_col: int
    color: PieceColor

    @property
    def src_cell(self) -> Tuple[int, int]:
        """Board (row, col) of the cell to drag from."""
        row, col = self.pattern.src_offset
        return (self.top_row + row, self.top_col + col)

    @property
    def dst_cell(self) -> Tuple[int, int]:
        """Board (row, col) of the cell to drop onto."""
        row, col = self.pattern.dst_offset
        return (self.top_row + row, self.top_col + col)


@dataclass(frozen=True)
class Solution:
    """
    The chosen swap, ready for the caller to act on.

    Pixel points are relative to the analyzed image; the caller adds the
    window offset before simulating input.

    Attributes:
        candidate: Winning match candidate
        score: Ranking score the candidate won with
        src_point: (x, y) center of the source cell
        dst_point: (x, y) center of the destination cell
        candidate_count: Number of candidates found on the board
    """
    candidate: MatchCandidate
    score: int
    src_point: Tuple[int, int]
    dst_point: Tuple[int, int]
    candidate_count: int = 1

    @property
    def pattern(self) -> Pattern:
        return self.candidate.pattern

    @property
    def side_length(self) -> int:
        return self.candidate.pattern.side_length

    @property
    def priority(self) -> int:
        return self.candidate.pattern.priority

    @property
    def src_cell(self) -> Tuple[int, int]:
        return self.candidate.src_cell

    @property
    def dst_cell(self) -> Tuple[int, int]:
        return self.candidate.dst_cell

    def describe(self) -> str:
        """One-line summary for logs."""
        c = self.candidate
        return (
            f"{self.side_length}x{self.side_length} {c.color.name} pattern at "
            f"({c.top_row},{c.top_col}) score={self.score}: "
            f"{self.src_cell} -> {self.dst_cell}, "
            f"pixels {self.src_point} -> {self.dst_point}"
        )
