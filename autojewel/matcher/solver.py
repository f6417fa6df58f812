"""
Match Solver Module - Finds the best swap on a classified board.

For every color the board is reduced to a 0/1 occupancy mask. Every 4x4
and 3x3 window of that mask is packed into an integer (top-left cell in
the highest bit) and tested against each compiled pattern of the same
size: a pattern matches when all of its required bits are set.
"""

import logging
from typing import List, Optional, Sequence

from .board import Board, PieceColor
from .geometry import BoardGeometry
from .library import PatternLibrary, SUPPORTED_SIDES
from .solution import MatchCandidate, Solution

logger = logging.getLogger(__name__)


# Points in grid units: cell_center(row, col) == (col, row)
GRID_GEOMETRY = BoardGeometry(left=0, top=0, cell_width=1, cell_height=1)

# Window sizes tried at each position, larger first
SEARCH_SIDES = tuple(sorted(SUPPORTED_SIDES, reverse=True))

# Score bonus per row of distance from the bottom edge
BOTTOM_ROW_WEIGHT = 2


def window_mask(mask: Sequence[Sequence[int]], top_row: int, top_col: int, side: int) -> int:
    """
    Pack a side x side window of an occupancy mask into an integer.

    Bit (side*side - 1) is the window's top-left cell, bit 0 its
    bottom-right cell.
    """
    bits = 0
    top_bit = side * side - 1
    for i in range(side):
        row = mask[top_row + i]
        for j in range(side):
            if row[top_col + j]:
                bits |= 1 << (top_bit - (i * side + j))
    return bits


def score_candidate(candidate: MatchCandidate, favor_bottom_rows: bool = False,
                    row_count: int = 8) -> int:
    """
    Ranking score of a candidate.

    Pattern priority, plus 2 * (row_count - top_row) when favor_bottom_rows
    is set.
    """
    score = candidate.pattern.priority
    if favor_bottom_rows:
        score += BOTTOM_ROW_WEIGHT * (row_count - candidate.top_row)
    return score


class MatchSolver:
    """
    Searches a board for pattern matches and picks the best swap.

    Stateless apart from the (immutable) pattern library, so one instance
    can serve any number of boards.

    Example:
        solver = MatchSolver(PatternLibrary.from_file("patterns.txt"))
        solution = solver.solve(board, geometry)
        if solution:
            print(solution.src_point, solution.dst_point)
    """

    def __init__(self, library: PatternLibrary):
        self.library = library

    def find_color_candidates(self, board: Board, color: PieceColor) -> List[MatchCandidate]:
        """
        Find all matches for a single color.

        Positions are scanned row-major; at each position the 4x4 window is
        tested before the 3x3 window, patterns in library order.
        """
        mask = board.color_mask(color)
        candidates: List[MatchCandidate] = []

        for i in range(board.rows):
            for j in range(board.cols):
                for side in SEARCH_SIDES:
                    if i > board.rows - side or j > board.cols - side:
                        continue
                    bits = window_mask(mask, i, j, side)
                    for pattern in self.library.patterns_for(side):
                        if pattern.matches(bits):
                            candidates.append(MatchCandidate(pattern, i, j, color))

        return candidates

    def find_candidates(self, board: Board) -> List[MatchCandidate]:
        """
        Find all matches on the board, colors in PieceColor order.

        Raises:
            ValueError: If board is not a Board (wrong shape is rejected
                when the Board is built)
        """
        if not isinstance(board, Board):
            raise ValueError(f"Expected Board, got {type(board).__name__}")

        candidates: List[MatchCandidate] = []
        for color in PieceColor:
            found = self.find_color_candidates(board, color)
            if found:
                logger.debug(
                    f"Color {color.name}: {board.count(color)} jewels on board, "
                    f"{len(found)} patterns found"
                )
            candidates.extend(found)
        return candidates

    def rank(self, candidates: Sequence[MatchCandidate], favor_bottom_rows: bool = False,
             row_count: int = 8) -> Optional[MatchCandidate]:
        """
        Pick the highest scoring candidate.

        Ties keep the earliest candidate in search order.

        Returns:
            Best candidate, or None if there are none
        """
        best: Optional[MatchCandidate] = None
        best_score = 0
        for candidate in candidates:
            score = score_candidate(candidate, favor_bottom_rows, row_count)
            if best is None or score > best_score:
                best = candidate
                best_score = score
        return best

    def solve(self, board: Board, geometry: Optional[BoardGeometry] = None,
              favor_bottom_rows: bool = False) -> Optional[Solution]:
        """
        Find the best swap on the board.

        Args:
            board: Classified 8x8 board
            geometry: Pixel geometry used for the click points; grid units
                (x = column, y = row) when omitted
            favor_bottom_rows: Add the bottom-row bonus to scores

        Returns:
            Solution, or None when no pattern matches
        """
        geometry = geometry or GRID_GEOMETRY
        candidates = self.find_candidates(board)
        if not candidates:
            logger.debug("No valid patterns found on board")
            return None

        best = self.rank(candidates, favor_bottom_rows, board.rows)
        score = score_candidate(best, favor_bottom_rows, board.rows)

        solution = Solution(
            candidate=best,
            score=score,
            src_point=geometry.cell_center(*best.src_cell),
            dst_point=geometry.cell_center(*best.dst_cell),
            candidate_count=len(candidates),
        )
        logger.debug(f"Best of {len(candidates)} candidates: {solution.describe()}")
        return solution


def solve(board: Board, library: PatternLibrary, geometry: Optional[BoardGeometry] = None,
          favor_bottom_rows: bool = False) -> Optional[Solution]:
    """Convenience wrapper: MatchSolver(library).solve(...)."""
    return MatchSolver(library).solve(board, geometry, favor_bottom_rows)
