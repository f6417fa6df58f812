"""
Matcher Package - Pattern library and swap solver for the jewel board.

Public API:
    - PieceColor: Jewel color palette
    - Board: Immutable 8x8 board of colors
    - BoardGeometry: Pixel layout and cell-to-pixel mapping
    - Pattern: Compiled match shape
    - PatternLibrary: Loads and symmetry-expands shape templates
    - MatchCandidate / Solution: Search results
    - MatchSolver / solve(): Finds the best swap

Usage:
    from autojewel.matcher import PatternLibrary, MatchSolver, Board

    library = PatternLibrary.from_file("patterns.txt")
    solver = MatchSolver(library)
    solution = solver.solve(board, geometry, favor_bottom_rows=True)

    if solution:
        print(f"Drag {solution.src_point} -> {solution.dst_point}")
"""

from .board import Board, PieceColor
from .geometry import BoardGeometry, ROW_COUNT, COL_COUNT
from .pattern import Pattern
from .library import (
    PatternLibrary,
    MalformedPatternError,
    DEFAULT_PATTERNS_FILE,
    parse_templates,
    compile_shape,
    shape_orbit,
    rotate_shape,
    flip_shape_horizontal,
    flip_shape_vertical,
)
from .solution import MatchCandidate, Solution
from .solver import MatchSolver, solve, score_candidate, window_mask

__all__ = [
    # Data structures
    "PieceColor",
    "Board",
    "BoardGeometry",
    "ROW_COUNT",
    "COL_COUNT",
    "Pattern",
    "MatchCandidate",
    "Solution",
    # Pattern library
    "PatternLibrary",
    "MalformedPatternError",
    "DEFAULT_PATTERNS_FILE",
    "parse_templates",
    "compile_shape",
    "shape_orbit",
    "rotate_shape",
    "flip_shape_horizontal",
    "flip_shape_vertical",
    # Solver
    "MatchSolver",
    "solve",
    "score_candidate",
    "window_mask",
]
