"""
Board Analyzer - Capture-to-move pipeline for one frame.

Resolves the board geometry for the current mode, scans the image and
solves the board. Window capture and input simulation stay with the caller.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from .matcher import Board, BoardGeometry, MatchSolver, PatternLibrary, Solution
from .modes import GameMode, get_layout, resolve_geometry
from .vision import BoardScanner, ImageLike, SampleInset, to_rgb_array


logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """
    Result of analyzing one captured frame.

    Attributes:
        board: Classified board
        geometry: Geometry the board was sampled with
        solution: Chosen swap, or None if the board has no match
        elapsed_ms: Time taken in milliseconds
    """
    board: Board
    geometry: BoardGeometry
    solution: Optional[Solution]
    elapsed_ms: float = 0.0

    @property
    def has_move(self) -> bool:
        return self.solution is not None


class BoardAnalyzer:
    """
    Runs scan + solve on captured frames for a given game mode.

    Example:
        analyzer = BoardAnalyzer(PatternLibrary.from_file(), GameMode.ZEN)
        result = analyzer.analyze(Image.open("capture.png"))
        if result.solution:
            src, dst = solution_to_screen(result.solution, (win_left, win_top))
    """

    def __init__(self, library: PatternLibrary, mode: GameMode = GameMode.CLASSIC,
                 inset: SampleInset = SampleInset()):
        self.mode = mode
        self._solver = MatchSolver(library)
        self._scanner = BoardScanner(inset)

    @property
    def favor_bottom_rows(self) -> bool:
        """Whether the current mode ranks lower matches higher."""
        return get_layout(self.mode).favor_bottom_rows

    def analyze(self, image: ImageLike) -> AnalysisResult:
        """
        Analyze one frame.

        Args:
            image: Captured window image (PIL or numpy RGB)

        Returns:
            AnalysisResult with board, geometry and solution

        Raises:
            ValueError: If the board does not fit inside the image
        """
        start_time = time.perf_counter()

        pixels = to_rgb_array(image)
        height, width = pixels.shape[:2]
        geometry = resolve_geometry(width, height, self.mode)
        logger.debug(
            f"Analyzing {width}x{height} frame in {self.mode.value} mode - "
            f"board at ({geometry.left},{geometry.top}), "
            f"cell {geometry.cell_width}x{geometry.cell_height}"
        )

        board = self._scanner.scan(pixels, geometry)
        logger.debug(f"Detected board:\n{board.to_string()}")

        solution = self._solver.solve(board, geometry, self.favor_bottom_rows)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if solution is None:
            logger.debug("No solution found")
        else:
            logger.info(f"Solution found: {solution.describe()} ({elapsed_ms:.1f}ms)")

        return AnalysisResult(board=board, geometry=geometry,
                              solution=solution, elapsed_ms=elapsed_ms)


def solution_to_screen(solution: Solution,
                       window_origin: Tuple[int, int]) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Translate a solution's image-relative points into screen coordinates.

    Args:
        solution: Solution from analyze()
        window_origin: (left, top) of the captured window on screen

    Returns:
        (source_point, destination_point) on screen
    """
    ox, oy = window_origin
    src = (solution.src_point[0] + ox, solution.src_point[1] + oy)
    dst = (solution.dst_point[0] + ox, solution.dst_point[1] + oy)
    return src, dst


def is_point_in_window(point: Tuple[int, int], rect: Tuple[int, int, int, int]) -> bool:
    """
    Check that a point lies strictly inside a window rectangle.

    Args:
        point: (x, y) screen point
        rect: (x, y, width, height) window rectangle
    """
    x, y = point
    left, top, width, height = rect
    return left < x < left + width and top < y < top + height
