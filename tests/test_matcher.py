"""
Test script for the match solver

Covers:
1. Board construction and occupancy masks
2. Window bitmasks and candidate search
3. Ranking, bottom-row bonus and tie-breaks
4. Cell-to-pixel mapping of the chosen swap

Usage:
    python tests/test_matcher.py
    pytest tests/test_matcher.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from autojewel.matcher import (
    Board,
    BoardGeometry,
    MatchSolver,
    PatternLibrary,
    PieceColor,
    score_candidate,
    solve,
    window_mask,
)


# T shape: the jewel below the gap moves up to complete the row
T_TEMPLATE = "XBX\n-A-\n---\n"
# Four in a row with the source under the gap
LINE_TEMPLATE = "XXBX\n--A-\n----\n----\n"


def checkerboard(a: PieceColor = PieceColor.ORANGE,
                 b: PieceColor = PieceColor.WHITE):
    """8x8 two-color checkerboard: no two neighbours share a color."""
    return [[a if (r + c) % 2 == 0 else b for c in range(8)] for r in range(8)]


def plant(grid, color: PieceColor, cells):
    """Set the given (row, col) cells to a color."""
    for r, c in cells:
        grid[r][c] = color
    return grid


def t_cells(top: int, left: int):
    """Cells of an upright T whose bar starts at (top, left)."""
    return [(top, left), (top, left + 1), (top, left + 2), (top + 1, left + 1)]


def test_board_construction():
    """Boards are 8x8 only and round-trip through letter strings."""
    print("\n" + "="*60)
    print("TEST: Board")
    print("="*60)

    grid = checkerboard()
    board = Board.from_rows(grid)
    print(f"  Board:\n{board.to_string()}")

    assert board.rows == 8 and board.cols == 8
    assert Board.from_string(board.to_string()) == board
    assert hash(Board.from_rows(grid)) == hash(board)
    assert board.count(PieceColor.ORANGE) == 32
    assert board.count(PieceColor.RED) == 0

    mask = board.color_mask(PieceColor.ORANGE)
    assert mask[0][0] == 1 and mask[0][1] == 0 and mask[1][1] == 1

    for bad in ([row[:7] for row in grid], grid[:7], []):
        try:
            Board.from_rows(bad)
            assert False, "Expected ValueError for non 8x8 board"
        except ValueError:
            pass

    try:
        board.get_cell(8, 0)
        assert False, "Expected IndexError"
    except IndexError:
        pass

    print("  [PASS] Board tests")


def test_window_mask():
    """Top-left cell is the highest bit, bottom-right is bit 0."""
    mask = [[0] * 8 for _ in range(8)]
    mask[2][3] = 1
    assert window_mask(mask, 2, 3, 3) == 1 << 8
    assert window_mask(mask, 2, 3, 4) == 1 << 15
    assert window_mask(mask, 0, 1, 3) == 1
    assert window_mask(mask, 0, 0, 4) == 1 << 4   # (2, 3) -> index 11
    assert window_mask(mask, 3, 3, 3) == 0

    full = [[1] * 8 for _ in range(8)]
    assert window_mask(full, 5, 5, 3) == 0b111111111
    assert window_mask(full, 4, 4, 4) == 0xFFFF


def test_planted_match():
    """A single planted T is found with the template's properties."""
    print("\n" + "="*60)
    print("TEST: Planted Match")
    print("="*60)

    library = PatternLibrary.from_text(T_TEMPLATE)
    board = Board.from_rows(plant(checkerboard(), PieceColor.RED, t_cells(5, 2)))

    solver = MatchSolver(library)
    candidates = solver.find_candidates(board)
    print(f"  Candidates: {[(c.color.name, c.top_row, c.top_col) for c in candidates]}")
    assert len(candidates) == 1

    solution = solver.solve(board)
    assert solution is not None
    print(f"  Solution: {solution.describe()}")

    assert solution.side_length == 3
    assert solution.priority == 4
    assert solution.candidate.color is PieceColor.RED
    assert (solution.candidate.top_row, solution.candidate.top_col) == (5, 2)
    assert solution.src_cell == (6, 3)
    assert solution.dst_cell == (5, 3)
    assert solution.candidate_count == 1

    # Without geometry points are in grid units (x = col, y = row)
    assert solution.src_point == (3, 6)
    assert solution.dst_point == (3, 5)

    print("  [PASS] Planted match")


def test_no_match():
    """Boards with 0 or 1 jewel of a color (and no other match) give None."""
    library = PatternLibrary.from_text(T_TEMPLATE + "\n" + LINE_TEMPLATE)

    assert solve(Board.from_rows(checkerboard()), library) is None

    lone = plant(checkerboard(), PieceColor.RED, [(4, 4)])
    assert solve(Board.from_rows(lone), library) is None

    # Three of the four T cells is not enough
    partial = plant(checkerboard(), PieceColor.GREEN, t_cells(2, 2)[:3])
    assert solve(Board.from_rows(partial), library) is None

    # Destination cell must already hold the color: R.R over .R. is not matched
    gap = plant(checkerboard(), PieceColor.RED, [(2, 2), (2, 4), (3, 3)])
    assert gap[2][3] is not PieceColor.RED
    assert solve(Board.from_rows(gap), library) is None
    assert solve(Board.from_rows(plant(gap, PieceColor.RED, [(2, 3)])), library) is not None


def test_coordinate_mapping():
    """Click points are cell centers under the supplied geometry."""
    library = PatternLibrary.from_text(T_TEMPLATE)
    board = Board.from_rows(plant(checkerboard(), PieceColor.RED, t_cells(5, 2)))
    geometry = BoardGeometry(left=100, top=50, cell_width=40, cell_height=36)

    solution = solve(board, library, geometry)
    assert solution is not None

    for (row, col), point in ((solution.src_cell, solution.src_point),
                              (solution.dst_cell, solution.dst_point)):
        expected = (100 + col * 40 + 40 // 2, 50 + row * 36 + 36 // 2)
        assert point == expected, (point, expected)

    assert solution.src_point == (240, 284)
    assert solution.dst_point == (240, 248)


def test_geometry():
    """BoardGeometry maps cells and rejects cells outside the board."""
    geometry = BoardGeometry(left=338, top=105, cell_width=82, cell_height=82)
    assert geometry.cell_origin(0, 0) == (338, 105)
    assert geometry.cell_center(0, 0) == (379, 146)
    assert geometry.cell_center(7, 7) == (338 + 7 * 82 + 41, 105 + 7 * 82 + 41)
    assert geometry.bounds == (338, 105, 656, 656)

    try:
        geometry.cell_center(0, 8)
        assert False, "Expected IndexError"
    except IndexError:
        pass


def test_priority_wins_without_bonus():
    """Higher-priority 4x4 match beats a 3x3 match when unbiased."""
    print("\n" + "="*60)
    print("TEST: Ranking")
    print("="*60)

    library = PatternLibrary.from_text(T_TEMPLATE + "\n" + LINE_TEMPLATE)
    grid = checkerboard()
    plant(grid, PieceColor.RED, t_cells(0, 0))
    plant(grid, PieceColor.BLUE, [(4, 0), (4, 1), (4, 2), (4, 3), (5, 2)])
    board = Board.from_rows(grid)

    solver = MatchSolver(library)
    candidates = solver.find_candidates(board)
    found = [(c.color.name, c.top_row, c.top_col, c.pattern.side_length) for c in candidates]
    print(f"  Candidates: {found}")
    assert found == [
        ("RED", 0, 0, 3),
        ("BLUE", 4, 0, 4),
        ("BLUE", 4, 1, 3),
    ]

    solution = solver.solve(board)
    assert solution.candidate.color is PieceColor.BLUE
    assert solution.side_length == 4
    assert solution.score == 5
    assert solution.src_cell == (5, 2)
    assert solution.dst_cell == (4, 2)

    # Row bonus 2 * (8 - top_row) outweighs the priority difference
    biased = solver.solve(board, favor_bottom_rows=True)
    assert biased.candidate.color is PieceColor.RED
    assert biased.score == 4 + 2 * 8

    print("  [PASS] Ranking tests")


def test_score_candidate():
    """Score is priority plus the optional row bonus."""
    library = PatternLibrary.from_text(T_TEMPLATE)
    board = Board.from_rows(plant(checkerboard(), PieceColor.RED, t_cells(5, 2)))
    candidate = MatchSolver(library).find_candidates(board)[0]

    assert score_candidate(candidate) == 4
    assert score_candidate(candidate, favor_bottom_rows=True) == 4 + 2 * (8 - 5)


def test_tie_break_order():
    """Equal scores keep the first color, then the first position."""
    library = PatternLibrary.from_text(T_TEMPLATE)

    # Same color: upper match is scanned first
    grid = checkerboard()
    plant(grid, PieceColor.GREEN, t_cells(0, 0))
    plant(grid, PieceColor.GREEN, t_cells(5, 4))
    solution = solve(Board.from_rows(grid), library)
    assert (solution.candidate.top_row, solution.candidate.top_col) == (0, 0)
    assert solution.candidate_count == 2

    # Different colors: RED is iterated before BLUE regardless of position
    grid = checkerboard()
    plant(grid, PieceColor.BLUE, t_cells(0, 0))
    plant(grid, PieceColor.RED, t_cells(5, 4))
    solution = solve(Board.from_rows(grid), library)
    assert solution.candidate.color is PieceColor.RED
    assert (solution.candidate.top_row, solution.candidate.top_col) == (5, 4)


def test_all_orientations_found():
    """Each rotation of a planted shape is matched by its own pattern."""
    library = PatternLibrary.from_text(T_TEMPLATE)
    orientations = {
        "up": [(2, 2), (2, 3), (2, 4), (3, 3)],
        "down": [(3, 2), (3, 3), (3, 4), (2, 3)],
        "left": [(2, 2), (3, 2), (4, 2), (3, 3)],
        "right": [(2, 3), (3, 3), (4, 3), (3, 2)],
    }
    shapes = set()
    for name, cells in orientations.items():
        board = Board.from_rows(plant(checkerboard(), PieceColor.PURPLE, cells))
        solution = solve(board, library)
        assert solution is not None, name
        # Source and destination are adjacent cells
        (r1, c1), (r2, c2) = solution.src_cell, solution.dst_cell
        assert abs(r1 - r2) + abs(c1 - c2) == 1, name
        shapes.add(solution.pattern.shape)
    assert len(shapes) == 4


def test_determinism():
    """Repeated solves of a tied board give identical solutions."""
    print("\n" + "="*60)
    print("TEST: Determinism")
    print("="*60)

    # Two equal-priority red Ts: the tie must resolve the same way every time
    grid = checkerboard()
    plant(grid, PieceColor.RED, t_cells(0, 0))
    plant(grid, PieceColor.RED, t_cells(5, 4))
    board = Board.from_rows(grid)
    geometry = BoardGeometry(left=10, top=10, cell_width=50, cell_height=50)

    libraries = [
        PatternLibrary.from_text(T_TEMPLATE + "\n" + LINE_TEMPLATE),
        PatternLibrary.from_file(Path(__file__).parent.parent / "patterns.txt"),
    ]
    for library in libraries:
        for favor in (False, True):
            first = solve(board, library, geometry, favor_bottom_rows=favor)
            second = MatchSolver(library).solve(board, geometry, favor_bottom_rows=favor)
            third = solve(Board.from_string(board.to_string()), library, geometry,
                          favor_bottom_rows=favor)
            print(f"  favor={favor}: {first.describe() if first else None}")

            assert first is not None
            assert first.candidate_count >= 2
            assert first == second == third
            assert first.score == score_candidate(first.candidate, favor_bottom_rows=favor)
            assert (first.candidate.top_row, first.candidate.top_col) == (0, 0)
            assert first.src_cell == (1, 1)
            assert first.dst_cell == (0, 1)
            assert first.src_point == (10 + 50 + 25, 10 + 50 + 25)

    # Unbiased the tie holds on score alone
    candidates = MatchSolver(libraries[0]).find_candidates(board)
    assert [score_candidate(c) for c in candidates] == [4, 4]

    print("  [PASS] Determinism tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# MATCH SOLVER TESTS")
    print("#"*60)

    tests = [
        ("Board", test_board_construction),
        ("Window Mask", test_window_mask),
        ("Planted Match", test_planted_match),
        ("No Match", test_no_match),
        ("Coordinate Mapping", test_coordinate_mapping),
        ("Geometry", test_geometry),
        ("Ranking", test_priority_wins_without_bonus),
        ("Score", test_score_candidate),
        ("Tie Break", test_tie_break_order),
        ("Orientations", test_all_orientations_found),
        ("Determinism", test_determinism),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {name}: {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)
    for name, passed in results:
        print(f"  {name}: [{'PASS' if passed else 'FAIL'}]")

    return 0 if all(passed for _, passed in results) else 1


if __name__ == "__main__":
    sys.exit(main())
