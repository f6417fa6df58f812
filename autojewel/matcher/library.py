"""
Pattern Library Module - Loads shape templates and expands their symmetries.

Template text format: templates separated by blank lines, each template is
side_length lines of side_length characters (side_length 3 or 4):

    A  source cell (the jewel to drag)
    B  destination cell (where it is dropped)
    X  cell that must already hold the searched color
    -  don't care

B is a required cell too: the destination must already hold the searched
color, so a template describes the swap that completes a match around it.

Example:
    A-B
    XXX
    ---

Every template is expanded into all of its rotations and mirror images so
the solver never rotates anything at search time.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from .pattern import Pattern

logger = logging.getLogger(__name__)


# Template characters
SOURCE_MARK = "A"
DEST_MARK = "B"
REQUIRED_MARK = "X"
DONT_CARE_MARK = "-"
TEMPLATE_CHARS = frozenset(SOURCE_MARK + DEST_MARK + REQUIRED_MARK + DONT_CARE_MARK)

# Supported template sizes (side length -> cell count)
SUPPORTED_SIDES = (3, 4)
SIDE_BY_CELLS = {side * side: side for side in SUPPORTED_SIDES}

# Default pattern file (project root)
DEFAULT_PATTERNS_FILE = Path("patterns.txt")


class MalformedPatternError(ValueError):
    """Raised when a shape template cannot be compiled."""


def _side_of(shape: str) -> int:
    """Side length of a flattened shape, ValueError for unsupported sizes."""
    side = SIDE_BY_CELLS.get(len(shape))
    if side is None:
        raise ValueError(f"Invalid pattern length {len(shape)}: {shape!r}")
    return side


def rotate_shape(shape: str) -> str:
    """
    Rotate a flattened shape 90 degrees clockwise.

    Cell (r, c) of the result comes from cell (n-1-c, r) of the input.
    Applying the rotation four times yields the original shape.
    """
    n = _side_of(shape)
    return "".join(
        shape[(n - 1 - c) * n + r]
        for r in range(n)
        for c in range(n)
    )


def flip_shape_horizontal(shape: str) -> str:
    """Mirror a flattened shape left-right (cells swap within each row)."""
    n = _side_of(shape)
    return "".join(shape[r * n:(r + 1) * n][::-1] for r in range(n))


def flip_shape_vertical(shape: str) -> str:
    """Mirror a flattened shape top-bottom (whole rows swap)."""
    n = _side_of(shape)
    return "".join(shape[r * n:(r + 1) * n] for r in reversed(range(n)))


def shape_orbit(shape: str) -> List[str]:
    """
    Expand a shape into its distinct rotations and reflections.

    Identity, horizontal flip and vertical flip are each rotated through
    four quarter turns (12 variants); duplicates are dropped keeping the
    first occurrence, so a symmetric shape yields fewer than 8.

    Returns:
        Distinct variants in generation order
    """
    seen: Dict[str, None] = {}
    for variant in (shape, flip_shape_horizontal(shape), flip_shape_vertical(shape)):
        for _ in range(4):
            seen.setdefault(variant, None)
            variant = rotate_shape(variant)
    return list(seen)


def compile_shape(shape: str) -> Pattern:
    """
    Compile one oriented shape into a Pattern.

    Source and destination cells count as required cells, so they are set
    in the mask alongside the X cells.

    Raises:
        MalformedPatternError: If the shape size is unsupported or the
            source/destination markers are not unique
    """
    side = SIDE_BY_CELLS.get(len(shape))
    if side is None:
        raise MalformedPatternError(
            f"Invalid pattern length {len(shape)} (expected 9 or 16): {shape!r}"
        )
    if shape.count(SOURCE_MARK) != 1 or shape.count(DEST_MARK) != 1:
        raise MalformedPatternError(
            f"Pattern needs exactly one '{SOURCE_MARK}' and one '{DEST_MARK}': {shape!r}"
        )

    top_bit = len(shape) - 1
    required_mask = 0
    for index, mark in enumerate(shape):
        if mark in (REQUIRED_MARK, SOURCE_MARK, DEST_MARK):
            required_mask |= 1 << (top_bit - index)

    return Pattern(
        side_length=side,
        required_mask=required_mask,
        move_src_index=shape.index(SOURCE_MARK),
        move_dst_index=shape.index(DEST_MARK),
        priority=bin(required_mask).count("1"),
        shape=shape,
    )


def _split_blocks(text: str) -> List[List[str]]:
    """Split template text into blocks of non-blank lines."""
    blocks: List[List[str]] = []
    current: List[str] = []
    for line in text.replace("\r\n", "\n").split("\n"):
        line = line.strip()
        if line:
            current.append(line)
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def parse_templates(text: str) -> List[str]:
    """
    Parse template text into flattened shape strings.

    Args:
        text: Template source (see module docstring)

    Returns:
        One flattened cell string per template, in file order

    Raises:
        MalformedPatternError: On a template of the wrong size, ragged
            lines, unknown characters or non-unique markers
    """
    shapes = []
    for number, lines in enumerate(_split_blocks(text), start=1):
        shape = "".join(lines)

        if len(shape) not in SIDE_BY_CELLS:
            raise MalformedPatternError(
                f"Template {number}: {len(shape)} cells, expected 9 (3x3) or 16 (4x4)"
            )
        side = SIDE_BY_CELLS[len(shape)]
        if len(lines) != side or any(len(line) != side for line in lines):
            raise MalformedPatternError(
                f"Template {number}: expected {side} lines of {side} characters, "
                f"got {[len(line) for line in lines]}"
            )

        unknown = set(shape) - TEMPLATE_CHARS
        if unknown:
            raise MalformedPatternError(
                f"Template {number}: unknown characters {''.join(sorted(unknown))!r}"
            )
        for mark in (SOURCE_MARK, DEST_MARK):
            if shape.count(mark) != 1:
                raise MalformedPatternError(
                    f"Template {number}: expected exactly one '{mark}', "
                    f"found {shape.count(mark)}"
                )

        shapes.append(shape)
    return shapes


class PatternLibrary:
    """
    Compiled, symmetry-expanded match patterns split by window size.

    Immutable once built; share one instance across solve calls.

    Example:
        library = PatternLibrary.from_file("patterns.txt")
        for pattern in library.patterns_3x3:
            print(pattern.mask_string(), pattern.priority)
    """

    def __init__(self, patterns: Iterable[Pattern], template_count: int = 0):
        """
        Initialize from already compiled patterns.

        Args:
            patterns: Compiled patterns, kept in the given order
            template_count: Number of authored templates they came from

        Raises:
            MalformedPatternError: If a pattern has an unsupported side length
        """
        by_side: Dict[int, List[Pattern]] = {side: [] for side in SUPPORTED_SIDES}
        for pattern in patterns:
            if pattern.side_length not in by_side:
                raise MalformedPatternError(
                    f"Unsupported pattern side length: {pattern.side_length}"
                )
            by_side[pattern.side_length].append(pattern)

        self._patterns: Dict[int, Tuple[Pattern, ...]] = {
            side: tuple(items) for side, items in by_side.items()
        }
        self._template_count = template_count

    @classmethod
    def from_text(cls, text: str) -> 'PatternLibrary':
        """
        Build a library from template text.

        Raises:
            MalformedPatternError: If any template is malformed
        """
        templates = parse_templates(text)

        # Dedup across templates too: two templates may share orientations
        variants: Dict[str, None] = {}
        for shape in templates:
            for variant in shape_orbit(shape):
                variants.setdefault(variant, None)

        library = cls((compile_shape(shape) for shape in variants),
                      template_count=len(templates))

        logger.info(
            f"Loaded {len(library.patterns_3x3)} 3x3 patterns and "
            f"{len(library.patterns_4x4)} 4x4 patterns from {len(templates)} templates"
        )
        if library.patterns_3x3:
            example = library.patterns_3x3[0]
            logger.debug(
                f"Example 3x3 pattern: mask={example.mask_string()}, "
                f"priority={example.priority}, src={example.move_src_index}, "
                f"dst={example.move_dst_index}"
            )
        return library

    @classmethod
    def from_file(cls, path: Union[str, Path] = DEFAULT_PATTERNS_FILE) -> 'PatternLibrary':
        """
        Load a library from a template file (ASCII).

        Raises:
            FileNotFoundError: If the file does not exist
            MalformedPatternError: If any template is malformed
        """
        path = Path(path)
        logger.debug(f"Loading patterns from: {path}")
        if not path.exists():
            logger.error(f"Pattern file not found: {path}")
            raise FileNotFoundError(f"Pattern file not found: {path}")

        text = path.read_text(encoding="ascii")
        try:
            return cls.from_text(text)
        except MalformedPatternError as e:
            logger.error(f"Invalid pattern file {path}: {e}")
            raise

    @property
    def patterns_3x3(self) -> Tuple[Pattern, ...]:
        """Compiled 3x3 patterns in load order."""
        return self._patterns[3]

    @property
    def patterns_4x4(self) -> Tuple[Pattern, ...]:
        """Compiled 4x4 patterns in load order."""
        return self._patterns[4]

    def patterns_for(self, side_length: int) -> Tuple[Pattern, ...]:
        """
        Get the collection for one window size.

        Raises:
            KeyError: If side_length is not 3 or 4
        """
        return self._patterns[side_length]

    @property
    def template_count(self) -> int:
        """Number of authored templates the library was built from."""
        return self._template_count

    def __len__(self) -> int:
        return sum(len(items) for items in self._patterns.values())

    def __iter__(self):
        for side in SUPPORTED_SIDES:
            yield from self._patterns[side]
