"""
Vision Package - Turns a captured game image into a Board.

Usage:
    from autojewel.vision import scan_board, classify_color

    board = scan_board(image, geometry)
"""

from .classifier import (
    HUE_BOUNDARIES,
    SATURATION_THRESHOLD,
    GRAY_TOLERANCE,
    classify_color,
    classify_rgb,
    normalize_near_gray,
    rgb_to_hue_saturation,
)
from .scanner import (
    BoardScanner,
    CellSample,
    SampleInset,
    ImageLike,
    scan_board,
    to_rgb_array,
)

__all__ = [
    # Classifier
    "HUE_BOUNDARIES",
    "SATURATION_THRESHOLD",
    "GRAY_TOLERANCE",
    "classify_color",
    "classify_rgb",
    "normalize_near_gray",
    "rgb_to_hue_saturation",
    # Scanner
    "BoardScanner",
    "CellSample",
    "SampleInset",
    "ImageLike",
    "scan_board",
    "to_rgb_array",
]
