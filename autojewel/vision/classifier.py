"""
Color Classifier - Maps sampled jewel colors onto the fixed piece palette.

Hue/saturation are HSL values: hue in degrees (0-360), saturation in
permille (0-1000).
"""

from typing import Tuple

import cv2
import numpy as np

from ..matcher.board import PieceColor


# Reference hue for each color (degrees)
HUE_RED = 350
HUE_PURPLE = 300
HUE_BLUE = 210
HUE_GREEN = 130
HUE_YELLOW = 55
HUE_ORANGE = 31
HUE_WHITE = 10

# Samples below this saturation (permille) are treated as neutral
SATURATION_THRESHOLD = 180

# Relative tolerance for collapsing near-gray samples (R ~ G ~ B)
GRAY_TOLERANCE = 0.15

# Arc boundaries, highest first: a hue strictly above the boundary
# belongs to the paired color
HUE_BOUNDARIES: Tuple[Tuple[int, PieceColor], ...] = (
    ((HUE_RED + HUE_PURPLE) // 2, PieceColor.RED),
    ((HUE_PURPLE + HUE_BLUE) // 2, PieceColor.PURPLE),
    ((HUE_BLUE + HUE_GREEN) // 2, PieceColor.BLUE),
    ((HUE_GREEN + HUE_YELLOW) // 2, PieceColor.GREEN),
    ((HUE_YELLOW + HUE_ORANGE) // 2, PieceColor.YELLOW),
    ((HUE_ORANGE + HUE_WHITE) // 2, PieceColor.ORANGE),
)


def classify_color(hue: float, saturation: float) -> PieceColor:
    """
    Classify a hue/saturation sample into a piece color.

    Args:
        hue: Hue in degrees, wrapped into [0, 360)
        saturation: HSL saturation in permille

    Returns:
        PieceColor whose hue arc contains the sample, WHITE for
        washed-out samples
    """
    if saturation < SATURATION_THRESHOLD:
        return PieceColor.WHITE

    hue = hue % 360
    for boundary, color in HUE_BOUNDARIES:
        if hue > boundary:
            return color
    return PieceColor.WHITE


def normalize_near_gray(r: int, g: int, b: int) -> Tuple[int, int, int]:
    """
    Collapse near-gray samples onto pure gray.

    Low-chroma pixels produce unstable hues; when G and B are both within
    GRAY_TOLERANCE of R the sample becomes (R, R, R).
    """
    if r <= 0:
        return r, g, b
    if abs(g / r - 1) < GRAY_TOLERANCE and abs(b / r - 1) < GRAY_TOLERANCE:
        return r, r, r
    return r, g, b


def rgb_to_hue_saturation(r: int, g: int, b: int) -> Tuple[int, int]:
    """
    Convert an 8-bit RGB triple to (hue degrees, HSL saturation permille).

    Both values are truncated to integers.
    """
    pixel = np.array([[[r, g, b]]], dtype=np.float32) / 255.0
    hls = cv2.cvtColor(pixel, cv2.COLOR_RGB2HLS)
    hue, _, saturation = (float(v) for v in hls[0, 0])
    return int(hue) % 360, int(saturation * 1000)


def classify_rgb(r: int, g: int, b: int) -> PieceColor:
    """Classify an averaged RGB sample (gray normalization, HSL, palette)."""
    r, g, b = normalize_near_gray(r, g, b)
    hue, saturation = rgb_to_hue_saturation(r, g, b)
    return classify_color(hue, saturation)
