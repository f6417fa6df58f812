"""
Board Scanner - Samples a captured image into a Board of piece colors.

Each cell is sampled over a centered square window (by default the
36.6%-61.0% band of the cell, about a quarter of its area) to stay clear of
cell borders and jewel highlights.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np
from PIL import Image

from ..matcher.board import Board, PieceColor
from ..matcher.geometry import BoardGeometry
from .classifier import normalize_near_gray, rgb_to_hue_saturation, classify_color


# Sampling window as fractions of the cell width
SAMPLE_START = 0.366
SAMPLE_END = 0.610


@dataclass(frozen=True)
class SampleInset:
    """Fractional bounds of the sampling window inside a cell."""
    start: float = SAMPLE_START
    end: float = SAMPLE_END

    def offsets(self, cell_size: int) -> Tuple[int, int]:
        """Pixel offsets [lo, hi) of the window for a given cell size."""
        return int(round(cell_size * self.start)), int(round(cell_size * self.end))


@dataclass(frozen=True)
class CellSample:
    """Per-cell sampling result."""
    row: int
    col: int
    rgb: Tuple[int, int, int]     # Averaged color before gray normalization
    hue: int                      # Degrees
    saturation: int               # Permille
    color: PieceColor


ImageLike = Union[Image.Image, np.ndarray]


def to_rgb_array(image: ImageLike) -> np.ndarray:
    """Convert a PIL image or numpy array into an (H, W, 3) RGB array."""
    if isinstance(image, Image.Image):
        if image.mode != "RGB":
            image = image.convert("RGB")
        return np.asarray(image)

    array = np.asarray(image)
    if array.ndim == 2:
        return np.stack([array] * 3, axis=-1)
    if array.ndim != 3 or array.shape[2] < 3:
        raise ValueError(f"Expected an RGB image array, got shape {array.shape}")
    return array[:, :, :3]


class BoardScanner:
    """
    Samples board cells from an image and classifies their colors.

    Example:
        scanner = BoardScanner()
        board = scanner.scan(image, geometry)
    """

    def __init__(self, inset: SampleInset = SampleInset()):
        self.inset = inset

    def scan_samples(self, image: ImageLike, geometry: BoardGeometry) -> List[List[CellSample]]:
        """
        Sample and classify every cell.

        Args:
            image: RGB image (PIL or numpy) containing the board
            geometry: Resolved board geometry in image pixels

        Returns:
            Rows of CellSample

        Raises:
            ValueError: If a sampling window falls outside the image
        """
        pixels = to_rgb_array(image)
        height, width = pixels.shape[:2]
        lo, hi = self.inset.offsets(geometry.cell_width)
        if hi <= lo:
            raise ValueError(f"Empty sampling window for cell width {geometry.cell_width}")

        samples: List[List[CellSample]] = []
        for row in range(geometry.rows):
            sample_row = []
            for col in range(geometry.cols):
                x, y = geometry.cell_origin(row, col)
                x1, x2 = x + lo, x + hi
                y1, y2 = y + lo, y + hi
                if x1 < 0 or y1 < 0 or x2 > width or y2 > height:
                    raise ValueError(
                        f"Cell ({row},{col}) samples [{x1}:{x2}, {y1}:{y2}] "
                        f"outside {width}x{height} image"
                    )

                window = pixels[y1:y2, x1:x2].astype(np.int64)
                count = window.shape[0] * window.shape[1]
                r, g, b = (int(v) // count for v in window.reshape(-1, 3).sum(axis=0))

                hue, saturation = rgb_to_hue_saturation(*normalize_near_gray(r, g, b))
                sample_row.append(CellSample(
                    row=row,
                    col=col,
                    rgb=(r, g, b),
                    hue=hue,
                    saturation=saturation,
                    color=classify_color(hue, saturation),
                ))
            samples.append(sample_row)

        return samples

    def scan(self, image: ImageLike, geometry: BoardGeometry) -> Board:
        """
        Sample the image into a Board.

        Raises:
            ValueError: If sampling falls outside the image or the geometry
                is not 8x8
        """
        samples = self.scan_samples(image, geometry)
        return Board.from_rows([[s.color for s in row] for row in samples])


def scan_board(image: ImageLike, geometry: BoardGeometry,
               inset: SampleInset = SampleInset()) -> Board:
    """Convenience wrapper: BoardScanner(inset).scan(image, geometry)."""
    return BoardScanner(inset).scan(image, geometry)
