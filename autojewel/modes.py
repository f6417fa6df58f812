"""
Game Modes - Per-mode board layout and geometry resolution.

Board offsets are measured on a 1024x802 reference client area and scaled
to the captured image size.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .matcher.geometry import BoardGeometry


# Reference layout (client area the offsets were measured on)
REFERENCE_WIDTH = 1024
REFERENCE_HEIGHT = 802
REFERENCE_CELL_SIZE = 82
WINDOW_MARGIN = 8   # Frame pixels not part of the reference width
BORDER = 4          # Window border in front of the board offsets


class GameMode(Enum):
    """Supported game modes."""
    CLASSIC = "classic"
    ZEN = "zen"
    LIGHTNING = "lightning"
    ICE_STORM = "ice_storm"
    BALANCE = "balance"

    @classmethod
    def parse(cls, name: str) -> 'GameMode':
        """
        Parse a mode name, case-insensitive ("Ice Storm", "ice-storm" ok).

        Raises:
            ValueError: If the name is not a known mode
        """
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            available = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown game mode: {name}. Available: {available}") from None


@dataclass(frozen=True)
class ModeLayout:
    """
    Reference board placement for one mode.

    Attributes:
        board_left_ref: Board left edge at reference scale
        board_top_ref: Board top edge at reference scale
        favor_bottom_rows: Prefer matches lower on the board
    """
    board_left_ref: int
    board_top_ref: int
    favor_bottom_rows: bool = False


MODE_LAYOUTS: Dict[GameMode, ModeLayout] = {
    GameMode.CLASSIC: ModeLayout(338, 77, favor_bottom_rows=True),
    GameMode.ZEN: ModeLayout(338, 77),
    GameMode.LIGHTNING: ModeLayout(338, 115),
    GameMode.ICE_STORM: ModeLayout(338, 105),
    GameMode.BALANCE: ModeLayout(293, 103),
}


def get_layout(mode: GameMode) -> ModeLayout:
    """Get the reference layout for a mode."""
    return MODE_LAYOUTS[mode]


def resolve_geometry(image_width: int, image_height: int,
                     mode: GameMode = GameMode.CLASSIC) -> BoardGeometry:
    """
    Scale a mode's reference layout to a captured image.

    factor = (width - 8) / 1024; the board top is measured from the bottom
    edge because the title bar height varies between systems.

    Args:
        image_width: Captured window width in pixels
        image_height: Captured window height in pixels
        mode: Game mode whose layout to use

    Returns:
        BoardGeometry in image pixels

    Raises:
        ValueError: If the image is too small to hold a board
    """
    if image_width <= WINDOW_MARGIN or image_height <= 0:
        raise ValueError(f"Image too small for board: {image_width}x{image_height}")

    layout = MODE_LAYOUTS[mode]
    factor = (image_width - WINDOW_MARGIN) / REFERENCE_WIDTH

    cell = int(round(factor * REFERENCE_CELL_SIZE))
    left = int(round(factor * (layout.board_left_ref - BORDER))) + BORDER
    bottom_gap = REFERENCE_HEIGHT - layout.board_top_ref - BORDER
    top = image_height - (int(round(factor * bottom_gap)) + BORDER)

    return BoardGeometry(left=left, top=top, cell_width=cell, cell_height=cell)
