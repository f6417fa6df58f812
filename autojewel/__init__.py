"""
AutoJewel - Finds the next swap on an 8x8 match-three board.

Packages:
    - autojewel.matcher: Pattern library, board model and swap solver
    - autojewel.vision: Color classification and board scanning
    - autojewel.modes: Per-mode board layout
    - autojewel.analyzer: Image-to-move pipeline
    - autojewel.settings: Persistent user settings
"""

__version__ = "1.0.0"
