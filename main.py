"""
AutoJewel - Entry Point

Analyzes captured game window screenshots and reports the swap to make.

Example:
    python main.py capture.png
    python main.py capture.png --mode zen --debug
    python main.py shots/*.png --mode lightning --remember
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List

from PIL import Image

from autojewel.analyzer import BoardAnalyzer
from autojewel.matcher import PatternLibrary, MalformedPatternError
from autojewel.modes import GameMode
from autojewel.settings import load_settings, save_settings


logger = logging.getLogger(__name__)


def setup_logging(debug: bool) -> None:
    """Configure logging - output to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("autojewel.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AutoJewel - find the next swap on a captured match-three board"
    )
    parser.add_argument(
        "images",
        nargs="+",
        help="Captured game window screenshots"
    )
    parser.add_argument(
        "--mode", "-m",
        default=None,
        help="Game mode: " + ", ".join(m.value for m in GameMode) + " (default: from config.json)"
    )
    parser.add_argument(
        "--patterns", "-p",
        default=None,
        help="Pattern template file (default: from config.json)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--remember",
        action="store_true",
        help="Save the selected mode to config.json"
    )
    return parser.parse_args(argv)


def analyze_images(analyzer: BoardAnalyzer, paths: List[str]) -> int:
    """
    Analyze each screenshot and print the result.

    Returns:
        Exit code (1 if any image could not be read)
    """
    exit_code = 0
    for path in paths:
        try:
            with Image.open(path) as image:
                result = analyzer.analyze(image.convert("RGB"))
        except OSError as e:
            logger.error(f"Cannot read image {path}: {e}")
            exit_code = 1
            continue
        except ValueError as e:
            logger.error(f"Board does not fit in {path}: {e}")
            exit_code = 1
            continue

        print(f"\n{path}")
        for line in result.board.to_string().splitlines():
            print(f"  {line}")

        solution = result.solution
        if solution is None:
            print("  No move found")
            continue
        print(f"  Move: {solution.src_cell} -> {solution.dst_cell} "
              f"({solution.side_length}x{solution.side_length} pattern, "
              f"priority {solution.priority}, score {solution.score})")
        print(f"  Click: {solution.src_point} -> {solution.dst_point}")

    return exit_code


def main(argv=None) -> int:
    """Load patterns and analyze the given screenshots."""
    args = parse_args(argv)
    settings = load_settings()

    setup_logging(args.debug or settings.get("debug_enabled", False))

    try:
        mode = GameMode.parse(args.mode or settings["mode"])
    except ValueError as e:
        logger.error(str(e))
        return 2

    if args.remember and args.mode:
        settings["mode"] = mode.value
        save_settings(settings)

    patterns_file = Path(args.patterns or settings["patterns_file"])
    try:
        library = PatternLibrary.from_file(patterns_file)
    except (FileNotFoundError, MalformedPatternError) as e:
        logger.error(f"Cannot load patterns: {e}")
        return 2

    logger.info(f"Analyzing {len(args.images)} image(s) in {mode.value} mode")
    analyzer = BoardAnalyzer(library, mode)
    return analyze_images(analyzer, args.images)


if __name__ == "__main__":
    sys.exit(main())
