"""
Word search path finder.

Usage:
    python -m wordsearch.cli <puzzle_file> [--encoding ENC] [--timings] [--verbose]

For every puzzle chunk in the file, prints a "Query <n>:" header followed by
every adjacency path spelling each of the chunk's words, sorted.
"""
import argparse
import codecs
import logging
import sys
from pathlib import Path

from wordsearch.metrics import StageTimer
from wordsearch.parser import PuzzleFormatError, parse_puzzles
from wordsearch.settings import settings
from wordsearch.solver import solve_all

logger = logging.getLogger("wordsearch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordsearch",
        description="Find every path of adjacent grid cells spelling each word of a puzzle",
    )
    parser.add_argument("puzzle_file", nargs="?", help="Path to the puzzle input file")
    parser.add_argument("--encoding", default=settings.INPUT_ENCODING,
                        help=f"Input file encoding (default: {settings.INPUT_ENCODING})")
    parser.add_argument("--timings", action="store_true", default=settings.LOG_TIMINGS,
                        help="Log per-stage timings when done")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging (per word and per stage)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.puzzle_file is None:
        parser.print_usage()
        print("Please provide the puzzle file path as an argument.")
        return 0

    if args.verbose:
        level = logging.DEBUG
    elif args.timings:
        level = logging.INFO
    else:
        level = settings.LOG_LEVEL.upper()
        if not isinstance(logging.getLevelName(level), int):
            parser.error(f"invalid LOG_LEVEL: {settings.LOG_LEVEL}")
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        codecs.lookup(args.encoding)
    except LookupError:
        parser.error(f"unknown encoding: {args.encoding}")

    path = Path(args.puzzle_file)
    timer = StageTimer()
    try:
        with open(path, "r", encoding=args.encoding) as f:
            count = solve_all(parse_puzzles(f), sys.stdout, timer=timer)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Failed reading %s", path, exc_info=True)
        print(f"error: cannot read {path}: {e}", file=sys.stderr)
        return 1
    except PuzzleFormatError as e:
        logger.debug("Malformed puzzle in %s", path, exc_info=True)
        print(f"error: {path}: {e}", file=sys.stderr)
        return 1

    logger.info("Processed %d puzzle(s) from %s", count, path)
    if args.timings:
        timer.log_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())
