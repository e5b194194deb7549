from __future__ import annotations

import logging
from typing import Iterable, Iterator, TextIO

from wordsearch.grid import Grid, Position
from wordsearch.metrics import StageTimer
from wordsearch.parser import PuzzleInstance
from wordsearch.results import ResultCollector

logger = logging.getLogger("wordsearch")

# Self first, then the four orthogonal steps, then the diagonals.
# (0, 0) makes a cell its own neighbour, so "AA" can be spelled on one "A".
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 0), (-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (-1, 1), (1, -1), (1, 1),
)


def neighbors_matching(grid: Grid, pos: Position, symbol: str) -> list[Position]:
    """In-bounds positions adjacent to `pos` (itself included) holding `symbol`."""
    found = []
    for dr, dc in NEIGHBOR_OFFSETS:
        candidate = Position(pos.row + dr, pos.column + dc)
        if grid.matches(candidate, symbol):
            found.append(candidate)
    return found


def starting_positions(grid: Grid, word: str) -> list[Position]:
    if not word:
        return []
    return grid.positions_of(word[0])


def find_all_paths(grid: Grid, word: str) -> Iterator[tuple[Position, ...]]:
    """Yield every chain of adjacent cells spelling `word`.

    Depth-first over a single working path, driven by an explicit stack with
    one iterator of untried neighbours per extended position, so the depth is
    bounded by memory rather than the interpreter's recursion limit. A
    candidate is pushed onto the path before its level is explored and popped
    once that level is exhausted or its path has been yielded. Paths are
    yielded as soon as they are complete, in traversal order (not sorted).
    """
    for start in starting_positions(grid, word):
        path = [start]
        pending: list[Iterator[Position]] = []
        while path:
            if len(path) == len(word):
                yield tuple(path)
                path.pop()
                continue
            if len(pending) < len(path):
                pending.append(iter(neighbors_matching(grid, path[-1], word[len(path)])))
            candidate = next(pending[-1], None)
            if candidate is None:
                # dead end or exhausted level
                pending.pop()
                path.pop()
            else:
                path.append(candidate)


def render_path(word: str, path: Iterable[Position]) -> str:
    return f"{word}: " + "->".join(str(pos) for pos in path)


def search_word(grid: Grid, word: str, collector: ResultCollector) -> int:
    """Record every rendered path of `word` into `collector`; returns how many."""
    count = 0
    for path in find_all_paths(grid, word):
        collector.record(render_path(word, path))
        count += 1
    logger.debug("word=%s paths=%d", word, count)
    return count


def solve_puzzle(puzzle: PuzzleInstance, collector: ResultCollector) -> int:
    total = 0
    for word in puzzle.words:
        total += search_word(puzzle.grid, word, collector)
    return total


def solve_all(
    puzzles: Iterable[PuzzleInstance],
    stream: TextIO,
    collector: ResultCollector | None = None,
    timer: StageTimer | None = None,
) -> int:
    """Solve each puzzle in arrival order, writing a "Query <n>:" section per puzzle.

    Each section is flushed before the next puzzle is pulled from `puzzles`,
    so output for earlier chunks is written even if a later one is malformed.
    Returns the number of puzzles processed.
    """
    if collector is None:
        collector = ResultCollector()
    if timer is None:
        timer = StageTimer()

    processed = 0
    for n, puzzle in enumerate(puzzles, start=1):
        stream.write(f"Query {n}:\n")
        with timer.stage("search"):
            found = solve_puzzle(puzzle, collector)
        logger.info(
            "Query %d: %dx%d grid, %d word(s), %d path(s)",
            n, puzzle.grid.rows, puzzle.grid.columns, len(puzzle.words), found,
        )
        collector.flush(stream)
        collector.reset()
        processed += 1
    return processed
