"""Reading puzzle chunks from a text stream.

Each chunk is a header line with the row and column counts, that many rows of
whitespace-separated cell tokens, and one line of words to look for. Chunks
repeat until the end of input.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from wordsearch.grid import Grid

logger = logging.getLogger("wordsearch")


class PuzzleFormatError(ValueError):
    """A chunk that cannot be turned into a consistent grid and word list."""

    def __init__(self, chunk: int, line_number: int, line: str | None, reason: str):
        self.chunk = chunk
        self.line_number = line_number
        self.line = line
        self.reason = reason
        where = f"chunk {chunk}, line {line_number}"
        if line is None:
            super().__init__(f"{where}: {reason}")
        else:
            super().__init__(f"{where}: {reason}: {line!r}")


@dataclass(frozen=True)
class PuzzleInstance:
    grid: Grid
    words: tuple[str, ...]
    index: int = 1
    line_number: int = 1


def _parse_header(line: str, chunk: int, line_number: int) -> tuple[int, int]:
    tokens = line.split()
    if len(tokens) != 2:
        raise PuzzleFormatError(chunk, line_number, line, "expected '<rows> <columns>'")
    try:
        n_rows, n_cols = int(tokens[0]), int(tokens[1])
    except ValueError:
        raise PuzzleFormatError(chunk, line_number, line, "dimensions must be integers") from None
    if n_rows < 0 or n_cols < 0:
        raise PuzzleFormatError(chunk, line_number, line, "dimensions must not be negative")
    return n_rows, n_cols


def parse_puzzles(lines: Iterable[str]) -> Iterator[PuzzleInstance]:
    """Yield one PuzzleInstance per chunk, reading lazily from `lines`.

    Blank lines between chunks are skipped. Inside a chunk every line is taken
    as-is, so a blank word line gives a puzzle with no words. Raises
    PuzzleFormatError on the first malformed chunk.
    """
    numbered = enumerate((line.rstrip("\r\n") for line in lines), start=1)
    chunk = 0
    last_line = 0

    def next_line(what: str) -> tuple[int, str]:
        item = next(numbered, None)
        if item is None:
            raise PuzzleFormatError(chunk, last_line + 1, None, f"unexpected end of input, expected {what}")
        return item

    for header_line, line in numbered:
        last_line = header_line
        if not line.strip():
            continue
        chunk += 1
        n_rows, n_cols = _parse_header(line, chunk, header_line)

        rows: list[list[str]] = []
        for r in range(n_rows):
            last_line, line = next_line(f"row {r + 1} of {n_rows}")
            tokens = line.split()
            if len(tokens) != n_cols:
                raise PuzzleFormatError(
                    chunk, last_line, line, f"row {r + 1} has {len(tokens)} cells, expected {n_cols}"
                )
            rows.append(tokens)

        last_line, line = next_line("the word line")
        words = tuple(line.split())

        logger.debug("Parsed chunk %d: %dx%d grid, %d word(s)", chunk, n_rows, n_cols, len(words))
        yield PuzzleInstance(Grid(rows, columns=n_cols), words, index=chunk, line_number=header_line)


def parse_text(text: str) -> list[PuzzleInstance]:
    return list(parse_puzzles(text.splitlines()))
