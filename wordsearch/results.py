import logging
import sys
from typing import TextIO

logger = logging.getLogger("wordsearch")


class ResultCollector:
    """Accumulates rendered path lines for one puzzle instance at a time."""

    def __init__(self):
        self._lines: list[str] = []

    def record(self, line: str):
        self._lines.append(line)

    def sorted_lines(self) -> list[str]:
        # Plain str ordering is code-point order; the word is the line's prefix
        return sorted(self._lines)

    def flush(self, stream: TextIO | None = None) -> list[str]:
        """Write the recorded lines to `stream` in sorted order and return them."""
        out = stream if stream is not None else sys.stdout
        lines = self.sorted_lines()
        for line in lines:
            out.write(line + "\n")
        logger.debug("Flushed %d path(s)", len(lines))
        return lines

    def reset(self):
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)
