from __future__ import annotations

from typing import NamedTuple

import numpy as np


class Position(NamedTuple):
    row: int
    column: int

    def __str__(self) -> str:
        return f"({self.row},{self.column})"


class Grid:
    """Read-only R x C table of opaque symbol tokens.

    Cells are stored in a numpy object array with the write flag cleared, so
    the grid cannot be mutated once built. Lookups outside the table return
    None instead of raising (negative indices never wrap around).
    """

    def __init__(self, rows: list[list[str]], columns: int | None = None):
        n_rows = len(rows)
        n_cols = columns if columns is not None else (len(rows[0]) if rows else 0)
        cells = np.empty((n_rows, n_cols), dtype=object)
        for r, row in enumerate(rows):
            if len(row) != n_cols:
                raise ValueError(f"row {r} has {len(row)} cells, expected {n_cols}")
            for c, token in enumerate(row):
                cells[r, c] = token
        cells.setflags(write=False)
        self._cells = cells

    @property
    def rows(self) -> int:
        return self._cells.shape[0]

    @property
    def columns(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    def __len__(self) -> int:
        return self._cells.size

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.column < self.columns

    def symbol_at(self, pos: Position) -> str | None:
        if not self.in_bounds(pos):
            return None
        return self._cells[pos.row, pos.column]

    def matches(self, pos: Position, symbol: str) -> bool:
        return self.in_bounds(pos) and self._cells[pos.row, pos.column] == symbol

    def positions_of(self, symbol: str) -> list[Position]:
        """Every position holding `symbol`, in row-major order."""
        if self._cells.size == 0:
            return []
        hits = np.argwhere(self._cells == symbol)
        return [Position(int(r), int(c)) for r, c in hits]

    def to_lists(self) -> list[list[str]]:
        return self._cells.tolist()

    def __str__(self) -> str:
        return "\n".join(" ".join(row) for row in self.to_lists())

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.columns})"
