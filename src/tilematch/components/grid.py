from __future__ import annotations

import itertools
import random
from typing import Iterator, List, Optional, Sequence, Tuple

from tilematch.components.token import Token

Position = Tuple[int, int]


class Grid:
    """Square board of tokens indexed by (row, col).

    Row 0 is the top row, row ``size - 1`` the bottom one. A cell holding None is
    a hole; holes only exist while a cascade step is in progress. The grid does not
    police duplicate occupancy, callers keep each token in exactly one cell.
    """

    def __init__(self, size: int, rng: random.Random | None = None):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.rng = rng or random.Random()
        self._cells: List[List[Optional[Token]]] = [[None] * size for _ in range(size)]
        self._ids = itertools.count(1)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell {(row, col)} outside {self.size}x{self.size} grid")

    def token_at(self, row: int, col: int) -> Token | None:
        self._check(row, col)
        return self._cells[row][col]

    def color_at(self, row: int, col: int) -> str | None:
        token = self.token_at(row, col)
        return token.color if token is not None else None

    def place(self, token: Token, row: int, col: int) -> None:
        self._check(row, col)
        self._cells[row][col] = token
        token.row = row
        token.col = col

    def remove(self, row: int, col: int) -> Token | None:
        self._check(row, col)
        token = self._cells[row][col]
        self._cells[row][col] = None
        return token

    def new_token(self, color: str) -> Token:
        """Create an unplaced token of the given color with a fresh id."""
        return Token(token_id=next(self._ids), color=color)

    def random_token(self, palette: Sequence[str]) -> Token:
        """Create an unplaced token with a uniformly drawn palette color."""
        choices = list(palette)
        if not choices:
            raise ValueError("Cannot draw a token from an empty palette")
        return self.new_token(self.rng.choice(choices))

    def fill(self, palette: Sequence[str]) -> List[Token]:
        """Place a random token in every hole, column by column, top to bottom."""
        created: List[Token] = []
        for col in range(self.size):
            for row in range(self.size):
                if self._cells[row][col] is None:
                    token = self.random_token(palette)
                    self.place(token, row, col)
                    created.append(token)
        return created

    def clear(self) -> None:
        for row in self._cells:
            for col in range(self.size):
                row[col] = None

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def tokens(self) -> List[Token]:
        return [token for row in self._cells for token in row if token is not None]

    def holes(self) -> List[Position]:
        return [(r, c) for r, c in self.positions() if self._cells[r][c] is None]

    def is_full(self) -> bool:
        return all(token is not None for row in self._cells for token in row)

    def colors(self) -> List[List[Optional[str]]]:
        return [[token.color if token is not None else None for token in row] for row in self._cells]
