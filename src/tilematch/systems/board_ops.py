from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from tilematch.components.grid import Grid
from tilematch.components.token import Token

Position = Tuple[int, int]


@dataclass(slots=True)
class TokenMove:
    token_id: int
    color: str
    source: Position
    target: Position


@dataclass(slots=True)
class SpawnedToken:
    """A token created by refill.

    spawn_row is the (negative) row above the board the token enters from, so a
    column refilled with three tokens spawns them at rows -3, -2, -1.
    """
    token_id: int
    color: str
    target: Position
    spawn_row: int


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def swap_tokens(grid: Grid, a: Position, b: Position) -> List[TokenMove]:
    """Exchange the occupants of two cells, updating their coordinates."""
    token_a = grid.token_at(*a)
    token_b = grid.token_at(*b)
    if token_a is None or token_b is None:
        raise RuntimeError(f"Cannot swap {a} and {b}: a cell is empty")
    grid.place(token_a, *b)
    grid.place(token_b, *a)
    return [
        TokenMove(token_id=token_a.token_id, color=token_a.color, source=a, target=b),
        TokenMove(token_id=token_b.token_id, color=token_b.color, source=b, target=a),
    ]


def remove_cells(grid: Grid, positions: Iterable[Position]) -> List[Token]:
    """Turn each position into a hole and return the tokens that were there."""
    removed: List[Token] = []
    for row, col in positions:
        token = grid.remove(row, col)
        if token is not None:
            removed.append(token)
    return removed


def compute_gravity_moves(grid: Grid) -> List[TokenMove]:
    """Plan the downward compaction of every column.

    Live tokens keep their relative order and settle at the bottom; holes end up at
    the top. Moves are listed column by column, lowest token first, which is also a
    safe order to apply them in.
    """
    moves: List[TokenMove] = []
    bottom = grid.size - 1
    for col in range(grid.size):
        target_row = bottom
        for row in range(bottom, -1, -1):
            token = grid.token_at(row, col)
            if token is None:
                continue
            if row != target_row:
                moves.append(TokenMove(token_id=token.token_id, color=token.color,
                                       source=(row, col), target=(target_row, col)))
            target_row -= 1
    return moves


def apply_gravity_moves(grid: Grid, moves: Sequence[TokenMove]) -> None:
    for move in moves:
        token = grid.remove(*move.source)
        if token is None or token.token_id != move.token_id:
            raise RuntimeError(f"Gravity move out of sync at {move.source}")
        grid.place(token, *move.target)


def refill_holes(grid: Grid, palette: Sequence[str]) -> List[SpawnedToken]:
    """Fill every hole with a new random token, column by column, top to bottom."""
    spawned: List[SpawnedToken] = []
    for col in range(grid.size):
        hole_rows = [row for row in range(grid.size) if grid.token_at(row, col) is None]
        for row in hole_rows:
            token = grid.random_token(palette)
            grid.place(token, row, col)
            spawned.append(SpawnedToken(token_id=token.token_id, color=token.color,
                                        target=(row, col), spawn_row=row - len(hole_rows)))
    return spawned
