from __future__ import annotations

import random
from typing import Iterable, Sequence

from tilematch.components.game_config import GameConfig
from tilematch.components.grid import Grid
from tilematch.events.bus import EventBus
from tilematch.systems.session import GameSession
from tilematch.world import create_world


class ScriptedChoice:
    """Stand-in random source whose choice() returns queued values in order."""

    def __init__(self, values: Iterable[str]):
        self._values = list(values)

    def choice(self, seq):
        assert self._values, 'Scripted random source exhausted'
        value = self._values.pop(0)
        assert value in seq, f'{value!r} not in palette {list(seq)!r}'
        return value

    @property
    def remaining(self) -> int:
        return len(self._values)


def layout_grid(grid: Grid, rows: Sequence[Sequence[str | None]]) -> None:
    """Replace the grid contents with fresh tokens; None leaves a hole."""
    assert len(rows) == grid.size
    grid.clear()
    for r, row in enumerate(rows):
        assert len(row) == grid.size
        for c, color in enumerate(row):
            if color is None:
                continue
            grid.place(grid.new_token(color), r, c)


def stable_rows(size: int, letters: str = 'ABCDE') -> list[list[str]]:
    """Rows without any run of three: each row and column cycles through distinct letters."""
    assert len(letters) >= 3
    return [[letters[(c + 2 * r) % len(letters)] for c in range(size)] for r in range(size)]


def snapshot(grid: Grid) -> list[tuple[int, int, int, str]]:
    """Ids, stored coordinates and colors of every token, in cell order."""
    cells = []
    for r, c in grid.positions():
        token = grid.token_at(r, c)
        assert token is not None, f'Hole at {(r, c)}'
        cells.append((token.token_id, token.row, token.col, token.color))
    return cells


LETTER_PALETTE = {name: (0, 0, 0) for name in 'ABCDEWXYZ'}


def make_session(size: int = 5, *, match_limit: int = 15, palette=None, seed: int = 0):
    """Build bus, world and a started GameSession on a seeded random board."""
    bus = EventBus()
    config = GameConfig(grid_size=size, palette=dict(palette or LETTER_PALETTE), match_limit=match_limit)
    world = create_world(config, rng=random.Random(seed))
    session = GameSession(world, bus)
    return bus, world, session
