from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from tilematch.components.grid import Grid
from tilematch.constants import MIN_RUN_LENGTH

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Run:
    """A maximal line of same-colored tokens long enough to be removed."""
    orientation: str  # 'horizontal' or 'vertical'
    color: str
    cells: Tuple[Position, ...]

    def __len__(self) -> int:
        return len(self.cells)


def _scan_line(grid: Grid, line: List[Position], orientation: str, runs: List[Run]) -> None:
    run: List[Position] = []
    last_color = None
    for row, col in line:
        color = grid.color_at(row, col)
        if color is not None and color == last_color:
            run.append((row, col))
            continue
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(Run(orientation, last_color, tuple(run)))
        # A hole never starts a run.
        run = [(row, col)] if color is not None else []
        last_color = color
    if len(run) >= MIN_RUN_LENGTH:
        runs.append(Run(orientation, last_color, tuple(run)))


def find_runs(grid: Grid) -> List[Run]:
    """Return every horizontal run (rows top to bottom) then every vertical run."""
    runs: List[Run] = []
    size = grid.size
    for r in range(size):
        _scan_line(grid, [(r, c) for c in range(size)], 'horizontal', runs)
    for c in range(size):
        _scan_line(grid, [(r, c) for r in range(size)], 'vertical', runs)
    return runs


def detect_matches(grid: Grid) -> List[Position]:
    """Detect all cells that belong to a horizontal or vertical run of length >= 3.

    Cells shared by a horizontal and a vertical run are reported once. The result
    is sorted by (row, col).
    """
    return sorted({pos for run in find_runs(grid) for pos in run.cells})
