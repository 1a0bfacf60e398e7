"""Cascade resolution: remove matches, drop tokens, refill, repeat until stable."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from tilematch.components.grid import Grid
from tilematch.components.token import Token
from tilematch.constants import MAX_CASCADE_STEPS
from tilematch.systems.board_ops import (
    SpawnedToken,
    TokenMove,
    apply_gravity_moves,
    compute_gravity_moves,
    refill_holes,
    remove_cells,
)
from tilematch.systems.match_detector import Run, find_runs

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class CascadeLimitExceeded(RuntimeError):
    """The board kept producing matches past the configured step bound."""


@dataclass(slots=True)
class CascadeStep:
    """Everything one remove/drop/refill round did to the grid, in order."""
    depth: int
    positions: List[Position]
    runs: List[Run]
    removed: List[Token]
    moves: List[TokenMove]
    spawned: List[SpawnedToken]

    @property
    def removed_count(self) -> int:
        return len(self.removed)


@dataclass(slots=True)
class CascadeResult:
    steps: List[CascadeStep] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.steps)

    @property
    def removed_count(self) -> int:
        return sum(step.removed_count for step in self.steps)


def resolve_cascade(
    grid: Grid,
    palette: Sequence[str],
    on_step: Optional[Callable[[CascadeStep], None]] = None,
    *,
    max_steps: int = MAX_CASCADE_STEPS,
) -> CascadeResult:
    """Resolve matches on ``grid`` until none remain.

    ``on_step`` is called once per step, after the refill, with the finished step;
    scoring decisions belong to the caller. A grid without matches is left untouched.
    Raises CascadeLimitExceeded if matches are still present after ``max_steps``
    steps.
    """
    result = CascadeResult()
    while True:
        runs = find_runs(grid)
        if not runs:
            break
        if result.depth >= max_steps:
            raise CascadeLimitExceeded(
                f"Board still matching after {max_steps} cascade steps"
            )
        positions = sorted({pos for run in runs for pos in run.cells})
        removed = remove_cells(grid, positions)
        moves = compute_gravity_moves(grid)
        apply_gravity_moves(grid, moves)
        spawned = refill_holes(grid, palette)
        step = CascadeStep(
            depth=result.depth + 1,
            positions=positions,
            runs=runs,
            removed=removed,
            moves=moves,
            spawned=spawned,
        )
        result.steps.append(step)
        logger.debug("cascade depth %d removed %d tokens", step.depth, step.removed_count)
        if on_step is not None:
            on_step(step)
    return result
