from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from esper import World

from tilematch.components.game_config import GameConfig
from tilematch.components.grid import Grid
from tilematch.components.session_state import GameStatus, SessionState
from tilematch.events.bus import (
    EventBus,
    EVENT_TILE_CLICK,
    EVENT_RESTART_REQUEST,
    EVENT_TOKEN_SELECTED,
    EVENT_SELECTION_CLEARED,
    EVENT_SWAP_REJECTED,
    EVENT_TOKENS_SWAPPED,
    EVENT_SWAP_REVERTED,
    EVENT_MATCH_FOUND,
    EVENT_TOKENS_REMOVED,
    EVENT_GRAVITY_APPLIED,
    EVENT_REFILL_COMPLETED,
    EVENT_CASCADE_STEP,
    EVENT_CASCADE_COMPLETE,
    EVENT_SCORE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_BOARD_RESET,
)
from tilematch.systems.board_ops import is_adjacent, swap_tokens
from tilematch.systems.cascade import CascadeStep, resolve_cascade
from tilematch.systems.match_detector import detect_matches
from tilematch.world import get_game_config, get_grid, get_selection, get_session_state

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SwapOutcome(Enum):
    SELECTED = auto()      # first token picked (or the same one picked again)
    MATCHED = auto()       # swap kept, cascade resolved
    REVERTED = auto()      # adjacent swap produced no match and was undone
    NOT_ADJACENT = auto()  # rule rejection, nothing changed
    GAME_OVER = auto()     # session already finished, nothing changed
    BUSY = auto()          # a cascade is still resolving


@dataclass(slots=True)
class SwapResult:
    outcome: SwapOutcome
    score: int
    match_count: int
    status: GameStatus
    points: int = 0
    steps: List[CascadeStep] = field(default_factory=list)


class GameSession:
    """Player-facing state machine: selection, swaps, scoring and termination.

    Every command returns a SwapResult; every state change is also announced on the
    event bus for presentation layers. Cascades run synchronously inside the swap
    that triggers them.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self.on_restart_request)
        grid = get_grid(world)
        if not grid.is_full():
            grid.fill(self.config.color_names())

    # -- queries -------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return get_game_config(self.world)

    @property
    def state(self) -> SessionState:
        return get_session_state(self.world)

    @property
    def grid(self) -> Grid:
        return get_grid(self.world)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def match_count(self) -> int:
        return self.state.match_count

    @property
    def match_limit(self) -> int:
        return self.state.match_limit

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def selected(self) -> Optional[Position]:
        return get_selection(self.world).cell

    def colors(self) -> List[List[Optional[str]]]:
        return self.grid.colors()

    # -- event handlers ------------------------------------------------------

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select_token(row, col)

    def on_restart_request(self, sender, **kwargs):
        self.restart()

    # -- commands ------------------------------------------------------------

    def select_token(self, row: int, col: int) -> SwapResult:
        state = self.state
        if state.is_over:
            return self._result(SwapOutcome.GAME_OVER)
        token = self.grid.token_at(row, col)
        if state.cascade_active:
            return self._result(SwapOutcome.BUSY)
        selection = get_selection(self.world)
        if selection.cell is None:
            selection.cell = (row, col)
            self.event_bus.emit(EVENT_TOKEN_SELECTED, row=row, col=col,
                                token_id=token.token_id if token else None)
            return self._result(SwapOutcome.SELECTED)
        if selection.cell == (row, col):
            return self._result(SwapOutcome.SELECTED)
        return self.attempt_swap(selection.cell, (row, col))

    def attempt_swap(self, a: Position, b: Position) -> SwapResult:
        state = self.state
        if state.is_over:
            self.event_bus.emit(EVENT_SWAP_REJECTED, src=a, dst=b, reason='game_over')
            return self._result(SwapOutcome.GAME_OVER)
        grid = self.grid
        grid.token_at(*a)
        grid.token_at(*b)
        if state.cascade_active:
            return self._result(SwapOutcome.BUSY)
        if not is_adjacent(a, b):
            self._clear_selection('not_adjacent')
            self.event_bus.emit(EVENT_SWAP_REJECTED, src=a, dst=b, reason='not_adjacent')
            return self._result(SwapOutcome.NOT_ADJACENT)
        score_before = state.score
        state.cascade_active = True
        try:
            moves = swap_tokens(grid, a, b)
            self.event_bus.emit(EVENT_TOKENS_SWAPPED, src=a, dst=b, moves=moves)
            if not detect_matches(grid):
                moves = swap_tokens(grid, a, b)
                self.event_bus.emit(EVENT_SWAP_REVERTED, src=a, dst=b, moves=moves)
                return self._result(SwapOutcome.REVERTED)
            config = self.config
            cascade = resolve_cascade(
                grid,
                config.color_names(),
                self._on_cascade_step,
                max_steps=config.max_cascade_steps,
            )
        finally:
            state.cascade_active = False
            self._clear_selection('swap')
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=cascade.depth,
                            removed_count=cascade.removed_count)
        self._check_termination()
        return self._result(SwapOutcome.MATCHED, points=state.score - score_before,
                            steps=cascade.steps)

    def restart(self) -> None:
        state = self.state
        if state.cascade_active:
            logger.warning("restart ignored while a cascade is resolving")
            return
        state.reset()
        state.match_limit = self.config.match_limit
        self._clear_selection('restart')
        grid = self.grid
        grid.clear()
        tokens = grid.fill(self.config.color_names())
        logger.info("session restarted with a %dx%d board", grid.size, grid.size)
        self.event_bus.emit(EVENT_BOARD_RESET, tokens=tokens)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0,
                            match_count=0, match_limit=state.match_limit)

    # -- internals -----------------------------------------------------------

    def _check_termination(self) -> None:
        state = self.state
        if state.is_over or state.match_count < state.match_limit:
            return
        state.status = GameStatus.OVER
        logger.info("game over with score %d after %d matches", state.score, state.match_count)
        self.event_bus.emit(EVENT_GAME_OVER, final_score=state.score,
                            match_count=state.match_count)

    def _on_cascade_step(self, step: CascadeStep) -> None:
        state = self.state
        points = step.removed_count * self.config.score_per_token
        # Only the match the swap itself produced counts towards the limit.
        if step.depth == 1:
            state.match_count += 1
        state.score += points
        logger.debug("step %d: %d tokens, +%d points", step.depth, step.removed_count, points)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=step.positions, runs=step.runs, depth=step.depth)
        self.event_bus.emit(EVENT_TOKENS_REMOVED, positions=step.positions, tokens=step.removed, depth=step.depth)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=step.moves, depth=step.depth)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, spawned=step.spawned, depth=step.depth)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.depth,
                            removed_count=step.removed_count, points=points)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=points,
                            match_count=state.match_count, match_limit=state.match_limit)

    def _clear_selection(self, reason: str) -> None:
        selection = get_selection(self.world)
        if selection.cell is None:
            return
        selection.cell = None
        self.event_bus.emit(EVENT_SELECTION_CLEARED, reason=reason)

    def _result(self, outcome: SwapOutcome, *, points: int = 0,
                steps: List[CascadeStep] | None = None) -> SwapResult:
        state = self.state
        return SwapResult(
            outcome=outcome,
            score=state.score,
            match_count=state.match_count,
            status=state.status,
            points=points,
            steps=list(steps or []),
        )
