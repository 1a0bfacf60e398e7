from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from tilematch.constants import (
    GRID_SIZE,
    MATCH_LIMIT,
    MAX_CASCADE_STEPS,
    PALETTE,
    SCORE_PER_TOKEN,
)


@dataclass(slots=True)
class GameConfig:
    """Tunable session parameters stored on the state entity.

    palette maps color names to RGB triples; only the names matter to the engine,
    the RGB values are carried along for presentation layers.
    """
    grid_size: int = GRID_SIZE
    palette: Dict[str, Tuple[int, int, int]] = field(default_factory=lambda: dict(PALETTE))
    match_limit: int = MATCH_LIMIT
    score_per_token: int = SCORE_PER_TOKEN
    max_cascade_steps: int = MAX_CASCADE_STEPS

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if not self.palette:
            raise ValueError("palette must define at least one color")
        if self.match_limit < 1:
            raise ValueError(f"match_limit must be positive, got {self.match_limit}")
        if self.score_per_token < 0:
            raise ValueError(f"score_per_token must not be negative, got {self.score_per_token}")
        if self.max_cascade_steps < 1:
            raise ValueError(f"max_cascade_steps must be positive, got {self.max_cascade_steps}")

    def color_names(self) -> List[str]:
        return list(self.palette.keys())

    def rgb_for(self, color: str) -> Tuple[int, int, int]:
        return self.palette[color]
