"""Session bookkeeping component: score, match progress and status."""
from dataclasses import dataclass
from enum import Enum, auto


class GameStatus(Enum):
    PLAYING = auto()
    OVER = auto()


@dataclass(slots=True)
class SessionState:
    """Singleton component holding the player's progress."""
    match_limit: int
    score: int = 0
    match_count: int = 0
    status: GameStatus = GameStatus.PLAYING
    # True while a cascade is being resolved; swaps are refused meanwhile.
    cascade_active: bool = False

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.OVER

    def reset(self) -> None:
        self.score = 0
        self.match_count = 0
        self.status = GameStatus.PLAYING
        self.cascade_active = False
