from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                # payload: row, col
EVENT_RESTART_REQUEST = "restart_request"      # payload: None


# ============================================================================
# SELECTION & SWAP
# ============================================================================
EVENT_TOKEN_SELECTED = "token_selected"        # payload: row, col, token_id
EVENT_SELECTION_CLEARED = "selection_cleared"  # payload: reason=str
EVENT_SWAP_REJECTED = "swap_rejected"          # payload: src=(r,c), dst=(r,c), reason=str
EVENT_TOKENS_SWAPPED = "tokens_swapped"        # payload: src=(r,c), dst=(r,c), moves=[TokenMove, TokenMove]
EVENT_SWAP_REVERTED = "swap_reverted"          # payload: src=(r,c), dst=(r,c), moves=[TokenMove, TokenMove]


# ============================================================================
# MATCH & CASCADE
# ============================================================================
EVENT_MATCH_FOUND = "match_found"              # payload: positions=[(r,c),...], runs=[Run,...], depth=int
EVENT_TOKENS_REMOVED = "tokens_removed"        # payload: positions=[(r,c),...], tokens=[Token,...], depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"      # payload: moves=[TokenMove,...], depth=int
EVENT_REFILL_COMPLETED = "refill_completed"    # payload: spawned=[SpawnedToken,...], depth=int
EVENT_CASCADE_STEP = "cascade_step"            # payload: depth=int, removed_count=int, points=int
EVENT_CASCADE_COMPLETE = "cascade_complete"    # payload: depth=int, removed_count=int


# ============================================================================
# SESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"          # payload: score=int, delta=int, match_count=int, match_limit=int
EVENT_GAME_OVER = "game_over"                  # payload: final_score=int, match_count=int
EVENT_BOARD_RESET = "board_reset"              # payload: tokens=[Token,...]
