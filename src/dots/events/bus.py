from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_POINTER_DOWN = "pointer_down"                # payload: x, y
EVENT_POINTER_MOVE = "pointer_move"                # payload: x, y
EVENT_POINTER_UP = "pointer_up"                    # payload: x, y
EVENT_TOKEN_TOUCHED = "token_touched"              # payload: entity=int
EVENT_GESTURE_RELEASED = "gesture_released"        # payload: None


# ============================================================================
# CHAIN & BOARD
# ============================================================================
EVENT_CHAIN_CHANGED = "chain_changed"              # payload: tokens=list[int], looped=bool, delta=int, color=str|None, clear_size=int
EVENT_CLEAR_COMMITTED = "clear_committed"          # payload: tokens=list[int], columns=list[int], color=str, chain_length=int
EVENT_CLEAR_ACCEPTED = "clear_accepted"            # payload: tokens=list[int], columns=list[int], color=str, chain_length=int
EVENT_COMPACTION_REPORT = "compaction_report"      # payload: report=CompactionReport
EVENT_BOARD_RESET = "board_reset"                  # payload: reason=str


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, items=list
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list


# ============================================================================
# SCORE & ROUND
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: total=int, preview=int, preview_points=int, color=str|None, awarded=int
EVENT_ROUND_STATE_CHANGED = "round_state_changed"  # payload: previous=RoundPhase, phase=RoundPhase, summary=RoundSummary|None


# ============================================================================
# MENU & UI
# ============================================================================
EVENT_MENU_START_SELECTED = "menu_start_selected"  # payload: None
EVENT_MENU_EXIT_SELECTED = "menu_exit_selected"    # payload: None
