from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class PointerState:
    """Cursor hit region tracked between pointer down and pointer up."""
    x: float = 0.0
    y: float = 0.0
    down: bool = False
    # True only when the press started while the board accepted input.
    gesture_active: bool = False
    last_touched: Optional[int] = None
