from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class ScoreState:
    """Running score for the current round plus the process-wide high score."""

    total: int = 0
    high_score: int = 0
    preview: int = 0
    preview_color: Optional[str] = None
    last_awarded: int = 0
