"""Round lifecycle resource shared by the round, input and render systems."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class RoundPhase(Enum):
    IDLE = auto()
    RUNNING = auto()
    ENDED = auto()


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Snapshot presented at the end of a round."""
    score: int
    high_score: int
    new_high_score: bool = False


@dataclass
class RoundState:
    """Singleton component tracking the countdown of the active round."""
    phase: RoundPhase = RoundPhase.IDLE
    duration: float = 60.0
    elapsed: float = 0.0
    input_frozen: bool = True
    summary: Optional[RoundSummary] = None

    @property
    def remaining(self) -> float:
        if self.phase is not RoundPhase.RUNNING:
            return 0.0
        return max(0.0, self.duration - self.elapsed)

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, self.elapsed / self.duration)
