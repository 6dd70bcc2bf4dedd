from dataclasses import dataclass, field
from typing import Dict, Tuple

from dots import constants


def _default_colors() -> Dict[str, Tuple[int, int, int]]:
    return dict(constants.COLOR_OPTIONS)


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration fixed when the world is created."""
    width: int = constants.GRID_WIDTH
    height: int = constants.GRID_HEIGHT
    cell_size: int = constants.CELL_SIZE
    colors: Dict[str, Tuple[int, int, int]] = field(default_factory=_default_colors)
    circle_colors: int = constants.CIRCLE_COLORS
    round_duration: float = constants.ROUND_DURATION
    bonus_threshold: int = constants.BONUS_CHAIN_THRESHOLD
    shrink_duration: float = constants.SHRINK_DURATION
    fall_step_duration: float = constants.FALL_STEP_DURATION

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Board dimensions must be positive")
        if not 1 <= self.circle_colors <= len(self.colors):
            raise ValueError("circle_colors must be between 1 and the palette size")

    def spawnable_colors(self) -> list[str]:
        return list(self.colors)[: self.circle_colors]
