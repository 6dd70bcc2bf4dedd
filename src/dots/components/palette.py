from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

@dataclass(slots=True)
class Palette:
    """Canonical circle colors stored on a single entity.

    ``spawnable`` lists the color names new circles are drawn from, in palette order.
    """
    colors: Dict[str, Tuple[int, int, int]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.set_spawnable(self.spawnable or self.colors.keys())

    def rgb_for(self, color: str) -> Tuple[int, int, int]:
        return self.colors[color]

    def spawnable_colors(self) -> List[str]:
        return list(self.spawnable)

    def set_spawnable(self, names: Iterable[str]) -> None:
        seen: set[str] = set()
        filtered: List[str] = []
        for name in names:
            if name in self.colors and name not in seen:
                filtered.append(name)
                seen.add(name)
        self.spawnable = filtered or list(self.colors.keys())
