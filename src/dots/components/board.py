from dataclasses import dataclass, field
from typing import List, Optional

@dataclass(slots=True)
class Board:
    """Column-major slot store of token entity ids, each column indexed top to bottom."""
    width: int
    height: int
    columns: List[List[Optional[int]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.columns:
            self.columns = [[None] * self.height for _ in range(self.width)]

    def slot(self, column: int, row: int) -> Optional[int]:
        if not (0 <= column < self.width and 0 <= row < self.height):
            return None
        return self.columns[column][row]

    def entities(self) -> List[int]:
        return [ent for col in self.columns for ent in col if ent is not None]
