from dataclasses import dataclass, field
from typing import List, Set

@dataclass(slots=True)
class ClearLatch:
    """Counts distinct removal completions for one committed clear set.

    Compaction runs once ``completed`` covers every id in ``tokens``.
    """
    tokens: List[int]
    columns: List[int]
    completed: Set[int] = field(default_factory=set)

    def record(self, entity: int) -> bool:
        if entity in self.tokens:
            self.completed.add(entity)
        return self.released

    @property
    def released(self) -> bool:
        return len(self.completed) >= len(set(self.tokens))
