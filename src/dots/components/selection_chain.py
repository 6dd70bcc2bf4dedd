from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class ChainState(Enum):
    """Tagged states of the in-progress gesture."""
    EMPTY = auto()
    BUILDING = auto()
    LOOPED = auto()


@dataclass(slots=True)
class SelectionChain:
    """Ordered token entity ids selected by the current gesture.

    While ``state`` is LOOPED, ``clear_set`` holds every live token sharing the
    chain color and supersedes ``tokens`` as the set that will be cleared.
    """
    tokens: List[int] = field(default_factory=list)
    state: ChainState = ChainState.EMPTY
    color: Optional[str] = None
    clear_set: List[int] = field(default_factory=list)

    @property
    def looped(self) -> bool:
        return self.state is ChainState.LOOPED

    def effective_clear_set(self) -> List[int]:
        if self.looped:
            return list(self.clear_set)
        return list(self.tokens)

    def reset(self) -> None:
        self.tokens.clear()
        self.clear_set.clear()
        self.state = ChainState.EMPTY
        self.color = None
