from dataclasses import dataclass

@dataclass(slots=True)
class ShrinkAnimation:
    """Removal effect for a cleared token; keeps a copy of where and what it was."""
    token: int
    column: int
    row: int
    color: str
    scale: float = 1.0
