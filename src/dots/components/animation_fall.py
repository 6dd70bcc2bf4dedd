from dataclasses import dataclass

@dataclass(slots=True)
class FallAnimation:
    token: int
    column: int
    from_row: int
    to_row: int
    spawned: bool = False
    linear: float = 0.0  # 0..1
