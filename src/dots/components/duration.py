from dataclasses import dataclass

@dataclass(slots=True)
class Duration:
    """Seconds an animation component takes to run from 0 to 1."""
    value: float
