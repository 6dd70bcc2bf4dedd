from dataclasses import dataclass

@dataclass(slots=True)
class Token:
    """A single circle on the board.

    ``row`` is the logical slot inside ``column`` counted from the top; it changes
    whenever the column is compacted. ``alive`` drops to False once the token is
    part of a committed clear set and stays False until the entity is deleted.
    """
    color: str
    column: int
    row: int
    alive: bool = True
