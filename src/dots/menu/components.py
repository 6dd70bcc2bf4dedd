"""Components used by the round menu ECS subsystem."""
from dataclasses import dataclass
from enum import Enum, auto


class MenuAction(Enum):
    """Actions that a menu button can trigger."""
    START = auto()
    EXIT = auto()


@dataclass
class MenuButton:
    """Interactive button displayed in the menu panel."""
    label: str
    action: MenuAction
    x: float
    y: float
    width: float = 160.0
    height: float = 30.0
    enabled: bool = True
    hovered: bool = False


@dataclass
class MenuText:
    """Static line of text inside the menu panel."""
    text: str
    x: float
    y: float
    font_size: int = 16


@dataclass
class MenuBackground:
    """Translucent panel drawn behind the menu."""
    x: float
    y: float
    width: float = 200.0
    height: float = 200.0
    color: tuple[int, int, int, int] = (0, 0, 255, 153)


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
