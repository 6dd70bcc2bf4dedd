from dots.constants import BONUS_CHAIN_THRESHOLD


def points_for_chain(chain_length: int, threshold: int = BONUS_CHAIN_THRESHOLD) -> int:
    """Points awarded for clearing ``chain_length`` circles; doubled from ``threshold`` up."""
    if chain_length <= 0:
        return 0
    if chain_length < threshold:
        return chain_length
    return chain_length * 2


def bonus_proportion(chain_length: int, threshold: int = BONUS_CHAIN_THRESHOLD) -> float:
    """How far the chain is towards the doubling bonus, clamped to [0, 1]."""
    if threshold <= 0:
        return 1.0
    if chain_length <= 0:
        return 0.0
    return min(chain_length / threshold, 1.0)


def format_preview(points: int, threshold: int = BONUS_CHAIN_THRESHOLD) -> str:
    """Preview text shown while a chain is being built; blank for a single circle."""
    if points <= 1:
        return ""
    suffix = " X2!" if points >= threshold else "!"
    return f"+ {points}{suffix}"
