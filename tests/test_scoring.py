import pytest

from dots.utils.scoring import bonus_proportion, format_preview, points_for_chain


@pytest.mark.parametrize("length, points", [(0, 0), (1, 1), (2, 2), (9, 9), (10, 20), (14, 28)])
def test_points_double_from_the_threshold(length, points):
    assert points_for_chain(length, threshold=10) == points


def test_bonus_proportion_is_clamped():
    assert bonus_proportion(0, 10) == 0.0
    assert bonus_proportion(5, 10) == 0.5
    assert bonus_proportion(25, 10) == 1.0


def test_format_preview():
    assert format_preview(0) == ""
    assert format_preview(1) == ""
    assert format_preview(3, 10) == "+ 3!"
    assert format_preview(12, 10) == "+ 12 X2!"
