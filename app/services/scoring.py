import math
from typing import Any

DEFAULT_STYLE_SCORE = 50


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_style_score(score: Any) -> int:
    """Map a model rating of unknown scale onto 0-100.

    Checks run in order: fraction (0, 1], then rating [1, 10], then clamp.
    A score of exactly 1 therefore reads as a fraction and maps to 100, not 10.
    """
    if score is None or isinstance(score, bool):
        return DEFAULT_STYLE_SCORE
    try:
        value = float(score)
    except (TypeError, ValueError):
        return DEFAULT_STYLE_SCORE
    if math.isnan(value):
        return DEFAULT_STYLE_SCORE
    if math.isinf(value):
        return 100 if value > 0 else 0
    if 0 < value <= 1:
        return _round_half_up(value * 100)
    if 1 <= value <= 10:
        return _round_half_up(value * 10)
    return max(0, min(100, _round_half_up(value)))
