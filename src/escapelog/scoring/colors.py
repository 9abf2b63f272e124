"""Score-to-color mapping for the rating bars.

A score in [0, 10] maps onto a white → yellow → orange → red gradient through
three linear segments with breakpoints at 3 and 7. Breakpoint scores belong to
the lower segment, so 3 is pure yellow and 7 pure orange.
"""

import math
from typing import NamedTuple

WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
ORANGE = (255, 165, 0)
RED = (255, 0, 0)


class RGB(NamedTuple):
    r: int
    g: int
    b: int


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score_to_color(score: float) -> RGB:
    """Map a score in [0, 10] to its bar color."""
    if score <= 3:
        ratio = score / 3
        return RGB(255, 255, _round_half_up(255 * (1 - ratio)))
    if score <= 7:
        ratio = (score - 3) / 4
        return RGB(255, _round_half_up(255 - 90 * ratio), 0)
    ratio = (score - 7) / 3
    return RGB(255, _round_half_up(165 * (1 - ratio)), 0)


def bar_fill_width(score: float) -> float:
    """Fill width of the bar, as a percentage of its full width."""
    return (score / 10) * 100


def css_rgb(color: RGB) -> str:
    return f"rgb({color.r}, {color.g}, {color.b})"


def score_bar(metric: str, score: float) -> dict:
    """Everything a renderer needs to draw one rating bar."""
    return {
        "metric": metric,
        "score": score,
        "width": bar_fill_width(score),
        "color": css_rgb(score_to_color(score)),
    }
