"""Score aggregation: per-review totals and corpus-wide category averages.

Both functions accept either Review aggregates or plain mappings shaped like
the stored document, so they can run over repository results and over raw
fixtures alike. Neither mutates its input.

Two behaviors are kept exactly as the log has always computed them:

* a review without a score block adds nothing to any category total but still
  counts toward the divisor in ``compute_averages``;
* ``compute_total_score`` divides by the number of scores present in the block
  rather than by a fixed five.
"""

from collections.abc import Iterable, Mapping

SCORE_CATEGORIES = ("fun", "completion", "immersion", "price", "design")


def score_values(scores) -> dict:
    """Return the present category values of a score block as a plain dict.

    Accepts a mapping or any object exposing the categories as attributes
    (the ScoreBlock value object). Categories that are missing or None are
    left out.
    """
    if scores is None:
        return {}
    if isinstance(scores, Mapping):
        return {key: value for key, value in scores.items() if value is not None}
    values = {}
    for category in SCORE_CATEGORIES:
        value = getattr(scores, category, None)
        if value is not None:
            values[category] = value
    return values


def _score_block_of(review):
    if isinstance(review, Mapping):
        return review.get("scores")
    return getattr(review, "scores", None)


def compute_averages(reviews: Iterable) -> dict[str, float]:
    """Mean of each score category across every review in ``reviews``."""
    totals = dict.fromkeys(SCORE_CATEGORIES, 0.0)
    count = 0

    for review in reviews:
        count += 1
        block = _score_block_of(review)
        if block is None:
            continue
        values = score_values(block)
        for category in SCORE_CATEGORIES:
            totals[category] += values.get(category) or 0

    return {category: (totals[category] / count if count > 0 else 0) for category in SCORE_CATEGORIES}


def compute_total_score(scores) -> float:
    """Unrounded mean of the scores present in a single score block."""
    values = list(score_values(scores).values())
    if not values:
        return 0.0
    return sum(values) / len(values)


def format_total_score(value: float) -> str:
    """One-decimal display form of a total score, e.g. ``"7.4"``."""
    return f"{value:.1f}"
