"""Shared BDD fixtures and step definitions for the Escape Log."""

from datetime import date

import pytest
from escapelog.review.review import Review
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, when

SCORE_ORDER = ("fun", "completion", "immersion", "price", "design")


def _scores(text):
    """Parse "8, 7, 9, 6, 7" into a score block mapping."""
    return dict(zip(SCORE_ORDER, (float(part) for part in text.split(",")), strict=True))


SCORES = {"Scores": _scores}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def make_review():
    def _make(theme_name="BDD Theme", venue="BDD Venue", region="BDD Region", genres=None, scores=None):
        return Review.record(
            theme_name=theme_name,
            venue=venue,
            region=region,
            visit_date=date(2024, 1, 1),
            participants=2,
            scores=scores or dict.fromkeys(SCORE_ORDER, 5),
            genres=genres,
        )

    return _make


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse("a recorded review with scores {scores:Scores}", extra_types=SCORES),
    target_fixture="review",
)
def recorded_review(make_review, scores):
    review = make_review(scores=scores)
    review._events.clear()
    return review


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse("a review is recorded with scores {scores:Scores}", extra_types=SCORES),
    target_fixture="review",
)
def review_recorded(make_review, scores, error):
    try:
        return make_review(scores=scores)
    except ValidationError as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse("the review is revised with scores {scores:Scores}", extra_types=SCORES))
def review_revised(review, scores):
    review.revise(scores=scores)
