"""List filtering over an already-fetched set of reviews.

Region and venue match by exact, case-sensitive equality; genre matches when
it appears in the review's genre list. An empty criterion places no
constraint, and criteria combine with AND. Filtering keeps the input order
and never mutates it.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

FILTER_FIELDS = ("region", "venue", "genre")


@dataclass(frozen=True)
class FilterSelection:
    """The currently selected list filters; "" means no constraint."""

    region: str = ""
    venue: str = ""
    genre: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.region or self.venue or self.genre)

    def with_value(self, field: str, value: str | None) -> "FilterSelection":
        if field not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {field}")
        return replace(self, **{field: value or ""})


@dataclass(frozen=True)
class FilterOptions:
    """Distinct values available for each filter, in first-seen order."""

    venues: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()


def _value_of(review, name):
    if isinstance(review, Mapping):
        return review.get(name)
    return getattr(review, name, None)


def genres_of(review) -> list[str]:
    """The genre tags of a review record, whichever shape it comes in."""
    if isinstance(review, Mapping):
        return list(review.get("genres") or [])
    if hasattr(review, "genre_list"):
        return review.genre_list()
    return list(getattr(review, "genres", None) or [])


def _matches(review, selection: FilterSelection) -> bool:
    if selection.region and _value_of(review, "region") != selection.region:
        return False
    if selection.venue and _value_of(review, "venue") != selection.venue:
        return False
    if selection.genre and selection.genre not in genres_of(review):
        return False
    return True


def filter_reviews(reviews: Iterable, selection: FilterSelection | None = None) -> list:
    """The reviews that satisfy every non-empty criterion of ``selection``."""
    if selection is None or not selection.is_active:
        return list(reviews)
    return [review for review in reviews if _matches(review, selection)]


def _distinct(values: Iterable) -> tuple:
    # dict keeps insertion order
    return tuple(dict.fromkeys(value for value in values if value is not None))


def filter_options(reviews: Iterable) -> FilterOptions:
    reviews = list(reviews)
    return FilterOptions(
        venues=_distinct(_value_of(review, "venue") for review in reviews),
        regions=_distinct(_value_of(review, "region") for review in reviews),
        genres=_distinct(genre for review in reviews for genre in genres_of(review)),
    )
