"""Immutable view state for the review list and detail screens.

Each screen's state is a frozen value that only changes through its reducer:
``reduce_board(state, action)`` and ``reduce_detail(state, action)`` return a
new state and never mutate the old one.

Every fetch is tagged with the generation that was current when it started.
Starting a new fetch bumps the generation, so a result that arrives for an
older generation (the user navigated away or refetched) is discarded without
touching state.
"""

from dataclasses import dataclass, field, replace

import structlog

from escapelog.browsing.filters import (
    FILTER_FIELDS,
    FilterOptions,
    FilterSelection,
    filter_options,
    filter_reviews,
)

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# List screen
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FetchStarted:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    generation: int
    reviews: tuple


@dataclass(frozen=True)
class FetchFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class FilterSelected:
    field: str
    value: str


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class DropdownToggled:
    name: str


@dataclass(frozen=True)
class BoardState:
    generation: int = 0
    loading: bool = True
    reviews: tuple = ()
    visible: tuple = ()
    options: FilterOptions = field(default_factory=FilterOptions)
    filters: FilterSelection = field(default_factory=FilterSelection)
    open_dropdown: str | None = None
    error: str | None = None


def _is_stale(state, generation) -> bool:
    if generation != state.generation:
        logger.debug("Discarding stale result", generation=generation, current=state.generation)
        return True
    return False


def reduce_board(state: BoardState, action) -> BoardState:
    if isinstance(action, FetchStarted):
        return replace(state, generation=state.generation + 1, loading=True, error=None)

    if isinstance(action, FetchSucceeded):
        if _is_stale(state, action.generation):
            return state
        reviews = tuple(action.reviews)
        return replace(
            state,
            loading=False,
            reviews=reviews,
            visible=tuple(filter_reviews(reviews, state.filters)),
            options=filter_options(reviews),
        )

    if isinstance(action, FetchFailed):
        if _is_stale(state, action.generation):
            return state
        return replace(state, loading=False, error=action.message)

    if isinstance(action, FilterSelected):
        filters = state.filters.with_value(action.field, action.value)
        return replace(
            state,
            filters=filters,
            open_dropdown=None,
            visible=tuple(filter_reviews(state.reviews, filters)),
        )

    if isinstance(action, FiltersCleared):
        return replace(state, filters=FilterSelection(), open_dropdown=None, visible=state.reviews)

    if isinstance(action, DropdownToggled):
        if action.name not in FILTER_FIELDS:
            raise ValueError(f"Unknown dropdown: {action.name}")
        open_dropdown = None if state.open_dropdown == action.name else action.name
        return replace(state, open_dropdown=open_dropdown)

    raise TypeError(f"Unsupported action: {type(action).__name__}")


# ---------------------------------------------------------------------------
# Detail screen
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DetailFetchStarted:
    review_id: str


@dataclass(frozen=True)
class ReviewLoaded:
    generation: int
    review: object | None


@dataclass(frozen=True)
class AveragesLoaded:
    generation: int
    averages: dict


@dataclass(frozen=True)
class DetailFetchFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class DetailState:
    generation: int = 0
    review_id: str | None = None
    loading: bool = True
    review: object | None = None
    averages: dict = field(default_factory=dict)
    not_found: bool = False
    error: str | None = None


def reduce_detail(state: DetailState, action) -> DetailState:
    if isinstance(action, DetailFetchStarted):
        return DetailState(generation=state.generation + 1, review_id=action.review_id)

    if isinstance(action, ReviewLoaded):
        if _is_stale(state, action.generation):
            return state
        return replace(state, loading=False, review=action.review, not_found=action.review is None)

    if isinstance(action, AveragesLoaded):
        if _is_stale(state, action.generation):
            return state
        return replace(state, averages=dict(action.averages))

    if isinstance(action, DetailFetchFailed):
        if _is_stale(state, action.generation):
            return state
        return replace(state, loading=False, error=action.message, not_found=state.review is None)

    raise TypeError(f"Unsupported action: {type(action).__name__}")
