"""Review form state: the draft being written or edited.

The draft starts from the form's defaults and changes only through
``reduce_draft``. ``draft_payload`` turns a finished draft into the keyword
arguments that ``Review.record`` and ``Review.revise`` accept.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import date

from escapelog.scoring.aggregation import SCORE_CATEGORIES, compute_total_score

DEFAULT_SCORE = 5
DEFAULT_RATING = 5


def _default_scores():
    return dict.fromkeys(SCORE_CATEGORIES, DEFAULT_SCORE)


@dataclass(frozen=True)
class ReviewDraft:
    theme_name: str = ""
    venue: str = ""
    region: str = ""
    genres: tuple[str, ...] = ()
    visit_date: str = ""
    participants: int = 2
    success: bool = True
    hints_used: int = 0
    time_remaining: int = 0
    scores: dict = field(default_factory=_default_scores)
    difficulty: int = DEFAULT_RATING
    horror: int = DEFAULT_RATING
    activity: int = DEFAULT_RATING
    device_ratio: int = DEFAULT_RATING
    narrative: str = ""


_DRAFT_FIELDS = {f.name for f in fields(ReviewDraft)}


@dataclass(frozen=True)
class FieldChanged:
    name: str
    value: object


@dataclass(frozen=True)
class ScoreChanged:
    category: str
    value: int


@dataclass(frozen=True)
class GenreAdded:
    genre: str


@dataclass(frozen=True)
class GenreRemoved:
    genre: str


@dataclass(frozen=True)
class DraftLoaded:
    values: dict


def reduce_draft(draft: ReviewDraft, action) -> ReviewDraft:
    if isinstance(action, FieldChanged):
        if action.name not in _DRAFT_FIELDS or action.name in ("scores", "genres"):
            raise ValueError(f"Not a plain form field: {action.name}")
        return replace(draft, **{action.name: action.value})

    if isinstance(action, ScoreChanged):
        if action.category not in SCORE_CATEGORIES:
            raise ValueError(f"Unknown score category: {action.category}")
        return replace(draft, scores={**draft.scores, action.category: int(action.value)})

    if isinstance(action, GenreAdded):
        genre = action.genre.strip() if action.genre else ""
        if not genre or genre in draft.genres:
            return draft
        return replace(draft, genres=(*draft.genres, genre))

    if isinstance(action, GenreRemoved):
        return replace(draft, genres=tuple(g for g in draft.genres if g != action.genre))

    if isinstance(action, DraftLoaded):
        values = {key: value for key, value in action.values.items() if key in _DRAFT_FIELDS}
        if "genres" in values:
            values["genres"] = tuple(values["genres"] or ())
        if "scores" in values:
            values["scores"] = {**_default_scores(), **values["scores"]}
        if isinstance(values.get("visit_date"), date):
            values["visit_date"] = values["visit_date"].isoformat()
        return replace(ReviewDraft(), **values)

    raise TypeError(f"Unsupported action: {type(action).__name__}")


def draft_total_score(draft: ReviewDraft) -> float:
    return compute_total_score(draft.scores)


def draft_payload(draft: ReviewDraft) -> dict:
    payload = asdict(draft)
    payload["genres"] = list(draft.genres)
    payload["narrative"] = draft.narrative or None
    payload["visit_date"] = date.fromisoformat(draft.visit_date) if draft.visit_date else None
    return payload


def draft_from_review(review) -> ReviewDraft:
    """Seed the edit form from a stored review."""
    values = {name: getattr(review, name, None) for name in _DRAFT_FIELDS - {"scores", "genres"}}
    values = {key: value for key, value in values.items() if value is not None}
    values["scores"] = review.scores.as_dict()
    values["genres"] = review.genre_list()
    return reduce_draft(ReviewDraft(), DraftLoaded(values))
