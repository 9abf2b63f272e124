"""Review aggregate (CQRS): one recorded play session of an escape-room theme.

A review carries the visit metadata, a five-part score block, optional
auxiliary ratings and a free-text narrative. The total score is derived from
the score block when the review is written and stored with it; it is the
ranking key for the log and is only recomputed when a revision supplies a new
score block.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    ValueObject,
)

from escapelog.domain import escapelog
from escapelog.review.events import ReviewRecorded, ReviewRevised
from escapelog.scoring.aggregation import SCORE_CATEGORIES, compute_total_score

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MIN_SCORE = 0
MAX_SCORE = 10

AUXILIARY_RATINGS = ("difficulty", "horror", "activity", "device_ratio")


def _out_of_range(value):
    return value is not None and (value < MIN_SCORE or value > MAX_SCORE)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@escapelog.value_object(part_of="Review")
class ScoreBlock:
    """The five sub-scores that define a theme's quality profile."""

    fun = Float(required=True)
    completion = Float(required=True)
    immersion = Float(required=True)
    price = Float(required=True)
    design = Float(required=True)

    @invariant.post
    def scores_must_be_in_range(self):
        errors = {
            category: [f"Score must be between {MIN_SCORE} and {MAX_SCORE}"]
            for category in SCORE_CATEGORIES
            if _out_of_range(getattr(self, category))
        }
        if errors:
            raise ValidationError(errors)

    def as_dict(self):
        return {category: getattr(self, category) for category in SCORE_CATEGORIES}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@escapelog.aggregate
class Review:
    """A single escape-room theme review."""

    # Theme
    theme_name = String(required=True, max_length=200)
    venue = String(required=True, max_length=200)
    region = String(required=True, max_length=100)
    genres = Text()  # JSON array of strings

    # Visit
    visit_date = Date(required=True)
    participants = Integer(required=True, min_value=1)
    success = Boolean(default=True)
    hints_used = Integer(default=0, min_value=0)
    time_remaining = Integer(default=0, min_value=0)  # minutes

    # Scores
    scores = ValueObject(ScoreBlock, required=True)
    total_score = Float(default=0.0)

    # Auxiliary ratings, each 0-10
    difficulty = Integer()
    horror = Integer()
    activity = Integer()
    device_ratio = Integer()  # device share; lock share is 10 - value

    narrative = Text()

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def auxiliary_ratings_must_be_in_range(self):
        errors = {
            name: [f"Rating must be between {MIN_SCORE} and {MAX_SCORE}"]
            for name in AUXILIARY_RATINGS
            if _out_of_range(getattr(self, name))
        }
        if errors:
            raise ValidationError(errors)

    @invariant.post
    def genres_must_be_unique_and_named(self):
        genres = self.genre_list()
        if any(not genre or not genre.strip() for genre in genres):
            raise ValidationError({"genres": ["Genre names cannot be empty"]})
        if len(set(genres)) != len(genres):
            raise ValidationError({"genres": ["Genres cannot contain duplicates"]})

    @invariant.post
    def theme_name_must_not_be_empty(self):
        if self.theme_name is not None and len(self.theme_name.strip()) == 0:
            raise ValidationError({"theme_name": ["Theme name cannot be empty"]})

    # -------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------
    def genre_list(self):
        return json.loads(self.genres) if self.genres else []

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def record(
        cls,
        theme_name,
        venue,
        region,
        visit_date,
        participants,
        scores,
        success=True,
        hints_used=0,
        time_remaining=0,
        genres=None,
        difficulty=None,
        horror=None,
        activity=None,
        device_ratio=None,
        narrative=None,
    ):
        """Record a new review. ``scores`` maps each category to its value."""
        now = datetime.now(UTC)
        total_score = compute_total_score(scores)

        review = cls(
            theme_name=theme_name,
            venue=venue,
            region=region,
            genres=json.dumps(genres) if genres else None,
            visit_date=visit_date,
            participants=participants,
            success=success,
            hints_used=hints_used,
            time_remaining=time_remaining,
            scores=ScoreBlock(**scores),
            total_score=total_score,
            difficulty=difficulty,
            horror=horror,
            activity=activity,
            device_ratio=device_ratio,
            narrative=narrative,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewRecorded(
                review_id=str(review.id),
                theme_name=theme_name,
                venue=venue,
                region=region,
                visit_date=review.visit_date.isoformat(),
                total_score=total_score,
                recorded_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Revise
    # -------------------------------------------------------------------
    def revise(
        self,
        theme_name=_UNSET,
        venue=_UNSET,
        region=_UNSET,
        genres=_UNSET,
        visit_date=_UNSET,
        participants=_UNSET,
        success=_UNSET,
        hints_used=_UNSET,
        time_remaining=_UNSET,
        scores=_UNSET,
        difficulty=_UNSET,
        horror=_UNSET,
        activity=_UNSET,
        device_ratio=_UNSET,
        narrative=_UNSET,
    ):
        """Replace the supplied fields. A new score block recomputes the total."""
        now = datetime.now(UTC)
        plain_fields = {
            "theme_name": theme_name,
            "venue": venue,
            "region": region,
            "visit_date": visit_date,
            "participants": participants,
            "success": success,
            "hints_used": hints_used,
            "time_remaining": time_remaining,
            "difficulty": difficulty,
            "horror": horror,
            "activity": activity,
            "device_ratio": device_ratio,
            "narrative": narrative,
        }

        with atomic_change(self):
            for name, value in plain_fields.items():
                if value is not _UNSET:
                    setattr(self, name, value)
            if genres is not _UNSET:
                self.genres = json.dumps(genres) if genres else None
            if scores is not _UNSET:
                self.scores = ScoreBlock(**scores)
                self.total_score = compute_total_score(scores)
            self.updated_at = now

        self.raise_(
            ReviewRevised(
                review_id=str(self.id),
                theme_name=self.theme_name,
                total_score=self.total_score,
                scores_changed=str(scores is not _UNSET),
                revised_at=now,
            )
        )
