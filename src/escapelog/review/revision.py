"""ReviseReview: update an existing review in place.

``provided_fields`` lists the fields the caller actually sent, so an explicit
null clears an optional field instead of being mistaken for "not sent". When
it is absent, every non-null field on the command counts as sent. The stored
total score is recomputed only when a new score block is supplied.
"""

import json
from datetime import date

import structlog
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from escapelog.domain import escapelog
from escapelog.review.review import Review

logger = structlog.get_logger(__name__)

_PLAIN_FIELDS = (
    "theme_name",
    "venue",
    "region",
    "participants",
    "success",
    "hints_used",
    "time_remaining",
    "difficulty",
    "horror",
    "activity",
    "device_ratio",
    "narrative",
)


@escapelog.command(part_of="Review")
class ReviseReview:
    review_id = Identifier(required=True)
    theme_name = String(max_length=200)
    venue = String(max_length=200)
    region = String(max_length=100)
    visit_date = String(max_length=10)  # ISO date
    participants = Integer()
    scores = Text()  # JSON object
    success = Boolean()
    hints_used = Integer()
    time_remaining = Integer()
    genres = Text()  # JSON array of strings; "[]" or null clears
    difficulty = Integer()
    horror = Integer()
    activity = Integer()
    device_ratio = Integer()
    narrative = Text()
    provided_fields = Text()  # JSON array of field names sent by the caller


def _sent_fields(command) -> set[str]:
    if command.provided_fields:
        return set(json.loads(command.provided_fields))
    return {name for name in (*_PLAIN_FIELDS, "visit_date", "scores", "genres") if getattr(command, name) is not None}


@escapelog.command_handler(part_of=Review)
class ReviseReviewHandler:
    @handle(ReviseReview)
    def revise_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        sent = _sent_fields(command)

        kwargs = {name: getattr(command, name) for name in _PLAIN_FIELDS if name in sent}
        if "visit_date" in sent:
            kwargs["visit_date"] = date.fromisoformat(command.visit_date) if command.visit_date else None
        # The score block is required; a null block leaves the stored one in place
        if "scores" in sent and command.scores is not None:
            kwargs["scores"] = json.loads(command.scores)
        if "genres" in sent:
            kwargs["genres"] = json.loads(command.genres) if command.genres else []

        review.revise(**kwargs)
        repo.add(review)

        logger.info(
            "Review revised",
            review_id=str(review.id),
            fields=sorted(kwargs),
            total_score=review.total_score,
        )
