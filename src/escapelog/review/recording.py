"""RecordReview: write a new theme review to the log."""

import json
from datetime import date

import structlog
from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from escapelog.domain import escapelog
from escapelog.review.review import Review

logger = structlog.get_logger(__name__)


@escapelog.command(part_of="Review")
class RecordReview:
    theme_name = String(required=True, max_length=200)
    venue = String(required=True, max_length=200)
    region = String(required=True, max_length=100)
    visit_date = String(required=True, max_length=10)  # ISO date
    participants = Integer(required=True)
    scores = Text(required=True)  # JSON object: {fun, completion, immersion, price, design}
    success = Boolean(default=True)
    hints_used = Integer(default=0)
    time_remaining = Integer(default=0)
    genres = Text()  # JSON array of strings
    difficulty = Integer()
    horror = Integer()
    activity = Integer()
    device_ratio = Integer()
    narrative = Text()


@escapelog.command_handler(part_of=Review)
class RecordReviewHandler:
    @handle(RecordReview)
    def record_review(self, command):
        review = Review.record(
            theme_name=command.theme_name,
            venue=command.venue,
            region=command.region,
            visit_date=date.fromisoformat(command.visit_date),
            participants=command.participants,
            scores=json.loads(command.scores),
            success=command.success,
            hints_used=command.hints_used,
            time_remaining=command.time_remaining,
            genres=json.loads(command.genres) if command.genres else None,
            difficulty=command.difficulty,
            horror=command.horror,
            activity=command.activity,
            device_ratio=command.device_ratio,
            narrative=command.narrative,
        )
        current_domain.repository_for(Review).add(review)

        logger.info(
            "Review recorded",
            review_id=str(review.id),
            theme_name=review.theme_name,
            total_score=review.total_score,
        )
        return str(review.id)
