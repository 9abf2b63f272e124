"""DeleteReview: remove a review from the log for good."""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from escapelog.domain import escapelog
from escapelog.review.review import Review

logger = structlog.get_logger(__name__)


@escapelog.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)


@escapelog.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        repo._dao.delete(review)

        logger.info("Review deleted", review_id=str(command.review_id), theme_name=review.theme_name)
