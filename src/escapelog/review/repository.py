"""Read access to the review log."""

from escapelog.domain import escapelog
from escapelog.review.review import Review

# First fetch size; a larger log is re-read in full using the reported total
_PAGE_SIZE = 1_000


@escapelog.repository(part_of=Review)
class ReviewRepository:
    def ranked(self) -> list[Review]:
        """Every review, highest stored total score first."""
        query = self._dao.query.order_by("-total_score")
        result = query.limit(_PAGE_SIZE).all()
        if result.total > len(result.items):
            result = query.limit(result.total).all()
        return result.items
