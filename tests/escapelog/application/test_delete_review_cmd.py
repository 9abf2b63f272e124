"""Application tests for the DeleteReview command handler."""

import json

import pytest
from escapelog.review.deletion import DeleteReview
from escapelog.review.recording import RecordReview
from escapelog.review.review import Review
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _record(theme_name="Haunted Inn"):
    return current_domain.process(
        RecordReview(
            theme_name=theme_name,
            venue="Zero World",
            region="Hongdae",
            visit_date="2024-10-31",
            participants=4,
            scores=json.dumps({"fun": 9, "completion": 8, "immersion": 10, "price": 7, "design": 9}),
        ),
        asynchronous=False,
    )


class TestDeleteReviewCommand:
    def test_delete_removes_review(self):
        review_id = _record()
        current_domain.process(DeleteReview(review_id=review_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Review).get(review_id)

    def test_delete_leaves_other_reviews(self):
        keep_id = _record("Keep Me")
        drop_id = _record("Drop Me")
        current_domain.process(DeleteReview(review_id=drop_id), asynchronous=False)
        remaining = current_domain.repository_for(Review).ranked()
        assert [str(review.id) for review in remaining] == [keep_id]

    def test_delete_unknown_review(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteReview(review_id="missing"), asynchronous=False)
