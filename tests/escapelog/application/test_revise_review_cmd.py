"""Application tests for the ReviseReview command handler."""

import json
from datetime import date

import pytest
from escapelog.review.recording import RecordReview
from escapelog.review.review import Review
from escapelog.review.revision import ReviseReview
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

SCORES = {"fun": 8, "completion": 7, "immersion": 9, "price": 6, "design": 7}


def _record():
    return current_domain.process(
        RecordReview(
            theme_name="Vault",
            venue="Zero World",
            region="Hongdae",
            visit_date="2024-05-01",
            participants=3,
            scores=json.dumps(SCORES),
            genres=json.dumps(["Heist"]),
        ),
        asynchronous=False,
    )


class TestReviseReviewCommand:
    def test_revise_plain_fields(self):
        review_id = _record()
        current_domain.process(
            ReviseReview(review_id=review_id, venue="Key Escape", hints_used=2),
            asynchronous=False,
        )
        review = current_domain.repository_for(Review).get(review_id)
        assert review.venue == "Key Escape"
        assert review.hints_used == 2
        assert review.theme_name == "Vault"
        assert review.total_score == pytest.approx(7.4)

    def test_revise_scores_recomputes_total(self):
        review_id = _record()
        current_domain.process(
            ReviseReview(review_id=review_id, scores=json.dumps({**SCORES, "fun": 3})),
            asynchronous=False,
        )
        review = current_domain.repository_for(Review).get(review_id)
        assert review.scores.fun == 3
        assert review.total_score == pytest.approx(6.4)

    def test_empty_genre_list_clears_genres(self):
        review_id = _record()
        current_domain.process(ReviseReview(review_id=review_id, genres="[]"), asynchronous=False)
        assert current_domain.repository_for(Review).get(review_id).genre_list() == []

    def test_invalid_revision_keeps_stored_review(self):
        review_id = _record()
        with pytest.raises(ValidationError):
            current_domain.process(
                ReviseReview(review_id=review_id, scores=json.dumps({**SCORES, "price": 11})),
                asynchronous=False,
            )
        assert current_domain.repository_for(Review).get(review_id).scores.price == 6

    def test_revise_unknown_review(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(ReviseReview(review_id="missing", venue="X"), asynchronous=False)


class TestReviseSentFields:
    def _record_with_extras(self):
        return current_domain.process(
            RecordReview(
                theme_name="Haunted Inn",
                venue="Zero World",
                region="Hongdae",
                visit_date="2024-10-31",
                participants=4,
                scores=json.dumps(SCORES),
                horror=8,
                narrative="Lights went out twice.",
            ),
            asynchronous=False,
        )

    def test_explicit_null_clears_optional_fields(self):
        review_id = self._record_with_extras()
        current_domain.process(
            ReviseReview(review_id=review_id, provided_fields=json.dumps(["horror", "narrative"])),
            asynchronous=False,
        )
        review = current_domain.repository_for(Review).get(review_id)
        assert review.horror is None
        assert review.narrative is None
        assert review.theme_name == "Haunted Inn"

    def test_unsent_fields_are_kept(self):
        review_id = self._record_with_extras()
        current_domain.process(
            ReviseReview(review_id=review_id, region="Gangnam", provided_fields=json.dumps(["region"])),
            asynchronous=False,
        )
        review = current_domain.repository_for(Review).get(review_id)
        assert review.region == "Gangnam"
        assert review.horror == 8

    def test_without_sent_list_nulls_are_ignored(self):
        review_id = self._record_with_extras()
        current_domain.process(ReviseReview(review_id=review_id, venue="Key Escape"), asynchronous=False)
        review = current_domain.repository_for(Review).get(review_id)
        assert review.venue == "Key Escape"
        assert review.narrative == "Lights went out twice."

    def test_revise_visit_date(self):
        review_id = self._record_with_extras()
        current_domain.process(ReviseReview(review_id=review_id, visit_date="2024-11-01"), asynchronous=False)
        assert current_domain.repository_for(Review).get(review_id).visit_date == date(2024, 11, 1)

    def test_null_required_field_rejected(self):
        review_id = self._record_with_extras()
        with pytest.raises(ValidationError):
            current_domain.process(
                ReviseReview(review_id=review_id, provided_fields=json.dumps(["venue"])),
                asynchronous=False,
            )
