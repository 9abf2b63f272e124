"""Tests for the review draft reducer."""

from datetime import date

import pytest
from escapelog.browsing.form import (
    DEFAULT_SCORE,
    DraftLoaded,
    FieldChanged,
    GenreAdded,
    GenreRemoved,
    ReviewDraft,
    ScoreChanged,
    draft_from_review,
    draft_payload,
    draft_total_score,
    reduce_draft,
)
from escapelog.review.review import Review


class TestDraftDefaults:
    def test_form_defaults(self):
        draft = ReviewDraft()
        assert draft.participants == 2
        assert draft.success is True
        assert draft.genres == ()
        assert set(draft.scores.values()) == {DEFAULT_SCORE}
        assert draft.difficulty == draft.horror == draft.activity == draft.device_ratio == 5

    def test_default_total(self):
        assert draft_total_score(ReviewDraft()) == 5.0


class TestDraftReducer:
    def test_field_changed(self):
        draft = reduce_draft(ReviewDraft(), FieldChanged(name="theme_name", value="Vault"))
        assert draft.theme_name == "Vault"

    def test_previous_draft_untouched(self):
        before = ReviewDraft()
        reduce_draft(before, ScoreChanged(category="fun", value=9))
        assert before.scores["fun"] == DEFAULT_SCORE

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            reduce_draft(ReviewDraft(), FieldChanged(name="rank", value=1))

    def test_scores_not_settable_as_plain_field(self):
        with pytest.raises(ValueError):
            reduce_draft(ReviewDraft(), FieldChanged(name="scores", value={}))

    def test_score_changed_casts_to_int(self):
        draft = reduce_draft(ReviewDraft(), ScoreChanged(category="design", value="8"))
        assert draft.scores["design"] == 8
        assert draft_total_score(draft) == pytest.approx(5.6)

    def test_unknown_score_category_rejected(self):
        with pytest.raises(ValueError):
            reduce_draft(ReviewDraft(), ScoreChanged(category="horror", value=3))

    def test_genre_added_is_trimmed(self):
        draft = reduce_draft(ReviewDraft(), GenreAdded(genre="  Horror "))
        assert draft.genres == ("Horror",)

    def test_blank_and_duplicate_genres_ignored(self):
        draft = reduce_draft(ReviewDraft(), GenreAdded(genre="Horror"))
        assert reduce_draft(draft, GenreAdded(genre="Horror")) is draft
        assert reduce_draft(draft, GenreAdded(genre="   ")) is draft

    def test_genre_removed(self):
        draft = reduce_draft(ReviewDraft(), GenreAdded(genre="Horror"))
        draft = reduce_draft(draft, GenreAdded(genre="Heist"))
        draft = reduce_draft(draft, GenreRemoved(genre="Horror"))
        assert draft.genres == ("Heist",)

    def test_draft_loaded_merges_scores_with_defaults(self):
        draft = reduce_draft(
            ReviewDraft(),
            DraftLoaded({"theme_name": "Vault", "scores": {"fun": 9}, "visit_date": date(2024, 1, 2), "rank": 3}),
        )
        assert draft.theme_name == "Vault"
        assert draft.scores["fun"] == 9
        assert draft.scores["price"] == DEFAULT_SCORE
        assert draft.visit_date == "2024-01-02"

    def test_unsupported_action(self):
        with pytest.raises(TypeError):
            reduce_draft(ReviewDraft(), object())


class TestDraftPayload:
    def _filled_draft(self):
        draft = ReviewDraft()
        for name, value in (
            ("theme_name", "Vault"),
            ("venue", "Key Escape"),
            ("region", "Hongdae"),
            ("visit_date", "2024-06-15"),
        ):
            draft = reduce_draft(draft, FieldChanged(name=name, value=value))
        return reduce_draft(draft, GenreAdded(genre="Heist"))

    def test_payload_shape(self):
        payload = draft_payload(self._filled_draft())
        assert payload["visit_date"] == date(2024, 6, 15)
        assert payload["genres"] == ["Heist"]
        assert payload["narrative"] is None

    def test_payload_without_date(self):
        assert draft_payload(ReviewDraft())["visit_date"] is None

    def test_payload_records_a_review(self):
        review = Review.record(**draft_payload(self._filled_draft()))
        assert review.theme_name == "Vault"
        assert review.total_score == 5.0
        assert review.horror == 5

    def test_round_trip_through_review(self):
        review = Review.record(**draft_payload(self._filled_draft()))
        draft = draft_from_review(review)
        assert draft.theme_name == "Vault"
        assert draft.genres == ("Heist",)
        assert draft.visit_date == "2024-06-15"
        assert draft.scores == review.scores.as_dict()
