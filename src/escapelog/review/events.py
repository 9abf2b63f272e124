"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from escapelog.domain import escapelog


@escapelog.event(part_of="Review")
class ReviewRecorded:
    """A new theme review was written to the log."""

    __version__ = 1

    review_id = Identifier(required=True)
    theme_name = String(required=True)
    venue = String(required=True)
    region = String(required=True)
    visit_date = String(required=True, max_length=10)  # ISO date
    total_score = Float(required=True)
    recorded_at = DateTime(required=True)


@escapelog.event(part_of="Review")
class ReviewRevised:
    """An existing review was updated."""

    __version__ = 1

    review_id = Identifier(required=True)
    theme_name = String(required=True)
    total_score = Float(required=True)
    scores_changed = String(required=True)  # "True"/"False"
    revised_at = DateTime(required=True)
