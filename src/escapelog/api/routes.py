"""FastAPI routes for the Escape Log.

Reads are public: the ranked list (with filters), filter options, category
averages and a single review's detail. Writes translate request schemas into
Protean commands and require a signed-in author.
"""

import json

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from escapelog.api.schemas import (
    AverageScoresResponse,
    DeviceSplitSchema,
    FilterOptionsResponse,
    RadarRowSchema,
    RecordReviewRequest,
    ReviewCardResponse,
    ReviewDetailResponse,
    ReviewIdResponse,
    ReviewListResponse,
    ReviewResponse,
    ReviseReviewRequest,
    ScoreBarSchema,
    SessionResponse,
    SignInRequest,
    StatusResponse,
)
from escapelog.auth import get_identity_provider
from escapelog.auth.port import Identity
from escapelog.browsing.filters import FilterSelection, filter_options, filter_reviews
from escapelog.review.deletion import DeleteReview
from escapelog.review.recording import RecordReview
from escapelog.review.review import Review
from escapelog.review.revision import ReviseReview
from escapelog.scoring.aggregation import compute_averages, format_total_score
from escapelog.scoring.colors import score_bar
from escapelog.scoring.radar import device_lock_split, radar_series

logger = structlog.get_logger(__name__)

review_router = APIRouter(prefix="/reviews", tags=["reviews"])
session_router = APIRouter(prefix="/session", tags=["session"])

# Ratings drawn as bars on list cards
_CARD_BARS = ("difficulty", "horror", "activity")


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
def _bearer_token(authorization: str) -> str | None:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_author(authorization: str = Header(default="")) -> Identity:
    """Resolve the signed-in author or reject the request."""
    identity = get_identity_provider().current_user(_bearer_token(authorization))
    if identity is None:
        logger.warning("Write rejected: not signed in")
        raise HTTPException(status_code=401, detail="Sign-in required")
    return identity


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------
def _review_payload(review: Review) -> dict:
    return {
        "review_id": str(review.id),
        "theme_name": review.theme_name,
        "venue": review.venue,
        "region": review.region,
        "genres": review.genre_list(),
        "visit_date": review.visit_date,
        "participants": review.participants,
        "success": review.success,
        "hints_used": review.hints_used,
        "time_remaining": review.time_remaining,
        "scores": review.scores.as_dict(),
        "total_score": review.total_score,
        "display_total": format_total_score(review.total_score),
        "difficulty": review.difficulty,
        "horror": review.horror,
        "activity": review.activity,
        "device_ratio": review.device_ratio,
        "narrative": review.narrative,
        "created_at": review.created_at,
        "updated_at": review.updated_at,
    }


def _card(review: Review, rank: int) -> ReviewCardResponse:
    bars = [
        ScoreBarSchema(**score_bar(metric, getattr(review, metric)))
        for metric in _CARD_BARS
        if getattr(review, metric) is not None
    ]
    return ReviewCardResponse(**_review_payload(review), rank=rank, bars=bars)


def _ranked_reviews() -> list[Review]:
    try:
        return current_domain.repository_for(Review).ranked()
    except Exception:
        logger.exception("Review read failed", operation="ranked")
        raise


def _options_response(reviews) -> FilterOptionsResponse:
    options = filter_options(reviews)
    return FilterOptionsResponse(
        venues=list(options.venues),
        regions=list(options.regions),
        genres=list(options.genres),
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
@review_router.get("", response_model=ReviewListResponse)
async def list_reviews(region: str = "", venue: str = "", genre: str = "") -> ReviewListResponse:
    """All reviews ranked by total score, optionally filtered."""
    reviews = _ranked_reviews()
    visible = filter_reviews(reviews, FilterSelection(region=region, venue=venue, genre=genre))
    return ReviewListResponse(
        count=len(visible),
        reviews=[_card(review, rank) for rank, review in enumerate(visible, start=1)],
        options=_options_response(reviews),
    )


@review_router.get("/options", response_model=FilterOptionsResponse)
async def list_filter_options() -> FilterOptionsResponse:
    """Distinct venues, regions and genres across the log."""
    return _options_response(_ranked_reviews())


@review_router.get("/averages", response_model=AverageScoresResponse)
async def get_average_scores() -> AverageScoresResponse:
    """Per-category averages over every review."""
    return AverageScoresResponse(**compute_averages(_ranked_reviews()))


@review_router.get("/{review_id}", response_model=ReviewDetailResponse)
async def get_review(review_id: str) -> ReviewDetailResponse:
    """One review with the corpus averages it is charted against."""
    try:
        review = current_domain.repository_for(Review).get(review_id)
    except ObjectNotFoundError:
        logger.warning("Review not found", operation="read", review_id=review_id)
        raise HTTPException(status_code=404, detail="Review not found")
    averages = compute_averages(_ranked_reviews())

    device_split = None
    if review.device_ratio is not None:
        device, lock = device_lock_split(review.device_ratio)
        device_split = DeviceSplitSchema(device=device, lock=lock)

    return ReviewDetailResponse(
        review=ReviewResponse(**_review_payload(review)),
        averages=AverageScoresResponse(**averages),
        radar=[RadarRowSchema(**row) for row in radar_series(review.scores, averages)],
        device_split=device_split,
    )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def _process(command, operation: str, review_id: str | None = None):
    """Process a write command, logging any failure before it propagates."""
    try:
        return current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        logger.warning("Review not found", operation=operation, review_id=review_id)
        raise
    except ValidationError as exc:
        logger.warning("Review write rejected", operation=operation, review_id=review_id, errors=exc.messages)
        raise
    except Exception:
        logger.exception("Review write failed", operation=operation, review_id=review_id)
        raise


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def record_review(body: RecordReviewRequest, author: Identity = Depends(require_author)) -> ReviewIdResponse:
    """Record a new review."""
    command = RecordReview(
        theme_name=body.theme_name,
        venue=body.venue,
        region=body.region,
        visit_date=body.visit_date.isoformat(),
        participants=body.participants,
        scores=json.dumps(body.scores.model_dump()),
        success=body.success,
        hints_used=body.hints_used,
        time_remaining=body.time_remaining,
        genres=json.dumps(body.genres) if body.genres else None,
        difficulty=body.difficulty,
        horror=body.horror,
        activity=body.activity,
        device_ratio=body.device_ratio,
        narrative=body.narrative,
    )
    review_id = _process(command, "record")
    return ReviewIdResponse(review_id=review_id)


@review_router.put("/{review_id}", response_model=StatusResponse)
async def revise_review(
    review_id: str, body: ReviseReviewRequest, author: Identity = Depends(require_author)
) -> StatusResponse:
    """Replace the fields present in the body; an explicit null clears an optional field."""
    command = ReviseReview(
        review_id=review_id,
        theme_name=body.theme_name,
        venue=body.venue,
        region=body.region,
        visit_date=body.visit_date.isoformat() if body.visit_date else None,
        participants=body.participants,
        scores=json.dumps(body.scores.model_dump()) if body.scores else None,
        success=body.success,
        hints_used=body.hints_used,
        time_remaining=body.time_remaining,
        genres=json.dumps(body.genres) if body.genres is not None else None,
        difficulty=body.difficulty,
        horror=body.horror,
        activity=body.activity,
        device_ratio=body.device_ratio,
        narrative=body.narrative,
        provided_fields=json.dumps(sorted(body.model_fields_set)),
    )
    _process(command, "revise", review_id)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, author: Identity = Depends(require_author)) -> StatusResponse:
    """Delete a review."""
    _process(DeleteReview(review_id=review_id), "delete", review_id)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
@session_router.get("", response_model=SessionResponse)
async def get_session(authorization: str = Header(default="")) -> SessionResponse:
    """Whether the caller is signed in, and as whom."""
    identity = get_identity_provider().current_user(_bearer_token(authorization))
    if identity is None:
        return SessionResponse(signed_in=False)
    return SessionResponse(signed_in=True, user_id=identity.user_id, display_name=identity.display_name)


@session_router.post("", response_model=SessionResponse)
async def sign_in(body: SignInRequest) -> SessionResponse:
    """Sign in with a credential."""
    result = get_identity_provider().sign_in(body.credential)
    if not result.success:
        logger.warning("Sign-in failed", reason=result.failure_reason)
        raise HTTPException(status_code=401, detail="Sign-in failed")
    return SessionResponse(
        signed_in=True,
        user_id=result.identity.user_id,
        display_name=result.identity.display_name,
    )
