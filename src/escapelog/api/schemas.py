"""Pydantic request/response schemas for the Escape Log API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ScoreBlockSchema(BaseModel):
    fun: float = Field(ge=0, le=10)
    completion: float = Field(ge=0, le=10)
    immersion: float = Field(ge=0, le=10)
    price: float = Field(ge=0, le=10)
    design: float = Field(ge=0, le=10)


class RecordReviewRequest(BaseModel):
    theme_name: str = Field(min_length=1, max_length=200)
    venue: str = Field(min_length=1, max_length=200)
    region: str = Field(min_length=1, max_length=100)
    visit_date: date
    participants: int = Field(ge=1)
    scores: ScoreBlockSchema
    success: bool = True
    hints_used: int = Field(default=0, ge=0)
    time_remaining: int = Field(default=0, ge=0)
    genres: list[str] | None = None
    difficulty: int | None = Field(default=None, ge=0, le=10)
    horror: int | None = Field(default=None, ge=0, le=10)
    activity: int | None = Field(default=None, ge=0, le=10)
    device_ratio: int | None = Field(default=None, ge=0, le=10)
    narrative: str | None = None


class ReviseReviewRequest(BaseModel):
    theme_name: str | None = Field(default=None, min_length=1, max_length=200)
    venue: str | None = Field(default=None, min_length=1, max_length=200)
    region: str | None = Field(default=None, min_length=1, max_length=100)
    visit_date: date | None = None
    participants: int | None = Field(default=None, ge=1)
    scores: ScoreBlockSchema | None = None
    success: bool | None = None
    hints_used: int | None = Field(default=None, ge=0)
    time_remaining: int | None = Field(default=None, ge=0)
    genres: list[str] | None = None
    difficulty: int | None = Field(default=None, ge=0, le=10)
    horror: int | None = Field(default=None, ge=0, le=10)
    activity: int | None = Field(default=None, ge=0, le=10)
    device_ratio: int | None = Field(default=None, ge=0, le=10)
    narrative: str | None = None


class SignInRequest(BaseModel):
    credential: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ScoreBarSchema(BaseModel):
    metric: str
    score: float
    width: float
    color: str


class ReviewResponse(BaseModel):
    review_id: str
    theme_name: str
    venue: str
    region: str
    genres: list[str]
    visit_date: date
    participants: int
    success: bool
    hints_used: int
    time_remaining: int
    scores: ScoreBlockSchema
    total_score: float
    display_total: str
    difficulty: int | None = None
    horror: int | None = None
    activity: int | None = None
    device_ratio: int | None = None
    narrative: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewCardResponse(ReviewResponse):
    rank: int
    bars: list[ScoreBarSchema]


class FilterOptionsResponse(BaseModel):
    venues: list[str]
    regions: list[str]
    genres: list[str]


class ReviewListResponse(BaseModel):
    count: int
    reviews: list[ReviewCardResponse]
    options: FilterOptionsResponse


class AverageScoresResponse(BaseModel):
    fun: float
    completion: float
    immersion: float
    price: float
    design: float


class RadarRowSchema(BaseModel):
    category: str
    label: str
    description: str
    current: float
    average: float
    full_mark: int


class DeviceSplitSchema(BaseModel):
    device: int
    lock: int


class ReviewDetailResponse(BaseModel):
    review: ReviewResponse
    averages: AverageScoresResponse
    radar: list[RadarRowSchema]
    device_split: DeviceSplitSchema | None = None


class SessionResponse(BaseModel):
    signed_in: bool
    user_id: str | None = None
    display_name: str | None = None
