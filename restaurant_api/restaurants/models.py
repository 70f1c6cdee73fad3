from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

_DATETIME = TypeAdapter(datetime)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive values are read as UTC."""
    parsed = _DATETIME.validate_python(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


class Restaurant(BaseModel):
    # Fields beyond the ones below are kept and echoed back unchanged.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    description: str
    category: str
    average_rating: float | None = Field(default=None, alias="averageRating")
    price_range: int = Field(..., alias="priceRange")


class Review(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    restaurant_id: int = Field(..., alias="restaurantId")
    # Kept as written in the file; parsed only for ordering.
    created_at: str = Field(..., alias="createdAt")
    rating: int | float
    text: str

    @field_validator("created_at")
    @classmethod
    def _must_be_timestamp(cls, value: str) -> str:
        try:
            parse_timestamp(value)
        except ValidationError as exc:
            raise ValueError(f"not a timestamp: {value!r}") from exc
        return value

    @property
    def created_timestamp(self) -> datetime:
        return parse_timestamp(self.created_at)


class RestaurantDetail(Restaurant):
    reviews: list[Review] = Field(default_factory=list)


class RestaurantFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search: str | None = None
    category: str | None = None
    min_rating: float | None = Field(default=None, alias="minRating", allow_inf_nan=False)
    price_range: int | None = Field(default=None, alias="priceRange")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and value == "":
            return None
        return value


class RestaurantStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_restaurants: int = Field(..., alias="totalRestaurants")
    total_reviews: int = Field(..., alias="totalReviews")
    average_rating: float = Field(..., alias="averageRating")
    top_rated_restaurants: list[Restaurant] = Field(..., alias="topRatedRestaurants")


# ── Response envelopes ──────────────────────────────────────────────────


class RestaurantListResponse(BaseModel):
    success: bool = True
    data: list[Restaurant]
    total: int
    filters: RestaurantFilters


class RestaurantDetailResponse(BaseModel):
    success: bool = True
    data: RestaurantDetail


class ReviewListResponse(BaseModel):
    success: bool = True
    data: list[Review]
    total: int


class StatsResponse(BaseModel):
    success: bool = True
    data: RestaurantStats


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str | None = None
