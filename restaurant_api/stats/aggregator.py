from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..errors import MalformedDataError
from ..restaurants.models import Restaurant, RestaurantStats

TOP_RATED_LIMIT = 5


def _round_half_up(value: float) -> float:
    """One decimal place, halves rounded up on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_stats(restaurants: Any, reviews: Any) -> RestaurantStats:
    """
    Aggregate figures over the full restaurant and review collections.

    ``averageRating`` is the mean of each restaurant's stored average (not a
    recomputation from reviews); restaurants without one count as 0.
    """
    if not isinstance(restaurants, list) or not isinstance(reviews, list):
        raise MalformedDataError("restaurants and reviews must both be lists")

    total_restaurants = len(restaurants)
    total_reviews = len(reviews)

    total_rating = sum(r.average_rating or 0 for r in restaurants)
    average_rating = _round_half_up(total_rating / total_restaurants) if total_restaurants else 0

    # Stable sort keeps file order among equal ratings
    rated: list[Restaurant] = [r for r in restaurants if r.average_rating is not None]
    top_rated = sorted(rated, key=lambda r: r.average_rating, reverse=True)[:TOP_RATED_LIMIT]

    return RestaurantStats(
        total_restaurants=total_restaurants,
        total_reviews=total_reviews,
        average_rating=average_rating,
        top_rated_restaurants=top_rated,
    )
