from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from ..errors import InvalidFilterError, RestaurantNotFound
from .models import Restaurant, RestaurantDetail, RestaurantFilters, Review


def parse_filters(
    search: str | None = None,
    category: str | None = None,
    min_rating: str | None = None,
    price_range: str | None = None,
) -> RestaurantFilters:
    """
    Build ``RestaurantFilters`` from raw query-string values.

    Empty strings count as absent. A non-numeric ``minRating`` or non-integer
    ``priceRange`` raises ``InvalidFilterError`` naming the parameter.
    """
    raw = {
        "search": search,
        "category": category,
        "minRating": min_rating,
        "priceRange": price_range,
    }
    try:
        return RestaurantFilters.model_validate(raw)
    except ValidationError as exc:
        loc = exc.errors()[0]["loc"]
        param = str(loc[0]) if loc else "query"
        raise InvalidFilterError(param, str(raw.get(param))) from exc


def _matches(restaurant: Restaurant, filters: RestaurantFilters) -> bool:
    if filters.search:
        needle = filters.search.lower()
        if (
            needle not in restaurant.name.lower()
            and needle not in restaurant.description.lower()
        ):
            return False

    if filters.category and restaurant.category.lower() != filters.category.lower():
        return False

    if filters.min_rating is not None:
        if restaurant.average_rating is None or restaurant.average_rating < filters.min_rating:
            return False

    if filters.price_range is not None and restaurant.price_range != filters.price_range:
        return False

    return True


def filter_restaurants(
    restaurants: Iterable[Restaurant], filters: RestaurantFilters
) -> list[Restaurant]:
    """Return restaurants matching every supplied filter, in input order."""
    return [r for r in restaurants if _matches(r, filters)]


def _parse_id(restaurant_id: int | str) -> int | None:
    """Integer form of an id; only plain ASCII digits with an optional sign."""
    if isinstance(restaurant_id, int):
        return restaurant_id
    digits = restaurant_id[1:] if restaurant_id.startswith("-") else restaurant_id
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(restaurant_id)


def reviews_for(reviews: Iterable[Review], restaurant_id: int | None = None) -> list[Review]:
    """Reviews for one restaurant (or all of them), newest first.

    ``sorted`` is stable, so reviews sharing a timestamp keep file order.
    """
    selected = [
        r for r in reviews if restaurant_id is None or r.restaurant_id == restaurant_id
    ]
    return sorted(selected, key=lambda r: r.created_timestamp, reverse=True)


def get_restaurant_with_reviews(
    restaurants: Sequence[Restaurant],
    reviews: Iterable[Review],
    restaurant_id: int | str,
) -> RestaurantDetail:
    """Find a restaurant by id and attach its reviews.

    Raises ``RestaurantNotFound`` when no restaurant has that id, including
    when ``restaurant_id`` is not an integer at all.
    """
    target = _parse_id(restaurant_id)
    restaurant = next((r for r in restaurants if r.id == target), None)
    if restaurant is None:
        raise RestaurantNotFound(restaurant_id)

    return RestaurantDetail.model_validate(
        {**restaurant.model_dump(by_alias=True), "reviews": reviews_for(reviews, target)}
    )


def parse_review_filter(restaurant_id: str | None) -> int | None:
    """Parse the optional ``restaurantId`` query value for review listings."""
    if restaurant_id is None or restaurant_id == "":
        return None
    parsed = _parse_id(restaurant_id)
    if parsed is None:
        raise InvalidFilterError("restaurantId", restaurant_id)
    return parsed
