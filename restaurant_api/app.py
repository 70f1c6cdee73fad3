from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import DEFAULT_APP_CONFIG, AppConfig
from .errors import (
    ApiError,
    DataError,
    InvalidFilterError,
    MalformedDataError,
    RestaurantNotFound,
)
from .restaurants.models import (
    ErrorResponse,
    RestaurantDetailResponse,
    RestaurantListResponse,
    ReviewListResponse,
    StatsResponse,
)
from .restaurants.query import (
    filter_restaurants,
    get_restaurant_with_reviews,
    parse_filters,
    parse_review_filter,
    reviews_for,
)
from .stats.aggregator import compute_stats
from .storage.data_store import JsonDataStore

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

RESTAURANTS_ERROR = "Failed to fetch restaurant data"
RESTAURANT_NOT_FOUND = "Restaurant not found"
REVIEWS_ERROR = "Failed to fetch review data"
STATS_ERROR = "Failed to fetch statistics"
STATS_MALFORMED = "Data files are malformed"
ROUTE_NOT_FOUND = "API endpoint not found"
INTERNAL_ERROR = "Internal server error"

_config = DEFAULT_APP_CONFIG

app = FastAPI(title="Restaurant Review API", version=API_VERSION)
app.state.config = _config
# CORS origins are fixed when the app is built; replacing app.state.config
# later only affects request-time settings.
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_config.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def _failure(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


# ── Dependencies ─────────────────────────────────────────────────────────


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_data_store(config: AppConfig = Depends(get_config)) -> JsonDataStore:
    """Fresh read-only store per request; files are re-read on every load."""
    return JsonDataStore(config)


# ── Exception handlers ───────────────────────────────────────────────────


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _failure(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods both mean "no such endpoint".
    if exc.status_code in (404, 405):
        return _failure(404, ROUTE_NOT_FOUND)
    return _failure(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _failure(400, "Invalid request parameters")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    config: AppConfig = request.app.state.config
    return _failure(500, INTERNAL_ERROR, str(exc) if config.is_development else None)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/")
def root() -> dict:
    return {
        "message": "Restaurant Review API",
        "version": API_VERSION,
        "endpoints": {
            "restaurants": "/api/restaurants",
            "reviews": "/api/reviews",
            "stats": "/api/stats",
        },
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/restaurants", response_model=RestaurantListResponse)
def list_restaurants(
    search: str | None = Query(None),
    category: str | None = Query(None),
    min_rating: str | None = Query(None, alias="minRating"),
    price_range: str | None = Query(None, alias="priceRange"),
    store: JsonDataStore = Depends(get_data_store),
) -> RestaurantListResponse:
    try:
        filters = parse_filters(search, category, min_rating, price_range)
    except InvalidFilterError as exc:
        raise ApiError(400, f"Invalid value for {exc.param}") from exc

    try:
        restaurants = store.load_restaurants()
    except DataError as exc:
        logger.exception("Error fetching restaurants")
        raise ApiError(500, RESTAURANTS_ERROR) from exc

    matched = filter_restaurants(restaurants, filters)
    return RestaurantListResponse(data=matched, total=len(matched), filters=filters)


@app.get("/api/restaurants/{restaurant_id}", response_model=RestaurantDetailResponse)
def get_restaurant(
    restaurant_id: str,
    store: JsonDataStore = Depends(get_data_store),
) -> RestaurantDetailResponse:
    try:
        restaurants = store.load_restaurants()
        reviews = store.load_reviews()
    except DataError as exc:
        logger.exception("Error fetching restaurant %s", restaurant_id)
        raise ApiError(500, RESTAURANTS_ERROR) from exc

    try:
        detail = get_restaurant_with_reviews(restaurants, reviews, restaurant_id)
    except RestaurantNotFound as exc:
        raise ApiError(404, RESTAURANT_NOT_FOUND) from exc

    return RestaurantDetailResponse(data=detail)


@app.get("/api/reviews", response_model=ReviewListResponse)
def list_reviews(
    restaurant_id: str | None = Query(None, alias="restaurantId"),
    store: JsonDataStore = Depends(get_data_store),
) -> ReviewListResponse:
    try:
        target = parse_review_filter(restaurant_id)
    except InvalidFilterError as exc:
        raise ApiError(400, f"Invalid value for {exc.param}") from exc

    try:
        reviews = store.load_reviews()
    except DataError as exc:
        logger.exception("Error fetching reviews")
        raise ApiError(500, REVIEWS_ERROR) from exc

    selected = reviews_for(reviews, target)
    return ReviewListResponse(data=selected, total=len(selected))


@app.get("/api/stats", response_model=StatsResponse)
def stats(store: JsonDataStore = Depends(get_data_store)) -> StatsResponse:
    try:
        data = compute_stats(store.load_restaurants(), store.load_reviews())
    except MalformedDataError as exc:
        logger.exception("Malformed data while computing stats")
        raise ApiError(500, STATS_MALFORMED) from exc
    except DataError as exc:
        logger.exception("Error fetching stats")
        raise ApiError(500, STATS_ERROR) from exc

    return StatsResponse(data=data)
