from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import AppConfig
from ..errors import DataFileError, MalformedDataError
from ..restaurants.models import Restaurant, Review

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def read_json_file(path: Path) -> Any:
    """Read and parse a whole JSON file. Raises ``DataFileError`` on failure."""
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise DataFileError(f"Data file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataFileError(f"Could not read data file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DataFileError(f"Invalid JSON in {path}: {exc}") from exc


def parse_records(raw: Any, model: type[RecordT], source: str) -> list[RecordT]:
    """Validate a parsed JSON document into a list of ``model`` records."""
    if not isinstance(raw, list):
        raise MalformedDataError(
            f"{source}: expected a JSON array, got {type(raw).__name__}"
        )
    try:
        return TypeAdapter(list[model]).validate_python(raw)
    except ValidationError as exc:
        raise MalformedDataError(
            f"{source}: {exc.error_count()} invalid record field(s)"
        ) from exc


class JsonDataStore:
    """
    Read-only view over the restaurant and review JSON files.

    One instance is built per request; each ``load_*`` call re-reads the file,
    so edits on disk are visible to the next request.
    """

    def __init__(self, config: AppConfig) -> None:
        self.data_dir = Path(config.data_dir)
        self.restaurants_path = self.data_dir / config.restaurants_filename
        self.reviews_path = self.data_dir / config.reviews_filename

    def load_restaurants(self) -> list[Restaurant]:
        raw = read_json_file(self.restaurants_path)
        records = parse_records(raw, Restaurant, self.restaurants_path.name)
        logger.debug("Loaded %d restaurants from %s", len(records), self.restaurants_path)
        return records

    def load_reviews(self) -> list[Review]:
        raw = read_json_file(self.reviews_path)
        records = parse_records(raw, Review, self.reviews_path.name)
        logger.debug("Loaded %d reviews from %s", len(records), self.reviews_path)
        return records
