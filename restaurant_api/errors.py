from __future__ import annotations


class DataError(Exception):
    """Base class for failures while loading the JSON data files."""


class DataFileError(DataError):
    """A data file is missing, unreadable, or not valid JSON."""


class MalformedDataError(DataError):
    """A data file parsed, but does not hold a list of well-formed records."""


class InvalidFilterError(ValueError):
    """A query parameter could not be parsed into the expected type."""

    def __init__(self, param: str, value: str) -> None:
        super().__init__(f"Invalid value for {param}: {value!r}")
        self.param = param
        self.value = value


class ApiError(Exception):
    """Client-facing failure raised at a route's boundary.

    Rendered as ``{"success": false, "message": ...}`` with ``status_code``.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class RestaurantNotFound(LookupError):
    """No restaurant has the requested id."""
