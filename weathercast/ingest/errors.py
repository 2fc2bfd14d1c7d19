"""Errors raised at the provider boundary."""


class ForecastError(Exception):
    """Base class for failures to obtain a usable forecast."""


class ForecastFetchError(ForecastError):
    """The provider could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LocationNotFoundError(ForecastFetchError):
    """The provider does not know the requested location."""


class ForecastParseError(ForecastError):
    """The provider response is not JSON or does not match its schema."""
