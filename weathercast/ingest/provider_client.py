"""Shared HTTP plumbing for forecast provider clients: retry and error mapping."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from weathercast.ingest.errors import (
    ForecastFetchError,
    ForecastParseError,
    LocationNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weathercast/0.1.0"
RETRY_STATUSES = (429, 503)
NOT_FOUND_STATUSES = (400, 404)


class ProviderClient(ABC):
    """Base class for a forecast provider's HTTP client.

    Subclasses set ``name`` and implement ``get_forecast``.
    """

    name = "provider"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.user_agent = user_agent

    @abstractmethod
    def get_forecast(self, location: str, days: int) -> dict:
        """Return the provider's raw forecast JSON for ``location``."""

    def _get_json(self, path: str, params: dict[str, Any], location: str) -> dict:
        """GET ``path`` and return the decoded JSON body.

        Retries on 503/429 and transport errors with exponential backoff.
        Raises ForecastFetchError / ForecastParseError once retries run out.
        """
        url = f"{self.base_url}{path}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "%s request error, retrying in %.1fs: %s",
                        self.name, delay, e,
                    )
                    time.sleep(delay)
                    continue
                logger.error("%s request failed for %r: %s", self.name, location, e)
                raise ForecastFetchError(f"{self.name} request failed: {e}") from e

            if resp.status_code in RETRY_STATUSES and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "%s returned %d, retrying in %.1fs (attempt %d/%d)",
                    self.name, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                time.sleep(delay)
                continue
            return self._decode(resp, location)

        raise AssertionError("unreachable")

    def _decode(self, resp: httpx.Response, location: str) -> dict:
        if resp.status_code in NOT_FOUND_STATUSES:
            logger.error(
                "%s has no match for location %r (%d)",
                self.name, location, resp.status_code,
            )
            raise LocationNotFoundError(
                f"Location not found: {location}", status_code=resp.status_code
            )
        if not resp.is_success:
            logger.error(
                "%s returned an error for %r: %d",
                self.name, location, resp.status_code,
            )
            raise ForecastFetchError(
                f"{self.name} returned an error: {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body for %r", self.name, location)
            raise ForecastParseError(f"{self.name} response is not JSON") from e
        if not isinstance(data, dict):
            raise ForecastParseError(f"{self.name} response is not a JSON object")
        return data
