"""Resilient Geocoder — resolves addresses via the Google Geocoding API with retry and error mapping.

Invariants:
    - ZERO_RESULTS: immediate GeocodeError(reason="no_match"), no retry (422 to the client)
    - Transient failures (5xx, connection, OVER_QUERY_LIMIT, UNKNOWN_ERROR): retried with
      exponential backoff, max_retries times
    - Everything else (REQUEST_DENIED, INVALID_REQUEST, 4xx): immediate GeocodeError
    - All failures mapped to GeocodeError (core/errors.py): httpx exceptions never escape

Design Decisions:
    - httpx.AsyncClient injected: lifespan owns it, tests pass a MockTransport-backed client
    - ±25% jitter on backoff: prevents thundering herd on shared quota
"""

import asyncio
import logging
import random

import httpx

from lessonmap.core.domain_types import Coordinates
from lessonmap.core.errors import GeocodeError

logger = logging.getLogger(__name__)

_TRANSIENT_STATUSES = {"OVER_QUERY_LIMIT", "UNKNOWN_ERROR"}


class _RetryableGeocodeFailure(Exception):
    """Internal marker: a failure worth another attempt."""


class GoogleGeocoder:
    """Geocoder protocol implementation backed by the Google Geocoding API."""

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 8_000,
    ):
        self.api_key = api_key
        self.client = client
        self.base_url = base_url
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def resolve(self, address: str) -> Coordinates:
        """Resolve an address to coordinates, retrying transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                return await self._lookup(address)
            except _RetryableGeocodeFailure as e:
                if attempt >= self.max_retries:
                    raise GeocodeError(
                        "Geocoding service unavailable, please try again later.",
                        "unavailable",
                    )
                delay = self._backoff(attempt)
                logger.warning(
                    f"Transient geocoding error, retry after {delay}ms: {e}",
                    extra={"attempt": attempt + 1},
                )
                await asyncio.sleep(delay / 1000)

    async def _lookup(self, address: str) -> Coordinates:
        try:
            response = await self.client.get(
                self.base_url,
                params={"address": address, "key": self.api_key},
            )
        except httpx.TimeoutException as e:
            raise _RetryableGeocodeFailure(f"timeout: {e}")
        except httpx.TransportError as e:
            raise _RetryableGeocodeFailure(f"connection error: {e}")

        if response.status_code >= 500:
            raise _RetryableGeocodeFailure(f"HTTP {response.status_code}")
        if response.status_code >= 400:
            logger.error(f"Geocoding rejected with HTTP {response.status_code}")
            raise GeocodeError(
                "Geocoding request was rejected.", "client_error",
            )

        try:
            data = response.json()
        except ValueError:
            raise _RetryableGeocodeFailure("malformed response body")
        return self._parse(data)

    def _parse(self, data: dict) -> Coordinates:
        status = data.get("status")
        if status == "ZERO_RESULTS" or (status == "OK" and not data.get("results")):
            raise GeocodeError(
                "Could not find location for the specified address.",
                "no_match",
            )
        if status in _TRANSIENT_STATUSES:
            raise _RetryableGeocodeFailure(f"provider status {status}")
        if status != "OK":
            logger.error(
                f"Geocoding failed with status {status}: "
                f"{data.get('error_message', '')}",
            )
            raise GeocodeError(
                "Geocoding request was rejected.", "client_error",
            )
        location = data["results"][0]["geometry"]["location"]
        return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311
