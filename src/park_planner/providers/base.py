"""Base weather provider abstraction.

This module defines the interface for daily weather data providers and the
canonical format they translate their data into.

## Canonical Data Format

Providers return `DailyObservation` records (see
`park_planner.models.weather`), one per calendar date, in chronological
order. Deriving display values, fire danger and alerts happens later and
never in a provider.

### Canonical Units
- Temperature: Celsius (°C)
- Wind speed: kilometres per hour (km/h)
- Precipitation: millimetres (mm) per day
- Probability / humidity: percentage (0-100)
- Weather: WMO 4677 code

## Supported Providers

### Open-Meteo forecast (api.open-meteo.com)
- Endpoint: https://api.open-meteo.com/v1/forecast
- Auth: None
- Range: up to 16 days ahead

### Open-Meteo archive (archive-api.open-meteo.com)
- Endpoint: https://archive-api.open-meteo.com/v1/archive
- Auth: None
- Range: 1940 to a few days ago
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from park_planner.models.location import Coordinates
from park_planner.models.weather import DailyObservation

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for weather provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """Raised when provider rate limit is exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class HistoricalDataUnavailableError(ProviderError):
    """Raised when no past year could be fetched for a historical average."""

    def __init__(self, provider: str):
        super().__init__(
            "Unable to load historical weather data. Please try again later.",
            provider=provider,
        )


class WeatherProvider(ABC):
    """Abstract base class for daily weather data providers.

    Attributes:
        name: Provider name used in errors and logs
        base_url: Endpoint URL for the API

    Example:
        ```python
        async with OpenMeteoForecastProvider() as provider:
            days = await provider.get_daily(
                Coordinates(latitude=51.4968, longitude=-115.9281),
                start_date=date(2026, 7, 1),
                end_date=date(2026, 7, 4),
            )
        ```
    """

    name: str
    base_url: str

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 15.0,
        retry_attempts: int = 1,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            base_url: Override the default endpoint
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            retry_attempts: Attempts per request on transport errors
            client: Shared HTTP client; the provider will not close it
        """
        if base_url:
            self.base_url = base_url
        self.user_agent = user_agent or "park-planner/0.1.0"
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Fetch data from the API, retrying transport errors.

        Args:
            url: Full URL to fetch
            params: Query parameters
            headers: Additional headers

        Returns:
            HTTP response

        Raises:
            ProviderError: If request fails after retries
            RateLimitError: If rate limit is exceeded
        """
        client = self._get_client()
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        logger.debug(f"GET {url} params={params}")

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(url, params=params, headers=request_headers)
        except httpx.HTTPError as e:
            raise ProviderError(
                f"Request to {self.name} failed: {e!r}",
                provider=self.name,
            ) from e

        # Handle rate limiting
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                status_code=429,
            )

        # Handle other errors
        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    @abstractmethod
    async def get_daily(
        self,
        coordinates: Coordinates,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[DailyObservation]:
        """Get daily weather for a location.

        Args:
            coordinates: Location coordinates
            start_date: First day to fetch (optional)
            end_date: Last day to fetch, inclusive (optional)

        Returns:
            Daily observations in canonical format, oldest first

        Raises:
            ProviderError: If data cannot be retrieved
        """
        pass

    @abstractmethod
    def _translate_response(self, response_data: dict[str, Any]) -> list[DailyObservation]:
        """Translate provider-specific response to canonical format.

        Args:
            response_data: Raw JSON response from provider

        Returns:
            Daily observations in canonical format
        """
        pass
