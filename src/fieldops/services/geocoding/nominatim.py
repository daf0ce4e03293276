"""HTTP client for the OpenStreetMap Nominatim geocoding service."""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ...config import settings
from ...errors import GeocodingError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GeocodeResult:
    latitude: float
    longitude: float
    cached: bool = False


class NominatimGeocoder:
    """Address to coordinate lookups with caching and request throttling.

    Nominatim's usage policy allows at most one request per second and
    requires an identifying User-Agent.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        min_interval_seconds: float | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        cache_size: int | None = None,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = (base_url or settings.geocoder_base_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.min_interval_seconds = (
            min_interval_seconds if min_interval_seconds is not None else settings.geocoder_min_interval_seconds
        )
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geocoder_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocoder_backoff_seconds
        self._client = client
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_request: Optional[float] = None
        self.cache_size = cache_size if cache_size is not None else settings.geocoder_cache_size
        self._cache: OrderedDict[str, tuple[float, float]] = OrderedDict()

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"User-Agent": self.user_agent},
        )

    def _throttle(self) -> None:
        with self._lock:
            if self._last_request is not None:
                wait = self.min_interval_seconds - (self._clock() - self._last_request)
                if wait > 0:
                    self._sleep(wait)
            self._last_request = self._clock()

    def _search(self, address: str) -> list:
        params = {"format": "json", "q": address, "limit": 1}
        url = f"{self.base_url}/search"
        client = self._client or self._get_client()
        try:
            attempt = 0
            while True:
                self._throttle()
                try:
                    response = client.get(url, params=params, headers={"User-Agent": self.user_agent})
                    response.raise_for_status()
                    payload = response.json()
                    if not isinstance(payload, list):
                        raise GeocodingError(f"Unexpected geocoder response for '{address}'")
                    return payload
                except (httpx.TimeoutException, httpx.NetworkError, httpx.HTTPStatusError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(f"Geocoding service at {self.base_url} failed: {e}") from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Geocoder error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    self._sleep(wait_time)
        finally:
            if self._client is None:
                client.close()

    def _remember(self, key: str, coordinates: tuple[float, float]) -> None:
        if self.cache_size <= 0:
            return
        self._cache[key] = coordinates
        self._cache.move_to_end(key)
        # Least recently used entries go first.
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)

    def geocode(self, address: str) -> Optional[GeocodeResult]:
        """Coordinates for an address, or None when the service finds no match."""
        normalized = address.strip().lower()
        if not normalized:
            return None

        cached = self._cache.get(normalized)
        if cached is not None:
            self._cache.move_to_end(normalized)
            return GeocodeResult(cached[0], cached[1], cached=True)

        matches = self._search(address.strip())
        if not matches:
            return None

        first = matches[0]
        try:
            latitude = float(first["lat"])
            longitude = float(first["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(f"Invalid coordinates returned for '{address}'") from exc
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise GeocodingError(f"Invalid coordinates returned for '{address}'")

        self._remember(normalized, (latitude, longitude))
        return GeocodeResult(latitude, longitude, cached=False)
