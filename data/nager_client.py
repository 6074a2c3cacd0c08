"""
HTTP client for the Nager.Date public holiday API.

Two read-only endpoints are used:
    GET /api/v3/AvailableCountries                       → [{countryCode, name}]
    GET /api/v3/PublicHolidays/{year}/{countryCode}      → [{date, localName, ...}]

Successful responses are cached in a HolidayCache injected at construction.
Failures are surfaced as:
    UpstreamRejected    : upstream answered 4xx (no data for that request)
    UpstreamUnavailable : network failure, timeout, 3xx or 5xx
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from config.settings import Settings
from models.domain import (
    AvailableCountry,
    Holiday,
    UpstreamRejected,
    UpstreamUnavailable,
)
from services.cache import HolidayCache

logger = logging.getLogger("holidays.data.nager")

AVAILABLE_COUNTRIES_KEY = ("available_countries",)


def holidays_key(year: int, country_code: str) -> tuple:
    return ("holidays", year, country_code.upper())


class NagerDateClient:
    """
    Cached, synchronous client for the upstream holiday provider.

    `http` may be supplied (tests pass an httpx.Client on a MockTransport);
    otherwise the client creates and owns its own httpx.Client.
    """

    def __init__(
        self,
        cache: HolidayCache,
        settings: Settings,
        http: httpx.Client | None = None,
    ) -> None:
        self._cache    = cache
        self._settings = settings
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=settings.http_timeout_seconds)

    # ── Public API ────────────────────────────────────────────────────────

    def get_available_countries(self) -> set[AvailableCountry]:
        """Return every country the upstream provider supports (cached)."""
        countries = self._cache.get_or_compute(AVAILABLE_COUNTRIES_KEY, self._load_available_countries)
        return set(countries)

    def fetch_holidays(self, year: int, country_code: str) -> list[Holiday]:
        """Return all public holidays for one country and year (cached)."""
        code = country_code.upper()
        holidays = self._cache.get_or_compute(
            holidays_key(year, code),
            lambda: self._load_holidays(year, code),
        )
        return list(holidays)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # ── Loaders (cache misses) ────────────────────────────────────────────

    def _load_available_countries(self) -> frozenset[AvailableCountry]:
        url = self._settings.available_countries_url
        response = self._get(url)
        if response.is_client_error:
            logger.warning("available countries rejected by upstream status=%s", response.status_code)
            raise UpstreamRejected("No available country found from Nager Date API")

        payload = self._json_list(response)
        countries = frozenset(AvailableCountry.from_payload(item) for item in payload)
        logger.info("loaded %d available countries from upstream", len(countries))
        return countries

    def _load_holidays(self, year: int, code: str) -> tuple[Holiday, ...]:
        url = (
            self._settings.public_holidays_url
            .replace("{year}", str(year))
            .replace("{countryCode}", code)
        )
        response = self._get(url)
        if response.is_client_error:
            logger.warning(
                "holidays rejected by upstream status=%s country=%s year=%s",
                response.status_code, code, year,
            )
            raise UpstreamRejected(f"No holidays found for country: {code} in year: {year}")

        holidays = tuple(Holiday.from_payload(item) for item in self._json_list(response))
        logger.info("loaded %d holidays country=%s year=%s", len(holidays), code, year)
        return holidays

    # ── HTTP helpers ──────────────────────────────────────────────────────

    def _get(self, url: str) -> httpx.Response:
        logger.debug("nager GET %s", url)
        try:
            response = self._http.get(url)
        except httpx.TransportError as exc:
            logger.error("nager GET %s failed (%s: %s)", url, type(exc).__name__, exc)
            raise UpstreamUnavailable(f"I/O error on GET request for \"{url}\": {exc}") from exc

        if response.is_server_error or not (response.is_success or response.is_client_error):
            logger.error("nager GET %s returned status=%s", url, response.status_code)
            raise UpstreamUnavailable(
                f"I/O error on GET request for \"{url}\": upstream returned HTTP {response.status_code}"
            )
        return response

    @staticmethod
    def _json_list(response: httpx.Response) -> list[dict[str, Any]]:
        """Decode a JSON array body. An empty or `null` body is an empty list."""
        if not response.content.strip():
            return []
        data = response.json()
        if data is None:
            return []
        return [item for item in data if isinstance(item, dict)]
