"""
Core domain models for the Holiday Planner API.

These are plain frozen dataclasses shared by the upstream client, the
validator and the holiday service. The HTTP layer converts them to the
pydantic schemas in api/schemas.py.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

logger = logging.getLogger("holidays.models")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _parse_date(raw: Any) -> Optional[date]:
    """Parse an upstream YYYY-MM-DD string. Missing or malformed → None."""
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        logger.warning("ignoring unparseable holiday date %r", raw)
        return None


# ── Upstream values ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Holiday:
    """A public holiday as returned by the upstream provider."""
    date: Optional[date]
    local_name: Optional[str]

    def to_payload(self) -> dict:
        return {
            "date":      self.date.isoformat() if self.date else None,
            "localName": self.local_name,
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "Holiday":
        return cls(
            date=_parse_date(payload.get("date")),
            local_name=payload.get("localName"),
        )


@dataclass(frozen=True)
class AvailableCountry:
    """A country the upstream provider has holiday data for."""
    country_code: str
    name: str

    @classmethod
    def from_payload(cls, payload: dict) -> "AvailableCountry":
        return cls(
            country_code=str(payload.get("countryCode") or ""),
            name=str(payload.get("name") or ""),
        )


# ── Output values ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CountryHolidayCount:
    country_code: str
    holiday_count: Optional[int]

    def to_payload(self) -> dict:
        return {"countryCode": self.country_code, "holidayCount": self.holiday_count}


@dataclass(frozen=True)
class SharedHoliday:
    date: date
    local_name_country1: Optional[str]
    local_name_country2: Optional[str]

    def to_payload(self) -> dict:
        return {
            "date":              self.date.isoformat(),
            "localNameCountry1": self.local_name_country1,
            "localNameCountry2": self.local_name_country2,
        }


# ── Errors ────────────────────────────────────────────────────────────────────

class HolidayApiError(Exception):
    """Base class for every failure the API maps to an HTTP status."""


class ValidationFailed(HolidayApiError):
    """One or more request inputs are invalid. The message lists all of them."""


class UpstreamError(HolidayApiError):
    """The upstream holiday provider could not satisfy a request."""


class UpstreamRejected(UpstreamError):
    """Upstream answered with a 4xx (e.g. no data for that country and year)."""


class UpstreamUnavailable(UpstreamError):
    """Upstream could not be reached, timed out or answered with a 5xx."""
