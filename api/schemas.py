"""
Pydantic request/response schemas for the Holiday Planner API.

Fields are snake_case in Python and camelCase on the wire, matching the
upstream Nager.Date payloads. Dates are ISO-8601 calendar dates (YYYY-MM-DD).
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.domain import CountryHolidayCount, Holiday, SharedHoliday


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Holiday schemas ───────────────────────────────────────────────────────────

class HolidayResponse(_CamelModel):
    date: dt.date | None = Field(default=None, examples=["2025-01-01"])
    local_name: str | None = Field(default=None, examples=["Nieuwjaarsdag"])

    @classmethod
    def from_domain(cls, h: Holiday) -> "HolidayResponse":
        return cls(date=h.date, local_name=h.local_name)


class CountryHolidayCountResponse(_CamelModel):
    country_code: str = Field(examples=["NL"])
    holiday_count: int | None = Field(default=None, examples=[10])

    @classmethod
    def from_domain(cls, c: CountryHolidayCount) -> "CountryHolidayCountResponse":
        return cls(country_code=c.country_code, holiday_count=c.holiday_count)


class SharedHolidayResponse(_CamelModel):
    date: dt.date = Field(examples=["2025-01-01"])
    local_name_country1: str | None = Field(default=None, examples=["Nieuwjaarsdag"])
    local_name_country2: str | None = Field(default=None, examples=["Neujahr"])

    @classmethod
    def from_domain(cls, s: SharedHoliday) -> "SharedHolidayResponse":
        return cls(
            date=s.date,
            local_name_country1=s.local_name_country1,
            local_name_country2=s.local_name_country2,
        )


# ── Error schema ──────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    timestamp: str
    status: int
    error: str
    message: str
    path: str

    @classmethod
    def build(cls, status: int, error: str, message: str, path: str) -> "ErrorResponse":
        return cls(
            timestamp=dt.datetime.now(dt.timezone.utc).isoformat(),
            status=status,
            error=error,
            message=message,
            path=path,
        )
