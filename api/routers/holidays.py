"""
Holidays router.

GET /api/holidays/last-number-of-holidays/{countryCode}?numberOfHolidays=3
GET /api/holidays/non-weekend/{year}?countryCodes=NL,DE
GET /api/holidays/shared/{year}/{countryCode1}/{countryCode2}

Handlers are plain `def` so FastAPI runs each request in its threadpool;
upstream calls inside HolidayService block that worker only.
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request

from api.schemas import (
    CountryHolidayCountResponse,
    ErrorResponse,
    HolidayResponse,
    SharedHolidayResponse,
)

router = APIRouter(prefix="/holidays", tags=["holidays"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid year, country code or holiday count"},
    500: {"model": ErrorResponse, "description": "Upstream or server error"},
}


@router.get(
    "/last-number-of-holidays/{country_code}",
    response_model=list[HolidayResponse],
    responses=_ERRORS,
    summary="Get the last celebrated holidays for a country",
)
def get_last_number_of_holidays(
    request: Request,
    country_code: str = Path(description="ISO 3166-1 alpha-2 country code, case insensitive", examples=["NL"]),
    number_of_holidays: str | None = Query(
        default=None,
        alias="numberOfHolidays",
        description="Number of holidays to return (default 3, max 12)",
        examples=["3"],
    ),
) -> list[HolidayResponse]:
    """Most recent holidays up to today, newest first, including date and local name."""
    svc = request.app.state.holiday_service
    holidays = svc.get_last_number_of_holidays(country_code, number_of_holidays)
    return [HolidayResponse.from_domain(h) for h in holidays]


@router.get(
    "/non-weekend/{year}",
    response_model=list[CountryHolidayCountResponse],
    responses=_ERRORS,
    summary="Count non-weekend holidays per country",
)
def get_non_weekend_holiday_counts(
    request: Request,
    year: str = Path(description="Year, 1975 to 2075 inclusive", examples=["2025"]),
    country_codes: str = Query(
        alias="countryCodes",
        description="Comma separated ISO 3166-1 alpha-2 country codes, case insensitive",
        examples=["NL,DE"],
    ),
) -> list[CountryHolidayCountResponse]:
    """Public holidays not falling on a weekend, per country, highest count first."""
    svc = request.app.state.holiday_service
    counts = svc.get_non_weekend_holiday_counts(year, country_codes)
    return [CountryHolidayCountResponse.from_domain(c) for c in counts]


@router.get(
    "/shared/{year}/{country_code1}/{country_code2}",
    response_model=list[SharedHolidayResponse],
    responses=_ERRORS,
    summary="Get holidays shared by two countries",
)
def get_shared_holidays(
    request: Request,
    year: str = Path(description="Year, 1975 to 2075 inclusive", examples=["2025"]),
    country_code1: str = Path(description="First ISO 3166-1 alpha-2 country code", examples=["NL"]),
    country_code2: str = Path(description="Second ISO 3166-1 alpha-2 country code", examples=["DE"]),
) -> list[SharedHolidayResponse]:
    """Dates celebrated in both countries, oldest first, with each country's local name."""
    svc = request.app.state.holiday_service
    shared = svc.get_shared_holidays(year, country_code1, country_code2)
    return [SharedHolidayResponse.from_domain(s) for s in shared]
