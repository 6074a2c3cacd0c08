"""
HolidayService: the three holiday views exposed by the API.

    get_last_number_of_holidays     last N holidays up to today, newest first,
                                    topped up from the previous year if needed
    get_non_weekend_holiday_counts  holidays on weekdays per country, most first
    get_shared_holidays             dates both countries observe, oldest first

Every operation validates first, then reads holidays through the cached
NagerDateClient. Errors are never caught here; the API layer maps them.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Callable, Optional

from config.settings import Settings
from data.nager_client import NagerDateClient
from models.domain import CountryHolidayCount, Holiday, SharedHoliday
from services.validator import HolidayRequestValidator, parse_int

logger = logging.getLogger("holidays.services.holiday")


def newest_first(holidays: list[Holiday]) -> list[Holiday]:
    """Sort by date descending; undated holidays go last, in input order."""
    return sorted(holidays, key=lambda h: (h.date is not None, h.date or date.min), reverse=True)


def rank_by_count(counts: list[CountryHolidayCount]) -> list[CountryHolidayCount]:
    """Highest count first; ties keep input order; missing counts go last."""
    return sorted(counts, key=lambda c: (c.holiday_count is None, -(c.holiday_count or 0)))


def _to_json(items: list) -> str:
    return json.dumps([item.to_payload() for item in items], ensure_ascii=False)


class HolidayService:

    def __init__(
        self,
        validator: HolidayRequestValidator,
        client: NagerDateClient,
        settings: Settings,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._validator = validator
        self._client    = client
        self._settings  = settings
        self._today_fn  = today

    def _today(self) -> date:
        return self._today_fn() if self._today_fn else date.today()

    # ── Last N holidays ───────────────────────────────────────────────────

    def resolve_holiday_count(self, raw_count: Optional[str]) -> int:
        """Parse numberOfHolidays; absent, non-numeric or < 1 → configured default."""
        value = parse_int(raw_count)
        if value is None or value < 1:
            if raw_count not in (None, ""):
                logger.warning(
                    "unusable numberOfHolidays %r, using default %d",
                    raw_count, self._settings.default_holiday_count,
                )
            return self._settings.default_holiday_count
        return value

    def get_last_number_of_holidays(self, country_code: str, raw_count: Optional[str] = None) -> list[Holiday]:
        code = country_code.upper()
        self._validator.validate_for_recent_holidays({code}, raw_count)
        wanted = self.resolve_holiday_count(raw_count)

        today = self._today()
        result = self._latest_up_to(self._client.fetch_holidays(today.year, code), today, wanted)

        if len(result) < wanted:
            previous_year = self._client.fetch_holidays(today.year - 1, code)
            result.extend(self._latest_up_to(previous_year, today, wanted - len(result)))

        result = result[:wanted]
        logger.info("last %d holidays for country code '%s' are: %s", wanted, code, _to_json(result))
        return result

    @staticmethod
    def _latest_up_to(holidays: list[Holiday], today: date, limit: int) -> list[Holiday]:
        past = [h for h in holidays if h.date is not None and h.date <= today]
        return newest_first(past)[:limit]

    # ── Non-weekend counts ────────────────────────────────────────────────

    def get_non_weekend_holiday_counts(self, year: str, country_codes_csv: str) -> list[CountryHolidayCount]:
        codes = {code.strip().upper() for code in (country_codes_csv or "").split(",")}
        self._validator.validate_for_year_and_codes(year, codes)

        last_weekday = self._settings.last_weekday_iso
        counts: list[CountryHolidayCount] = []
        for code in sorted(codes):
            holidays = self._client.fetch_holidays(int(year), code)
            weekday_count = sum(
                1 for h in holidays
                if h.date is not None and h.date.isoweekday() <= last_weekday
            )
            counts.append(CountryHolidayCount(country_code=code, holiday_count=weekday_count))

        counts = rank_by_count(counts)
        logger.info(
            "non weekend holiday counts for country codes '%s' are: %s",
            ",".join(sorted(codes)), _to_json(counts),
        )
        return counts

    # ── Shared holidays ───────────────────────────────────────────────────

    def get_shared_holidays(self, year: str, country_code1: str, country_code2: str) -> list[SharedHoliday]:
        code1, code2 = country_code1.upper(), country_code2.upper()
        self._validator.validate_for_shared_holidays(year, {code1, code2})

        holidays1 = self._client.fetch_holidays(int(year), code1)
        holidays2 = self._client.fetch_holidays(int(year), code2)

        names_by_date: dict[date, Optional[str]] = {}
        for h in holidays1:
            if h.date is not None:
                names_by_date.setdefault(h.date, h.local_name)

        shared = [
            SharedHoliday(
                date=h.date,
                local_name_country1=names_by_date[h.date],
                local_name_country2=h.local_name,
            )
            for h in holidays2
            if h.date is not None and h.date in names_by_date
        ]
        shared.sort(key=lambda s: s.date)
        logger.info(
            "shared holidays for country codes '%s' and '%s' are: %s",
            code1, code2, _to_json(shared),
        )
        return shared
