"""
HolidayRequestValidator: input checks for the three holiday operations.

Checks never fail fast: every problem found in a request is collected into
one list and raised once as ValidationFailed, messages joined with ", ".

Checks:
  1. Country code syntax  : non-empty, 2 characters, ISO 3166-1 alpha-2
  2. Country support      : code is in the upstream available-country set
  3. Year                 : integer within [min_supported_year, max_supported_year]
  4. Holiday count        : optional; must not exceed max_holiday_count
  5. Shared-holiday codes : exactly two distinct codes
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

import pycountry

from config.settings import Settings
from data.nager_client import NagerDateClient
from models.domain import ValidationFailed

logger = logging.getLogger("holidays.services.validator")

ISO_ALPHA2_CODES: frozenset[str] = frozenset(c.alpha_2.upper() for c in pycountry.countries)

_INT_RE = re.compile(r"[+-]?\d{1,10}")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


def parse_int(raw: object) -> Optional[int]:
    """Strict 32-bit integer parse: optional sign and digits only. Anything else → None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if raw is None or not _INT_RE.fullmatch(str(raw)):
        return None
    value = int(str(raw))
    return value if _INT_MIN <= value <= _INT_MAX else None


def _quoted(codes: Iterable[str]) -> str:
    return ", ".join(f"'{code}'" for code in codes)


def is_iso_alpha2(code: Optional[str]) -> bool:
    return bool(code) and len(code) == 2 and code.upper() in ISO_ALPHA2_CODES


class HolidayRequestValidator:
    """
    Validates request inputs before any holiday data is fetched.

    The supported-country check reads NagerDateClient.get_available_countries(),
    which is served from the shared cache after the first request.
    """

    def __init__(self, client: NagerDateClient, settings: Settings) -> None:
        self._client   = client
        self._settings = settings

    # ── Entry points ──────────────────────────────────────────────────────

    def validate_for_recent_holidays(self, country_codes: set[str], holiday_count: Optional[str]) -> None:
        errors: list[str] = []
        self._check_holiday_count(holiday_count, errors)
        self._check_country_codes(country_codes, errors)
        self._check_countries_supported(country_codes, errors)
        self._raise_if_errors(errors)

    def validate_for_year_and_codes(self, year: Optional[str], country_codes: set[str]) -> None:
        errors: list[str] = []
        self._check_country_codes(country_codes, errors)
        self._check_countries_supported(country_codes, errors)
        self._check_year(year, errors)
        self._raise_if_errors(errors)

    def validate_for_shared_holidays(self, year: Optional[str], country_codes: set[str]) -> None:
        errors: list[str] = []
        if len(country_codes) != 2:
            errors.append(
                f"both input country code '{''.join(sorted(country_codes))}' are same or only one "
                "country code given, two different codes must be provided for shared holidays"
            )
        self._check_country_codes(country_codes, errors)
        self._check_countries_supported(country_codes, errors)
        self._check_year(year, errors)
        self._raise_if_errors(errors)

    # ── Individual checks ─────────────────────────────────────────────────

    def _check_country_codes(self, country_codes: set[str], errors: list[str]) -> None:
        invalid = sorted(
            (code or "").upper()
            for code in country_codes
            if not is_iso_alpha2(code)
        )
        if invalid:
            errors.append(f"non ISO 3166-1 alpha-2 compliant country code(s) {_quoted(invalid)}")

    def _check_countries_supported(self, country_codes: set[str], errors: list[str]) -> None:
        # Syntactically invalid codes were already reported above.
        candidates = {code.upper() for code in country_codes if is_iso_alpha2(code)}
        if not candidates:
            return

        supported = {c.country_code.upper() for c in self._client.get_available_countries()}
        unsupported = sorted(candidates - supported)
        if unsupported:
            errors.append(
                f"holidays for input country code(s) {_quoted(unsupported)} is not supported as of now"
            )

    def _check_year(self, year: Optional[str], errors: list[str]) -> None:
        lo, hi = self._settings.min_supported_year, self._settings.max_supported_year
        if year is None or str(year) == "":
            errors.append(f"empty or null input year, must be between {lo} and {hi} inclusive")
            return

        value = parse_int(year)
        if value is None:
            errors.append(f"year '{year}' is not a valid year, must be a number between {lo} and {hi} inclusive")
        elif not lo <= value <= hi:
            errors.append(f"non-supported year '{year}', must be between {lo} and {hi} inclusive")

    def _check_holiday_count(self, holiday_count: Optional[str], errors: list[str]) -> None:
        # Absent, non-numeric and < 1 fall back to the default in HolidayService.
        value = parse_int(holiday_count)
        if value is not None and value > self._settings.max_holiday_count:
            errors.append(
                f"non-supported numberOfHolidays '{value}', must be between 1 and "
                f"{self._settings.max_holiday_count} inclusive"
            )

    @staticmethod
    def _raise_if_errors(errors: list[str]) -> None:
        if errors:
            message = ", ".join(errors)
            logger.warning(message)
            raise ValidationFailed(message)
