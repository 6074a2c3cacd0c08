"""
Global configuration for the Holiday Planner API.

All values are read from environment variables (prefixed HOLIDAYS_).
Defaults match the public Nager.Date service; override via .env or the environment.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HOLIDAYS_", env_file=".env", extra="ignore")

    # ── Holiday count bounds (last-N endpoint) ────────────────────────────
    default_holiday_count: int = 3        # used when numberOfHolidays is absent, < 1 or not a number
    max_holiday_count: int = 12

    # ── Supported year range (inclusive) ──────────────────────────────────
    min_supported_year: int = 1975
    max_supported_year: int = 2075

    # ── Upstream (Nager.Date) ─────────────────────────────────────────────
    available_countries_url: str = "https://date.nager.at/api/v3/AvailableCountries"
    public_holidays_url: str = "https://date.nager.at/api/v3/PublicHolidays/{year}/{countryCode}"
    http_timeout_seconds: float = 10.0

    # ── Cache ─────────────────────────────────────────────────────────────
    cache_ttl_seconds: float = 0          # 0 = keep entries for the process lifetime

    # ── Non-weekend counting ──────────────────────────────────────────────
    # False: Monday to Friday are weekdays. True: Monday to Saturday.
    count_saturday_as_weekday: bool = False

    # ── Server ────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_bounds(self) -> "Settings":
        if self.min_supported_year > self.max_supported_year:
            raise ValueError("min_supported_year must not exceed max_supported_year")
        if not 1 <= self.default_holiday_count <= self.max_holiday_count:
            raise ValueError("default_holiday_count must be between 1 and max_holiday_count")
        return self

    @property
    def last_weekday_iso(self) -> int:
        """Highest ISO weekday (Mon=1) that still counts as a non-weekend day."""
        return 6 if self.count_saturday_as_weekday else 5


settings = Settings()
