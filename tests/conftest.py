"""Shared test fixtures: settings, fake upstream and the wired service stack."""

from __future__ import annotations

from datetime import date

import httpx
import pytest

from config.settings import Settings
from data.nager_client import NagerDateClient
from helpers import FakeNager, h
from services.cache import HolidayCache
from services.holiday_service import HolidayService
from services.validator import HolidayRequestValidator


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def upstream() -> FakeNager:
    fake = FakeNager()
    fake.holidays[(2025, "NL")] = [
        h("2025-01-01", "Nieuwjaarsdag"),
        h("2025-04-18", "Goede Vrijdag"),
        h("2025-04-21", "Tweede Paasdag"),
        h("2025-04-26", "Koningsdag"),
        h("2025-12-25", "Eerste Kerstdag"),
    ]
    fake.holidays[(2024, "NL")] = [
        h("2024-01-01", "Nieuwjaarsdag"),
        h("2024-12-25", "Eerste Kerstdag"),
        h("2024-12-26", "Tweede Kerstdag"),
    ]
    fake.holidays[(2025, "DE")] = [
        h("2025-01-01", "Neujahr"),
        h("2025-05-01", "Tag der Arbeit"),
        h("2025-10-03", "Tag der Deutschen Einheit"),
        h("2025-12-25", "Erster Weihnachtstag"),
    ]
    return fake


@pytest.fixture()
def cache() -> HolidayCache:
    return HolidayCache()


@pytest.fixture()
def nager(upstream: FakeNager, cache: HolidayCache, settings: Settings):
    client = NagerDateClient(cache, settings, http=httpx.Client(transport=upstream.transport()))
    yield client
    client.close()


@pytest.fixture()
def validator(nager: NagerDateClient, settings: Settings) -> HolidayRequestValidator:
    return HolidayRequestValidator(nager, settings)


@pytest.fixture()
def service(validator: HolidayRequestValidator, nager: NagerDateClient, settings: Settings) -> HolidayService:
    return HolidayService(validator, nager, settings)


@pytest.fixture()
def fixed_today():
    """Clock pinned to 2025-06-01, for tests running the app in a threadpool."""
    return lambda: date(2025, 6, 1)
