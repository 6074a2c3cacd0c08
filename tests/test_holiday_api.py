"""
Holiday API: HTTP integration tests.

Groups:
  A. Last N holidays
  B. Non-weekend counts
  C. Shared holidays
  D. Error mapping
  E. Health and docs
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.app import create_app
from models.domain import UpstreamUnavailable
from services.holiday_service import HolidayService

BASE = "/api/holidays"


class _FailingService:
    """Stands in for HolidayService to drive the error handlers."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def get_last_number_of_holidays(self, *args, **kwargs):
        raise self._exc

    get_non_weekend_holiday_counts = get_last_number_of_holidays
    get_shared_holidays = get_last_number_of_holidays


def _client(app) -> AsyncClient:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def client(validator, nager, settings, fixed_today):
    svc = HolidayService(validator, nager, settings, today=fixed_today)
    async with _client(create_app(svc, settings)) as c:
        yield c


@pytest_asyncio.fixture
async def failing_client(settings):
    async def _make(exc: Exception) -> AsyncClient:
        return _client(create_app(_FailingService(exc), settings))
    return _make


# ── A. Last N holidays ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_last_holidays_default_count(client):
    resp = await client.get(f"{BASE}/last-number-of-holidays/NL")
    assert resp.status_code == 200
    assert resp.json() == [
        {"date": "2025-04-26", "localName": "Koningsdag"},
        {"date": "2025-04-21", "localName": "Tweede Paasdag"},
        {"date": "2025-04-18", "localName": "Goede Vrijdag"},
    ]


@pytest.mark.asyncio
async def test_last_holidays_explicit_count(client):
    resp = await client.get(f"{BASE}/last-number-of-holidays/nl", params={"numberOfHolidays": "5"})
    assert resp.status_code == 200
    dates = [item["date"] for item in resp.json()]
    assert dates == ["2025-04-26", "2025-04-21", "2025-04-18", "2025-01-01", "2024-12-26"]


@pytest.mark.asyncio
async def test_last_holidays_non_numeric_count_uses_default(client):
    resp = await client.get(f"{BASE}/last-number-of-holidays/NL", params={"numberOfHolidays": "abc"})
    assert resp.status_code == 200
    assert len(resp.json()) == 3


@pytest.mark.asyncio
async def test_last_holidays_count_too_large(client):
    resp = await client.get(f"{BASE}/last-number-of-holidays/NL", params={"numberOfHolidays": "20"})
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "non-supported numberOfHolidays '20', must be between 1 and 12 inclusive"
    )


# ── B. Non-weekend counts ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_non_weekend_counts(client):
    resp = await client.get(f"{BASE}/non-weekend/2025", params={"countryCodes": "NL,DE"})
    assert resp.status_code == 200
    assert resp.json() == [
        {"countryCode": "DE", "holidayCount": 4},
        {"countryCode": "NL", "holidayCount": 4},
    ]


@pytest.mark.asyncio
async def test_non_weekend_missing_country_codes(client):
    resp = await client.get(f"{BASE}/non-weekend/2025")
    assert resp.status_code == 400
    assert "countryCodes" in resp.json()["message"]


@pytest.mark.asyncio
async def test_non_weekend_invalid_year(client):
    resp = await client.get(f"{BASE}/non-weekend/invalidYear", params={"countryCodes": "NL"})
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "year 'invalidYear' is not a valid year, must be a number between 1975 and 2075 inclusive"
    )


@pytest.mark.asyncio
async def test_non_weekend_unsupported_and_invalid_codes(client):
    resp = await client.get(f"{BASE}/non-weekend/2025", params={"countryCodes": "XYZ,US"})
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "non ISO 3166-1 alpha-2 compliant country code(s) 'XYZ', "
        "holidays for input country code(s) 'US' is not supported as of now"
    )


@pytest.mark.asyncio
async def test_non_weekend_overlong_year_is_400(client):
    resp = await client.get(f"{BASE}/non-weekend/{'9' * 5000}", params={"countryCodes": "NL"})
    assert resp.status_code == 400
    assert "is not a valid year" in resp.json()["message"]


# ── C. Shared holidays ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_shared_holidays(client):
    resp = await client.get(f"{BASE}/shared/2025/NL/DE")
    assert resp.status_code == 200
    assert resp.json() == [
        {"date": "2025-01-01", "localNameCountry1": "Nieuwjaarsdag", "localNameCountry2": "Neujahr"},
        {
            "date": "2025-12-25",
            "localNameCountry1": "Eerste Kerstdag",
            "localNameCountry2": "Erster Weihnachtstag",
        },
    ]


@pytest.mark.asyncio
async def test_shared_holidays_same_country(client):
    resp = await client.get(f"{BASE}/shared/2025/NL/nl")
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("both input country code 'NL' are same")


@pytest.mark.asyncio
async def test_shared_holidays_upstream_has_no_data(client):
    resp = await client.get(f"{BASE}/shared/2025/NL/FR")
    assert resp.status_code == 400
    assert resp.json()["message"] == "No holidays found for country: FR in year: 2025"


# ── D. Error mapping ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_error_body_shape(client):
    resp = await client.get(f"{BASE}/shared/1800/NL/DE")
    assert resp.status_code == 400
    body = resp.json()
    assert set(body) == {"timestamp", "status", "error", "message", "path"}
    assert body["status"] == 400
    assert body["error"] == "Bad Request"
    assert body["path"] == f"{BASE}/shared/1800/NL/DE"
    assert body["timestamp"]


@pytest.mark.asyncio
async def test_upstream_unreachable_is_500_with_hint(client, upstream):
    upstream.offline = True
    resp = await client.get(f"{BASE}/last-number-of-holidays/NL")
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal Server Error"
    assert body["message"].startswith("I/O error on GET request")
    assert "north bound Nager Date service might be down" in body["message"]
    assert body["message"].endswith("https://date.nager.at/api/v3/AvailableCountries")


@pytest.mark.asyncio
async def test_unavailable_from_service_is_500(failing_client):
    async with await failing_client(UpstreamUnavailable("I/O error: boom")) as c:
        resp = await c.get(f"{BASE}/shared/2025/NL/DE")
    assert resp.status_code == 500
    assert resp.json()["message"].startswith("I/O error: boom - possible network issue")


@pytest.mark.asyncio
async def test_unexpected_error_is_500(failing_client):
    async with await failing_client(RuntimeError("boom")) as c:
        resp = await c.get(f"{BASE}/non-weekend/2025", params={"countryCodes": "NL"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == 500
    assert body["message"] == "boom"


@pytest.mark.asyncio
async def test_unknown_route_is_404(client):
    resp = await client.get("/api/holidays/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Not Found"
    assert body["message"] == "No resource found for /api/holidays/nope"


# ── E. Health and docs ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/management/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "UP"}


@pytest.mark.asyncio
async def test_openapi_lists_holiday_routes(client):
    resp = await client.get("/openapi.json")
    assert resp.status_code == 200
    doc = resp.json()
    assert doc["info"]["title"] == "Holiday Information API"
    assert f"{BASE}/shared/{{year}}/{{country_code1}}/{{country_code2}}" in doc["paths"]
