"""Fake Nager.Date upstream served through httpx.MockTransport."""

from __future__ import annotations

from collections import Counter

import httpx

DEFAULT_COUNTRIES = [
    {"countryCode": "NL", "name": "Netherlands"},
    {"countryCode": "DE", "name": "Germany"},
    {"countryCode": "FR", "name": "France"},
    {"countryCode": "GB", "name": "United Kingdom"},
]


def h(day: str | None, name: str) -> dict:
    """Upstream holiday payload."""
    return {"date": day, "localName": name, "name": name, "countryCode": "XX"}


class FakeNager:
    """
    In-memory stand-in for the Nager.Date API.

    holidays:  {(year, code): list payload | None}   None → JSON `null` body
    statuses:  {(year, code): int}                   forced HTTP status
    countries: list payload | None
    Unknown (year, code) pairs answer 404, like the real service.
    """

    def __init__(self) -> None:
        self.countries: list[dict] | None = list(DEFAULT_COUNTRIES)
        self.countries_status = 200
        self.holidays: dict[tuple[int, str], list[dict] | None] = {}
        self.statuses: dict[tuple[int, str], int] = {}
        self.offline = False
        self.calls: Counter = Counter()

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)

        path = request.url.path
        if path.endswith("/AvailableCountries"):
            self.calls["countries"] += 1
            if self.countries_status != 200:
                return httpx.Response(self.countries_status, text="error")
            return httpx.Response(200, json=self.countries)

        year_str, code = path.rstrip("/").split("/")[-2:]
        key = (int(year_str), code)
        self.calls[key] += 1
        if key in self.statuses:
            return httpx.Response(self.statuses[key], text="error")
        if key not in self.holidays:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, json=self.holidays[key])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
