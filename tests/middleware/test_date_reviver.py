"""Tests for date-reviving JSON bodies."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Request
from fastapi.testclient import TestClient
import pytest

from flight_status.main import create_app
from flight_status.middleware.date_reviver import revive_date, revive_dates
from flight_status.startup.config_schema import ServiceSettings


def describe(value: Any) -> Any:
    """Replace leaves with their type names so the endpoint can report them."""
    if isinstance(value, dict):
        return {key: describe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [describe(item) for item in value]
    return type(value).__name__


class TestReviveDates:
    def test_matching_string_becomes_date(self) -> None:
        assert revive_date("24-12-2023") == date(2023, 12, 24)

    @pytest.mark.parametrize(
        "value",
        [
            "2023-12-24",
            "2023-12-24T10:30:00Z",
            "24/12/2023",
            "24-12-23",
            "departs 24-12-2023",
            "24-12-2023 10:30",
            "AF1234",
            "",
        ],
    )
    def test_other_strings_untouched(self, value: str) -> None:
        assert revive_date(value) == value

    def test_impossible_calendar_day_untouched(self) -> None:
        assert revive_date("31-02-2023") == "31-02-2023"

    def test_nested_objects_and_arrays(self) -> None:
        body = {
            "flight": "AF1234",
            "schedule": {
                "departure": "01-03-2024",
                "legs": [{"date": "02-03-2024", "note": "on time"}, "03-03-2024"],
            },
            "updated": "2024-03-01T08:00:00+00:00",
            "delay": 15,
            "cancelled": False,
            "gate": None,
        }

        assert revive_dates(body) == {
            "flight": "AF1234",
            "schedule": {
                "departure": date(2024, 3, 1),
                "legs": [{"date": date(2024, 3, 2), "note": "on time"}, date(2024, 3, 3)],
            },
            "updated": "2024-03-01T08:00:00+00:00",
            "delay": 15,
            "cancelled": False,
            "gate": None,
        }

    def test_top_level_array(self) -> None:
        assert revive_dates(["05-06-2024", "free text"]) == [date(2024, 6, 5), "free text"]


class TestDateRevivingMiddleware:
    def setup_method(self) -> None:
        router = APIRouter()

        @router.post("/echo")
        async def echo(request: Request) -> Any:
            return describe(getattr(request.state, "revived_body", None))

        @router.get("/ping")
        async def ping() -> str:
            return "pong"

        self.client = TestClient(
            create_app(ServiceSettings(MAX_REQUEST_SIZE=256), api_router=router)
        )

    def test_body_is_revived_for_handlers(self) -> None:
        response = self.client.post(
            "/api/echo",
            json={"departure": "24-12-2023", "legs": [{"arrival": "25-12-2023"}], "flight": "AF1"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "departure": "date",
            "legs": [{"arrival": "date"}],
            "flight": "str",
        }

    def test_malformed_json_rejected(self) -> None:
        response = self.client.post(
            "/api/echo",
            content=b'{"departure": ',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400

    def test_oversized_body_rejected(self) -> None:
        response = self.client.post("/api/echo", json={"notes": "x" * 1024})

        assert response.status_code == 413

    def test_non_json_body_passes_through(self) -> None:
        response = self.client.post(
            "/api/echo", content=b"24-12-2023", headers={"content-type": "text/plain"}
        )

        assert response.status_code == 200
        assert response.json() == "NoneType"

    def test_get_requests_untouched(self) -> None:
        assert self.client.get("/api/ping").json() == "pong"
