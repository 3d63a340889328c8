from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from server.app import app, get_cache, get_lunar

GAYA_QS = "lat=24.7914&lon=85.0002"


@pytest.fixture
def client(cache):
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_lunar] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_and_health(client):
    assert "Uposatha Calendar API" in client.get("/").text
    assert client.get("/health").json() == {"ok": True}


def test_uposatha_status(client):
    body = client.get(f"/uposatha?day=2026-05-01&{GAYA_QS}").json()
    assert body["is_uposatha"] is True
    assert body["is_full_moon"] is True
    assert body["masa"]["name"] == "Vaishakha"
    assert body["tithi_number"] == 15
    assert body["timezone"] == "Asia/Kolkata"
    assert body["sunrise_local"] == "11:30 AM"
    assert body["sunset_local"] == "11:30 PM"
    assert body["date_label"] == "1  Shukravara"


def test_uposatha_month(client):
    body = client.get(f"/uposatha/month?year=2026&month=1&{GAYA_QS}").json()
    assert [d["date"] for d in body][:2] == ["2026-01-08", "2026-01-14"]


def test_festivals_for_day(client):
    body = client.get(f"/festivals?day=2026-05-01&{GAYA_QS}").json()
    assert body[0]["name"] == "Vesak"
    assert body[0]["tradition"] == "Theravada"
    assert body[0]["events"]


def test_festivals_by_tradition(client):
    body = client.get(f"/festivals?day=2026-02-18&tradition=Vajrayana&{GAYA_QS}").json()
    assert [f["name"] for f in body] == ["Losar"]
    assert client.get("/festivals?day=2026-02-18&tradition=Shinto").status_code == 400


def test_invalid_coordinates_rejected(client):
    assert client.get("/festivals?lat=123&lon=0").status_code == 422


def test_upcoming(client):
    body = client.get(f"/festivals/upcoming?start=2026-01-01&days=60&{GAYA_QS}").json()
    assert {"festival", "date", "days_remaining"} <= set(body[0])
    losar = [m for m in body if m["festival"]["id"] == "losar"]
    assert losar[0]["date"] == "2026-02-18"
    assert losar[0]["days_remaining"] == 48


def test_definitions(client):
    body = client.get("/festivals/definitions").json()
    assert {"vesak", "losar", "bodhi_day"} <= {f["id"] for f in body}


def test_horas_timeline_grahas(client):
    assert len(client.get(f"/horas?day=2026-01-04&{GAYA_QS}").json()) == 24
    timeline = client.get(f"/timeline?day=2026-01-04&{GAYA_QS}").json()
    assert len(timeline["timeline"]["rows"]) == 5
    assert set(timeline["markers"]) == {"sunrise", "sunset", "moonrise", "moonset"}
    assert len(client.get(f"/grahas?day=2026-01-04&{GAYA_QS}").json()) == 9


def test_ics_download(client):
    r = client.get(f"/ics?year=2026&tradition=vajrayana&no_uposatha=true&{GAYA_QS}")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/calendar")
    assert 'filename="uposatha-calendar-2026.ics"' in r.headers["content-disposition"]
    assert b"SUMMARY:Losar" in r.content
    assert client.get(f"/ics?year=2026&year_to=2025&{GAYA_QS}").status_code == 400


def test_timezones(client):
    zones = client.get("/timezones").json()
    assert "Asia/Kolkata" in zones and "UTC" in zones


def test_lunar_calendar_loaded_once_at_startup(cache):
    app.dependency_overrides[get_cache] = lambda: cache
    marker = MagicMock()
    marker.get_lunar.return_value = None
    try:
        with patch("server.app.LunarCalendar.load", return_value=marker) as load:
            with TestClient(app) as client:
                assert app.state.lunar is marker
                client.get(f"/festivals?day=2026-05-01&{GAYA_QS}")
                client.get(f"/festivals?day=2026-02-18&{GAYA_QS}")
        assert load.call_count == 1
        assert marker.get_lunar.called
    finally:
        app.dependency_overrides.clear()
        del app.state.lunar
