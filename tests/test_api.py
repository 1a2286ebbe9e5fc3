import json
from unittest.mock import Mock

import pytest

from app import build_scheduler, create_app
from conftest import DummyFetcher, make_row
from events.config import Settings

ORIGIN = "http://localhost:5173"


@pytest.fixture
def client(store):
    store.create_many([
        make_row(id="free", city="Delhi", price=0, is_free=True),
        make_row(id="paid", city="Delhi", price=300, is_free=False, date="2025-01-28"),
        make_row(id="gurgaon", city="Gurgaon", category="Board Games", date="2025-01-29"),
    ])
    app = create_app(store=store, fetcher=DummyFetcher(), settings=Settings(db_path="sqlite://"))
    return app.test_client()


def test_list_events(client):
    r = client.get("/api/events")
    assert r.status_code == 200
    data = json.loads(r.data)
    assert data["success"] is True
    assert data["count"] == 3
    assert [e["id"] for e in data["events"]] == ["free", "paid", "gurgaon"]
    assert data["events"][0]["tags"] == ["chess", "delhi", "community"]
    assert data["events"][0]["registrationUrl"] == "https://forms.google.com/register"


def test_list_events_with_filters(client):
    r = client.get("/api/events?city=Delhi&maxPrice=0")
    data = r.get_json()
    assert [e["id"] for e in data["events"]] == ["free"]
    assert data["events"][0]["priceType"] == "free"


def test_preflight_allows_all_origins(client):
    r = client.options("/api/events", headers={
        "Origin": ORIGIN,
        "Access-Control-Request-Method": "GET",
    })
    assert r.status_code == 200
    assert r.data == b""
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert "GET" in r.headers["Access-Control-Allow-Methods"]


def test_cors_header_on_get(client):
    r = client.get("/api/events", headers={"Origin": ORIGIN})
    assert r.headers["Access-Control-Allow-Origin"] == "*"


def test_scrape_endpoint(client):
    r = client.post("/api/scrape")
    assert r.status_code == 200
    data = r.get_json()
    assert data["success"] is True
    assert data["sources"]["local"] == 12
    assert data["events_count"] == 12
    # the seeded rows were scraped long before today and get purged
    assert client.get("/api/events").get_json()["count"] == 12


def test_scrape_rejects_get(client):
    assert client.get("/api/scrape").status_code == 405


def test_store_errors_become_failure_envelope():
    store = Mock()
    store.list.side_effect = RuntimeError("connection lost")
    app = create_app(store=store, fetcher=DummyFetcher(), settings=Settings(db_path="sqlite://"))
    r = app.test_client().get("/api/events")
    assert r.status_code == 500
    assert r.get_json() == {
        "success": False, "error": "connection lost", "error_kind": "unexpected", "events": [], "count": 0,
    }


def test_scheduler_registers_interval_job(store):
    app = create_app(store=store, fetcher=DummyFetcher(), settings=Settings(db_path="sqlite://"))
    scheduler = build_scheduler(app, minutes=15)
    jobs = scheduler.get_jobs()
    assert [j.id for j in jobs] == ["scrape-events"]
    assert jobs[0].trigger.interval.total_seconds() == 15 * 60
