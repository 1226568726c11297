import pytest
from fastapi.testclient import TestClient

from stockdash.config import get_settings
from stockdash.main import app
from stockdash.services.webhook_store import WebhookStore

HEADERS = {"X-Finnhub-Secret": "s3cret"}


@pytest.fixture
def client():
    return TestClient(app)


def test_store_is_bounded_and_newest_first():
    store = WebhookStore(max_events=3)
    for i in range(5):
        store.add({"type": "trade", "n": i})
    assert len(store) == 3
    summaries = store.recent(10)
    assert [store.get(s["id"])["data"]["n"] for s in summaries] == [4, 3, 2]
    assert len(store.recent(1)) == 1


def test_store_lists_summaries():
    store = WebhookStore()
    event = store.add({"type": "news", "symbol": "AAPL"})
    assert store.recent() == [{
        "id": event["id"],
        "timestamp": event["timestamp"],
        "type": "news",
        "data_keys": ["type", "symbol"],
    }]


def test_store_handles_non_dict_payload():
    store = WebhookStore()
    event = store.add(["x"])
    assert event["type"] == "unknown"
    assert event["data"] == ["x"]
    assert store.recent()[0]["data_keys"] == []


def test_store_get_unknown_id():
    assert WebhookStore().get("missing") is None


def test_receive_and_list(client):
    resp = client.post("/api/webhooks/finnhub", json={"type": "earnings", "symbol": "AAPL"}, headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"received": True}

    events = client.get("/api/webhooks/events").json()
    assert events["total"] == 1
    assert events["events"][0]["type"] == "earnings"
    assert events["events"][0]["data_keys"] == ["type", "symbol"]
    assert "data" not in events["events"][0]


def test_event_detail(client):
    client.post("/api/webhooks/finnhub", json={"type": "trade", "data": [1, 2]}, headers=HEADERS)
    event_id = client.get("/api/webhooks/events").json()["events"][0]["id"]

    detail = client.get(f"/api/webhooks/events/{event_id}").json()
    assert detail["id"] == event_id
    assert detail["data"] == {"type": "trade", "data": [1, 2]}


def test_event_detail_unknown_is_404(client):
    resp = client.get("/api/webhooks/events/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Event not found"


def test_test_webhook_skips_secret_and_tags_event(client):
    resp = client.post("/api/webhooks/test", json={"type": "news"})
    assert resp.status_code == 200
    assert resp.json() == {"received": True, "test_mode": True}

    event_id = client.get("/api/webhooks/events").json()["events"][0]["id"]
    assert client.get(f"/api/webhooks/events/{event_id}").json()["data"] == {"type": "news", "_test": True}


def test_webhook_health(client):
    client.post("/api/webhooks/test", json={})
    body = client.get("/api/webhooks/health").json()
    assert body["status"] == "ok"
    assert body["webhook_secret"] is True
    assert body["events_stored"] == 1
    assert body["timestamp"]


def test_webhook_health_without_secret(client, monkeypatch):
    monkeypatch.setenv("FINNHUB_WEBHOOK_SECRET", "")
    get_settings.cache_clear()
    assert client.get("/api/webhooks/health").json()["webhook_secret"] is False


def test_wrong_secret(client):
    resp = client.post("/api/webhooks/finnhub", json={}, headers={"X-Finnhub-Secret": "nope"})
    assert resp.status_code == 401


def test_unconfigured_secret(client, monkeypatch):
    monkeypatch.setenv("FINNHUB_WEBHOOK_SECRET", "")
    get_settings.cache_clear()
    resp = client.post("/api/webhooks/finnhub", json={}, headers=HEADERS)
    assert resp.status_code == 500


def test_malformed_body_is_still_acknowledged(client):
    resp = client.post("/api/webhooks/finnhub", content=b"{not json", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"received": True, "error": "Processing failed"}


def test_events_limit_bounds(client):
    assert client.get("/api/webhooks/events", params={"limit": 0}).status_code == 422
