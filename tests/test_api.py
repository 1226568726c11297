import pytest
from fastapi.testclient import TestClient

from stockdash.api.dependencies import get_aggregator
from stockdash.config import get_settings
from stockdash.main import app
from stockdash.services.data_aggregator import DataAggregator
from stockdash.services.finnhub_service import date_range


@pytest.fixture
def client(make_finnhub, default_routes):
    app.dependency_overrides[get_aggregator] = lambda: DataAggregator(finnhub=make_finnhub(default_routes))
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_stock_report(client):
    resp = client.get("/api/stocks/aapl")
    assert resp.status_code == 200
    body = resp.json()
    assert body["symbol"] == "AAPL"
    assert body["scoring"]["label"] == "Moderate"
    assert set(body["scoring"]["breakdown"]) == {"price", "momentum", "volatility", "market", "trend"}
    assert body["fundamentals"]["overall"]["label"] == "Fair"
    assert body["news"] is None


def test_stock_report_with_news(client):
    body = client.get("/api/stocks/AAPL", params={"include_news": True}).json()
    assert [a["headline"] for a in body["news"]] == ["Apple faces probe", "Apple beats estimates"]


@pytest.mark.parametrize("symbol", ["TOOLONGSYMBOL", "AA$PL"])
def test_invalid_symbol(client, symbol):
    resp = client.get(f"/api/stocks/{symbol}")
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Invalid symbol format")


def test_blank_symbol(client):
    resp = client.get("/api/stocks/%20")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Stock symbol is required"


def test_unknown_symbol_is_404(client, default_routes):
    default_routes["/quote"] = {"c": 0, "h": 0, "l": 0, "o": 0, "pc": 0}
    resp = client.get("/api/stocks/ZZZZ")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Stock symbol not found or invalid"


def test_upstream_failure_is_500(client, default_routes):
    default_routes["/quote"] = 503
    assert client.get("/api/stocks/AAPL").status_code == 500


def test_history(client):
    resp = client.get("/api/stocks/AAPL/history", params={"resolution": "W", "from": 1, "to": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["resolution"] == "W"
    assert len(body["data"]["prices"]) == 20


def test_history_bad_resolution(client):
    assert client.get("/api/stocks/AAPL/history", params={"resolution": "2H"}).status_code == 422


def test_history_not_available(client, default_routes):
    default_routes["/stock/candle"] = {"s": "no_data"}
    resp = client.get("/api/stocks/AAPL/history")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Historical data not available for this symbol"


def test_company_news(client):
    body = client.get("/api/stocks/AAPL/news").json()
    assert body["symbol"] == "AAPL"
    assert len(body["news"]) == 2
    assert body["sentiment"] is None


def test_market_news(client):
    body = client.get("/api/stocks/news/market").json()
    assert body["category"] == "general"
    assert len(body["news"]) == 2


def test_fundamentals(client):
    body = client.get("/api/stocks/AAPL/fundamentals").json()
    assert body["analysis"]["valuation"]["score"] == 60
    assert body["analysis"]["key_ratios"]["pe_ratio"] == 18.0
    assert body["raw_financials"]["financials"][0]["period"] == "2023-09-30"


def test_fundamentals_not_available(client, default_routes):
    default_routes["/stock/metric"] = 500
    resp = client.get("/api/stocks/AAPL/fundamentals")
    assert resp.status_code == 404


def test_search(client):
    body = client.get("/api/stocks/search", params={"q": "apple"}).json()
    assert body["result"][0]["symbol"] == "AAPL"


def test_search_requires_query(client):
    assert client.get("/api/stocks/search").status_code == 400


def test_metric_definitions(client):
    body = client.get("/api/stocks/metrics/definitions").json()
    assert "pe_ratio" in body
    assert set(body["pe_ratio"]) == {"name", "description", "formula", "good_range"}


def test_history_window_follows_settings(client, monkeypatch):
    monkeypatch.setenv("HISTORY_DAYS", "10")
    get_settings.cache_clear()
    body = client.get("/api/stocks/AAPL/history").json()
    assert body["to_ts"] - body["from_ts"] == 10 * 24 * 60 * 60


def test_news_window_follows_settings(client, monkeypatch):
    monkeypatch.setenv("NEWS_DAYS", "3")
    get_settings.cache_clear()
    body = client.get("/api/stocks/AAPL/news").json()
    assert body["from_date"] == date_range(3)[0]


def test_explicit_news_days_overrides_settings(client):
    body = client.get("/api/stocks/AAPL/news", params={"days": 30}).json()
    assert body["from_date"] == date_range(30)[0]
