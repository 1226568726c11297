from fastapi import Header, HTTPException

from stockdash.config import get_settings
from stockdash.services.data_aggregator import DataAggregator
from stockdash.services.webhook_store import WebhookStore, get_webhook_store


def get_aggregator() -> DataAggregator:
    """Per-request aggregator; overridden in tests with a fake provider."""
    return DataAggregator()


def get_store() -> WebhookStore:
    return get_webhook_store()


async def verify_webhook_secret(
    x_finnhub_secret: str | None = Header(None),
) -> None:
    """Dependency that checks the X-Finnhub-Secret header."""
    expected = get_settings().finnhub_webhook_secret
    if not expected:
        raise HTTPException(status_code=500, detail="Webhook secret not configured")
    if x_finnhub_secret != expected:
        raise HTTPException(status_code=401, detail="Invalid webhook secret")
