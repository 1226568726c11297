"""In-memory ring buffer of recent Finnhub webhook events (newest first)."""
import logging
import threading
import uuid
from collections import deque
from datetime import datetime, timezone
from functools import lru_cache

from stockdash.config import get_settings

logger = logging.getLogger(__name__)


def summarize(event: dict) -> dict:
    data = event["data"]
    return {
        "id": event["id"],
        "timestamp": event["timestamp"],
        "type": event["type"],
        "data_keys": list(data) if isinstance(data, dict) else [],
    }


class WebhookStore:
    def __init__(self, max_events: int = 100):
        self._events: deque[dict] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def add(self, payload) -> dict:
        event_type = payload.get("type", "unknown") if isinstance(payload, dict) else "unknown"
        event = {
            "id": uuid.uuid4().hex,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": event_type,
            "data": payload,
        }
        with self._lock:
            self._events.appendleft(event)
        logger.info(f"Webhook received: type={event_type}")
        return event

    def get(self, event_id: str) -> dict | None:
        with self._lock:
            return next((e for e in self._events if e["id"] == event_id), None)

    def recent(self, limit: int = 20) -> list[dict]:
        """Summaries of the newest `limit` events; payloads are fetched by id."""
        with self._lock:
            events = list(self._events)[:max(0, limit)]
        return [summarize(e) for e in events]

    def __len__(self) -> int:
        return len(self._events)


@lru_cache
def get_webhook_store() -> WebhookStore:
    return WebhookStore(max_events=get_settings().webhook_max_events)
