import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from stockdash.api.dependencies import get_store, verify_webhook_secret
from stockdash.config import get_settings
from stockdash.services.webhook_store import WebhookStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.post("/finnhub", dependencies=[Depends(verify_webhook_secret)])
async def receive_finnhub_webhook(request: Request, store: WebhookStore = Depends(get_store)):
    """Finnhub requires a 2xx acknowledgement even when processing fails."""
    try:
        payload = await request.json()
        store.add(payload)
    except ValueError as e:
        logger.error(f"Webhook processing error: {e}")
        return {"received": True, "error": "Processing failed"}
    return {"received": True}


@router.post("/test")
async def receive_test_webhook(request: Request, store: WebhookStore = Depends(get_store)):
    """Development hook: stores the body tagged `_test`, no secret required."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    payload = {**body, "_test": True} if isinstance(body, dict) else {"body": body, "_test": True}
    store.add(payload)
    return {"received": True, "test_mode": True}


@router.get("/events")
async def list_webhook_events(
    limit: int = Query(20, ge=1, le=100),
    store: WebhookStore = Depends(get_store),
):
    return {"total": len(store), "events": store.recent(limit)}


@router.get("/events/{event_id}")
async def get_webhook_event(event_id: str, store: WebhookStore = Depends(get_store)):
    event = store.get(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/health")
async def webhook_health(store: WebhookStore = Depends(get_store)):
    return {
        "status": "ok",
        "webhook_secret": bool(get_settings().finnhub_webhook_secret),
        "events_stored": len(store),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
