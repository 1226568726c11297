import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockdash.api.endpoints import fundamental, news, stocks, webhooks
from stockdash.config import get_settings

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="StockDash API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(news.router)
app.include_router(fundamental.router)
app.include_router(stocks.router)
app.include_router(webhooks.router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "StockDash", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.on_event("startup")
async def startup():
    if not get_settings().finnhub_api_key:
        logging.getLogger(__name__).warning("FINNHUB_API_KEY is not set; stock endpoints will return 500")
