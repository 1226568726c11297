import asyncio
import logging

import httpx

from stockdash.analysis.sentiment import map_star_label
from stockdash.config import get_settings
from stockdash.schemas.sentiment import SentimentResult

logger = logging.getLogger(__name__)

STAGGER_SECONDS = 0.1  # spacing between calls inside one batch


class SentimentService:
    """Headline sentiment via the Hugging Face inference API (1-5 star model)."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        settings = get_settings()
        self.token = settings.huggingface_token
        self.model_url = settings.sentiment_model_url
        self.timeout = settings.sentiment_timeout
        self.batch_size = max(1, settings.sentiment_batch_size)
        self.batch_delay = settings.sentiment_batch_delay
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.token)

    async def analyze(self, text: str) -> SentimentResult:
        if not text or not text.strip():
            return SentimentResult(error="Empty text")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(
                    self.model_url,
                    json={"inputs": text},
                    headers={"Authorization": f"Bearer {self.token}"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Sentiment request failed: {e}")
            return SentimentResult(error=str(e) or type(e).__name__)

        if resp.status_code == 429:
            logger.warning("Sentiment model rate limit exceeded")
            return SentimentResult(error="Rate limit exceeded")
        if resp.status_code != 200:
            logger.warning(f"Sentiment model returned {resp.status_code}")
            return SentimentResult(error=f"Sentiment model returned {resp.status_code}")

        try:
            data = resp.json()
            predictions = data[0]
            top = max(predictions, key=lambda p: p["score"])
            return SentimentResult(label=map_star_label(top["label"]), score=float(top["score"]))
        except (ValueError, LookupError, TypeError) as e:
            logger.warning(f"Unexpected sentiment response format: {e}")
            return SentimentResult(error="Unexpected response format")

    async def analyze_many(self, headlines: list[str]) -> list[SentimentResult]:
        """Classify headlines in small batches to stay under the inference rate limit."""
        results: list[SentimentResult] = []
        for start in range(0, len(headlines), self.batch_size):
            batch = headlines[start:start + self.batch_size]
            batch_results = await asyncio.gather(
                *(self._staggered(headline, index) for index, headline in enumerate(batch)),
                return_exceptions=True,
            )
            for result in batch_results:
                if isinstance(result, Exception):
                    logger.error(f"Sentiment analysis failed: {result}")
                    results.append(SentimentResult(error=str(result) or type(result).__name__))
                else:
                    results.append(result)

            if start + self.batch_size < len(headlines):
                await asyncio.sleep(self.batch_delay)
        return results

    async def _staggered(self, headline: str, index: int) -> SentimentResult:
        await asyncio.sleep(index * STAGGER_SECONDS)
        return await self.analyze(headline)
