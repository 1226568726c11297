from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    finnhub_timeout: float = 10.0
    finnhub_rate_limit: int = 60  # calls per minute on the free tier

    # Headline sentiment (Hugging Face inference API)
    huggingface_token: str = ""
    sentiment_model_url: str = (
        "https://api-inference.huggingface.co/models/nlptown/bert-base-multilingual-uncased-sentiment"
    )
    sentiment_timeout: float = 30.0
    sentiment_batch_size: int = 3
    sentiment_batch_delay: float = 1.0  # seconds between batches

    # Lookback windows and list sizes
    news_days: int = 7
    news_limit: int = 10
    market_news_limit: int = 15
    history_days: int = 30

    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Webhooks
    finnhub_webhook_secret: str = ""
    webhook_max_events: int = 100

    model_config = {"env_file": ".env"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
