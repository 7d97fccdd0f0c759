import os
from typing import Optional

from pydantic import BaseModel


class ChartExchangeConfig(BaseModel):
    """Options for the ChartExchange market-data API."""

    api_key: Optional[str] = None
    base_url: str = "https://chartexchange.com"
    page_size: int = 1000
    timeout_seconds: float = 30.0


class FinraConfig(BaseModel):
    """Options for the FINRA regulatory API (separate credential)."""

    access_token: Optional[str] = None
    base_url: str = "https://api.finra.org"
    page_size: int = 1000
    timeout_seconds: float = 30.0


class ApiConfig(BaseModel):
    """Config for the query API."""

    cache_ttl_seconds: int = 15 * 60


def load_chartexchange_config() -> ChartExchangeConfig:
    return ChartExchangeConfig(
        api_key=os.getenv("CHARTEXCHANGE_API_KEY") or None,
        base_url=os.getenv("CHARTEXCHANGE_BASE_URL", "https://chartexchange.com").rstrip("/"),
        page_size=int(os.getenv("CHARTEXCHANGE_PAGE_SIZE", "1000")),
        timeout_seconds=float(os.getenv("CHARTEXCHANGE_TIMEOUT", "30")),
    )


def load_finra_config() -> FinraConfig:
    return FinraConfig(
        access_token=os.getenv("FINRA_ACCESS_TOKEN") or None,
        base_url=os.getenv("FINRA_BASE_URL", "https://api.finra.org").rstrip("/"),
        page_size=int(os.getenv("FINRA_PAGE_SIZE", "1000")),
        timeout_seconds=float(os.getenv("FINRA_TIMEOUT", "30")),
    )


def load_api_config() -> ApiConfig:
    return ApiConfig(cache_ttl_seconds=int(os.getenv("API_CACHE_TTL_SECONDS", str(15 * 60))))
