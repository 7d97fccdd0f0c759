from typing import List

from pydantic import BaseModel, Field


class SyncConfig(BaseModel):
    """Config for the synchronization runner."""

    datasets: List[str] = Field(
        default_factory=lambda: [
            "short_interest",
            "short_volume",
            "borrow_fee",
            "failure_to_deliver",
            "reddit_mentions",
            "option_chain",
            "stock_splits",
        ]
    )
    delay_between_symbols: float = 0.0
