"""Where an incremental fetch resumes."""

from datetime import datetime, timezone
from typing import Optional

import pandas as pd

from stockdata.db.repositories.series_repo import TimeSeriesRepository


def utcnow() -> datetime:
    """Current time as naive UTC, the convention of every stored date."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


async def resolve_watermark(
    repository: TimeSeriesRepository,
    symbol: str,
    default_lookback: Optional[pd.DateOffset],
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Latest stored date of the symbol in the repository's dataset.

    With nothing stored, fall back to `now - default_lookback` (calendar
    arithmetic, so one month back from March 31st is the last day of
    February). Datasets without a lookback get None and are refetched fully.
    """
    latest = await repository.latest_date(symbol)
    if latest is not None:
        return latest
    if default_lookback is None:
        return None
    now = now or utcnow()
    return (pd.Timestamp(now) - default_lookback).to_pydatetime()
