from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import pandas as pd

from stockdata.db.models import BorrowFee, BorrowFeeDaily
from stockdata.providers.base import FetchResult
from .watermark import start_of_day


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(round(float(value), 6)))


def aggregate_daily_borrow_fees(readings: List[BorrowFee]) -> List[BorrowFeeDaily]:
    """
    Collapse intraday borrow fee readings into one OHLC row per day.

    Open and close are the chronologically first and last fee of the day.
    """
    if not readings:
        return []

    frame = pd.DataFrame(
        {
            "date": [r.date for r in readings],
            "fee": [float(r.fee) for r in readings],
            "available": [int(r.available or 0) for r in readings],
        }
    )
    frame["date"] = pd.to_datetime(frame["date"])
    frame = frame.sort_values("date", kind="stable")
    frame["day"] = frame["date"].dt.normalize()

    daily = frame.groupby("day").agg(
        open=("fee", "first"),
        high=("fee", "max"),
        low=("fee", "min"),
        close=("fee", "last"),
        average=("fee", "mean"),
        data_point_count=("fee", "size"),
        max_available=("available", "max"),
        min_available=("available", "min"),
        average_available=("available", "mean"),
    )

    first = readings[0]
    rows = []
    for day, row in daily.iterrows():
        rows.append(
            BorrowFeeDaily(
                date=day.to_pydatetime(),
                symbol=first.symbol,
                request_id=first.request_id,
                open=_to_decimal(row["open"]),
                high=_to_decimal(row["high"]),
                low=_to_decimal(row["low"]),
                close=_to_decimal(row["close"]),
                average=_to_decimal(row["average"]),
                data_point_count=int(row["data_point_count"]),
                max_available=int(row["max_available"]),
                min_available=int(row["min_available"]),
                average_available=int(round(row["average_available"])),
            )
        )
    return rows


def complete_days(
    daily: List[BorrowFeeDaily], fetched: FetchResult, watermark: Optional[datetime]
) -> List[BorrowFeeDaily]:
    """
    Keep the daily rows whose readings were all fetched.

    Paging runs back past the watermark's day, so that day and every later
    one is whole; earlier days are not. When the fetch broke off, the oldest
    fetched day may be missing readings as well.
    """
    if watermark is not None:
        first_day = start_of_day(watermark)
        daily = [d for d in daily if d.date >= first_day]
    if not fetched.complete and fetched.records:
        oldest = min(r.date for r in fetched.records).date()
        daily = [d for d in daily if d.date.date() != oldest]
    return daily
