from datetime import datetime
from decimal import Decimal

from stockdata.db.models import BorrowFee
from stockdata.errors import RemoteError
from stockdata.ingestion.aggregation import aggregate_daily_borrow_fees, complete_days
from stockdata.providers.base import FetchResult


def reading(ts, fee, available):
    return BorrowFee(
        symbol="AAPL", date=ts, fee=Decimal(fee), rebate=Decimal(0), available=available, request_id="r1"
    )


def test_daily_ohlc():
    # Newest first, as the vendor pages them
    readings = [
        reading(datetime(2024, 1, 2, 16), "1.2", 300),
        reading(datetime(2024, 1, 2, 12), "2.0", 100),
        reading(datetime(2024, 1, 2, 9), "1.0", 200),
        reading(datetime(2024, 1, 1, 15), "0.5", 50),
    ]

    rows = aggregate_daily_borrow_fees(readings)

    assert [r.date for r in rows] == [datetime(2024, 1, 1), datetime(2024, 1, 2)]
    day = rows[1]
    assert day.open == Decimal("1.0")
    assert day.high == Decimal("2.0")
    assert day.low == Decimal("1.0")
    assert day.close == Decimal("1.2")
    assert day.average == Decimal("1.4")
    assert day.data_point_count == 3
    assert (day.min_available, day.max_available, day.average_available) == (100, 300, 200)
    assert day.symbol == "AAPL"
    assert day.request_id == "r1"

    single = rows[0]
    assert single.open == single.close == Decimal("0.5")
    assert single.data_point_count == 1


def test_no_readings():
    assert aggregate_daily_borrow_fees([]) == []


def three_days():
    return [
        reading(datetime(2024, 1, 3, 10), "1.3", 100),
        reading(datetime(2024, 1, 2, 10), "1.2", 100),
        reading(datetime(2024, 1, 1, 10), "1.1", 100),
    ]


def test_days_before_the_watermark_day_are_dropped():
    readings = three_days()
    daily = aggregate_daily_borrow_fees(readings)

    kept = complete_days(daily, FetchResult(readings), datetime(2024, 1, 2, 18))

    assert [d.date.day for d in kept] == [2, 3]


def test_oldest_day_of_a_broken_fetch_is_dropped():
    readings = three_days()
    daily = aggregate_daily_borrow_fees(readings)

    assert len(complete_days(daily, FetchResult(readings), None)) == 3
    kept = complete_days(daily, FetchResult(readings, RemoteError("HTTP 500")), None)
    assert [d.date.day for d in kept] == [2, 3]
