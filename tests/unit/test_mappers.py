import pytest
from datetime import datetime
from decimal import Decimal

from stockdata.errors import DateParseError
from stockdata.normalize import mappers
from stockdata.providers.chartexchange import responses
from stockdata.providers.finra.responses import FinraShortInterestData


def test_map_borrow_fee():
    item = responses.BorrowFeeData(timestamp="2024-01-02 15:30:00", available=5000, fee="1.5", rebate="-0.25")
    record = mappers.map_borrow_fee(item)

    assert record.date == datetime(2024, 1, 2, 15, 30)
    assert record.available == 5000
    assert record.fee == Decimal("1.5")
    assert record.rebate == Decimal("-0.25")

def test_map_borrow_fee_unparseable_numbers():
    item = responses.BorrowFeeData(timestamp="2024-01-02 15:30:00", available=None, fee="N/A", rebate=None)
    record = mappers.map_borrow_fee(item)

    assert record.fee == 0
    assert record.rebate == 0
    assert record.available == 0

def test_map_short_volume():
    item = responses.ShortVolumeData(date="2024-01-05", rt=200, st=50, lt=150, xnas=30, baty=7)
    record = mappers.map_short_volume(item)

    assert record.date == datetime(2024, 1, 5)
    assert record.short_volume_percent == Decimal(25)
    assert record.xnas == 30
    assert record.baty == 7
    assert record.xnys == 0

def test_map_short_volume_without_volume():
    record = mappers.map_short_volume(responses.ShortVolumeData(date="2024-01-05", rt=0, st=10))
    assert record.short_volume_percent == 0

def test_map_short_interest():
    item = responses.ShortInterestData(
        date="2023-12-15",
        short_interest="0.65",
        short_position=112000000,
        days_to_cover="1.9",
        change_number=-2500000,
        change_percent="N/A",
    )
    record = mappers.map_short_interest(item)

    assert record.date == datetime(2023, 12, 15)
    assert record.short_interest_percent == Decimal("0.65")
    assert record.change_number == -2500000
    assert record.change_percent == 0

def test_map_short_interest_bad_date():
    item = responses.ShortInterestData(date="15.12.2023")
    with pytest.raises(DateParseError):
        mappers.map_short_interest(item)

def test_map_failure_to_deliver():
    item = responses.FailureToDeliverData(
        date="2024-01-04",
        failure_to_deliver=1200,
        price="185.40",
        volume=900000,
        settlement_date="",
        cusip="037833100",
        company_name="APPLE INC",
    )
    record = mappers.map_failure_to_deliver(item)

    assert record.date == datetime(2024, 1, 4)
    assert record.price == Decimal("185.40")
    assert record.settlement_date is None
    assert record.cusip == "037833100"

def test_map_reddit_mention_is_dated_when_posted():
    item = responses.RedditMentionData(
        subreddit="wallstreetbets",
        created="2024-01-03 09:15:00",
        sentiment=0.4,
        author="someone",
        text="$AAPL",
    )
    record = mappers.map_reddit_mention(item)

    assert record.date == datetime(2024, 1, 3, 9, 15)
    assert record.created == record.date
    assert record.sentiment == Decimal("0.4")

def test_map_stock_split():
    item = responses.StockSplitData(
        date="2020-08-31", from_factor="1", to_factor="4", ex_date="2020-08-31", company_name="Apple"
    )
    record = mappers.map_stock_split(item)

    assert record.split_factor == Decimal(4)
    assert record.split_ratio == "4:1"
    assert record.ex_date == datetime(2020, 8, 31)
    assert record.record_date is None

def test_map_option_chain():
    as_of = datetime(2024, 1, 10)
    response = responses.OptionChainResponse.model_validate(
        {
            "data": [{"strike": "190", "type": "call", "volume": 10}],
            "summary": {
                "total_call_volume": 1000,
                "total_put_volume": 500,
                "put_call_volume_ratio": "0.5",
                "max_pain": 187.5,
            },
        }
    )
    rows = mappers.map_option_chain(response, as_of)

    assert len(rows) == 1
    assert rows[0].date == as_of
    assert rows[0].total_put_volume == 500
    assert rows[0].put_call_volume_ratio == Decimal("0.5")
    assert rows[0].max_pain == Decimal("187.5")
    assert rows[0].total_implied_volatility is None

def test_map_option_chain_without_summary():
    response = responses.OptionChainResponse.model_validate({"data": []})
    assert mappers.map_option_chain(response, datetime(2024, 1, 10)) == []

def test_map_finra_short_interest():
    item = FinraShortInterestData.model_validate(
        {
            "symbolCode": "AAPL",
            "settlementDate": "2024-01-12",
            "currentShortPositionQuantity": 150,
            "previousShortPositionQuantity": 100,
            "averageDailyVolumeQuantity": 75,
            "daysToCoverQuantity": 2,
        }
    )
    record = mappers.map_finra_short_interest(item)

    assert record.date == datetime(2024, 1, 12)
    assert record.settlement_date == record.date
    assert record.change_percent == Decimal(50)
    assert record.days_to_cover == Decimal(2)
