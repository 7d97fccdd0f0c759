"""
Map vendor response items to (transient) ORM rows.

Mappers set every dataset field and the record date; `symbol` and
`request_id` are stamped by the pagination driver.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from stockdata.db.models import (
    BorrowFee,
    FailureToDeliver,
    FinraShortInterest,
    OptionChainSummary,
    RedditMention,
    ShortInterest,
    ShortVolume,
    StockSplit,
)
from stockdata.providers.chartexchange.responses import (
    BorrowFeeData,
    FailureToDeliverData,
    OptionChainResponse,
    RedditMentionData,
    ShortInterestData,
    ShortVolumeData,
    StockSplitData,
)
from stockdata.providers.finra.responses import FinraShortInterestData
from .parsing import (
    DATETIME_FORMAT,
    parse_date,
    parse_decimal_or_zero,
    parse_optional_date,
    percent_of,
)

VENUES = (
    "xnas", "xphl", "xnys", "arcx", "xcis", "xase",
    "xchi", "edgx", "bats", "edga", "baty",
)


def map_short_interest(item: ShortInterestData) -> ShortInterest:
    return ShortInterest(
        date=parse_date(item.date),
        short_interest_percent=parse_decimal_or_zero(item.short_interest),
        short_position=item.short_position or 0,
        days_to_cover=parse_decimal_or_zero(item.days_to_cover),
        change_number=item.change_number or 0,
        change_percent=parse_decimal_or_zero(item.change_percent),
    )


def map_short_volume(item: ShortVolumeData) -> ShortVolume:
    record = ShortVolume(
        date=parse_date(item.date),
        rt=item.rt,
        st=item.st,
        lt=item.lt,
        fs=item.fs,
        fse=item.fse,
        short_volume_percent=percent_of(item.st, item.rt),
    )
    for venue in VENUES:
        setattr(record, venue, getattr(item, venue))
    return record


def map_borrow_fee(item: BorrowFeeData) -> BorrowFee:
    return BorrowFee(
        date=parse_date(item.timestamp, DATETIME_FORMAT),
        available=item.available or 0,
        fee=parse_decimal_or_zero(item.fee),
        rebate=parse_decimal_or_zero(item.rebate),
    )


def map_failure_to_deliver(item: FailureToDeliverData) -> FailureToDeliver:
    return FailureToDeliver(
        date=parse_date(item.date),
        failure_to_deliver=item.failure_to_deliver or 0,
        price=parse_decimal_or_zero(item.price),
        volume=item.volume or 0,
        settlement_date=parse_optional_date(item.settlement_date),
        cusip=item.cusip,
        company_name=item.company_name,
    )


def map_reddit_mention(item: RedditMentionData) -> RedditMention:
    # The mention is dated by when it was posted
    created = parse_date(item.created, DATETIME_FORMAT)
    return RedditMention(
        date=created,
        created=created,
        subreddit=item.subreddit,
        sentiment=None if item.sentiment is None else parse_decimal_or_zero(item.sentiment),
        author=item.author,
        text=item.text,
        link=item.link,
        thing_id=item.thing_id,
        thing_type=item.thing_type,
    )


def map_stock_split(item: StockSplitData) -> StockSplit:
    from_factor = parse_decimal_or_zero(item.from_factor)
    to_factor = parse_decimal_or_zero(item.to_factor)
    return StockSplit(
        date=parse_date(item.date),
        split_ratio=item.split_ratio or f"{to_factor.normalize()}:{from_factor.normalize()}",
        split_factor=to_factor / from_factor if from_factor > 0 else Decimal(0),
        from_factor=from_factor,
        to_factor=to_factor,
        ex_date=parse_optional_date(item.ex_date),
        record_date=parse_optional_date(item.record_date),
        payable_date=parse_optional_date(item.payable_date),
        announcement_date=parse_optional_date(item.announcement_date),
        company_name=item.company_name,
    )


def map_option_chain(response: OptionChainResponse, as_of: datetime) -> List[OptionChainSummary]:
    """One summary row dated `as_of`; nothing when the summary is missing."""
    summary = response.summary
    if summary is None:
        return []
    return [
        OptionChainSummary(
            date=as_of,
            total_call_volume=summary.total_call_volume,
            total_put_volume=summary.total_put_volume,
            total_call_open_interest=summary.total_call_open_interest,
            total_put_open_interest=summary.total_put_open_interest,
            put_call_volume_ratio=parse_decimal_or_zero(summary.put_call_volume_ratio),
            put_call_open_interest_ratio=parse_decimal_or_zero(summary.put_call_open_interest_ratio),
            max_pain=_optional_decimal(summary.max_pain),
            total_implied_volatility=_optional_decimal(summary.total_implied_volatility),
        )
    ]


def map_finra_short_interest(item: FinraShortInterestData) -> FinraShortInterest:
    settlement = parse_date(item.settlement_date)
    current = item.current_short_position or 0
    previous = item.previous_short_position or 0
    if item.change_percent is not None:
        change = parse_decimal_or_zero(item.change_percent)
    else:
        change = percent_of(current - previous, previous)
    return FinraShortInterest(
        date=settlement,
        settlement_date=settlement,
        short_interest=current,
        previous_short_interest=previous,
        avg_daily_volume=item.average_daily_volume or 0,
        days_to_cover=parse_decimal_or_zero(item.days_to_cover),
        change_percent=change,
    )


def _optional_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return parse_decimal_or_zero(value)
