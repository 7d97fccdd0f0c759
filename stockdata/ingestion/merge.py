import logging
from datetime import datetime, timezone
from typing import List

from stockdata.db.models.data_point import StockDataPoint
from stockdata.db.repositories.series_repo import TimeSeriesRepository
from stockdata.db.repositories.ticker_repo import TickerRepository, normalize_symbol
from .report import MergeOutcome

logger = logging.getLogger(__name__)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


async def merge(
    repository: TimeSeriesRepository,
    symbol: str,
    candidates: List[StockDataPoint],
) -> MergeOutcome:
    """
    Stage the candidates whose calendar day is not stored yet.

    The first candidate of a day wins over later ones of the same batch.
    The owning ticker is created when missing. Nothing is committed here.
    """
    symbol = normalize_symbol(symbol)
    if not candidates:
        return MergeOutcome()

    taken = await repository.existing_dates(symbol)
    fresh = []
    for record in candidates:
        record.date = to_naive_utc(record.date)
        day = record.date.date()
        if day in taken:
            continue
        taken.add(day)
        record.symbol = symbol
        fresh.append(record)

    if fresh:
        await TickerRepository(repository.session).get_or_create(symbol)
        repository.add_all(fresh)

    outcome = MergeOutcome(
        fetched=len(candidates),
        inserted=len(fresh),
        skipped=len(candidates) - len(fresh),
    )
    logger.info(
        f"{repository.model.dataset} {symbol}: {outcome.inserted} new, "
        f"{outcome.skipped} already stored"
    )
    return outcome
