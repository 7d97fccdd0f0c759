"""
One synchronizer per dataset.

Each synchronizer runs the same pipeline: resolve the watermark, fetch from
the vendor, merge into storage, commit. What differs per dataset is the
endpoint, the mapper, the default lookback and how paging stops.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type

import pandas as pd
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stockdata.db.models import (
    BorrowFee,
    BorrowFeeDaily,
    FailureToDeliver,
    FinraShortInterest,
    OptionChainSummary,
    RedditMention,
    ShortInterest,
    ShortVolume,
    StockSplit,
)
from stockdata.db.models.data_point import StockDataPoint
from stockdata.db.repositories.series_repo import TimeSeriesRepository
from stockdata.db.repositories.ticker_repo import normalize_symbol
from stockdata.normalize import mappers
from stockdata.providers.base import FetchResult, PageOrder, VendorDataClient
from stockdata.providers.chartexchange import responses
from stockdata.providers.finra.client import SHORT_INTEREST_ENDPOINT
from stockdata.providers.finra.responses import FinraShortInterestData
from .aggregation import aggregate_daily_borrow_fees, complete_days
from .merge import merge
from .report import MergeOutcome, SyncResult
from .watermark import resolve_watermark, start_of_day, utcnow

logger = logging.getLogger(__name__)


class DatasetSync(ABC):
    dataset: str = ""
    vendor: str = "chartexchange"
    model: Type[StockDataPoint]
    endpoint: str = ""
    default_lookback: Optional[pd.DateOffset] = None
    page_order: PageOrder = PageOrder.NEWEST_FIRST

    def __init__(
        self,
        client: VendorDataClient,
        session_factory: async_sessionmaker,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.session_factory = session_factory
        self.clock = clock

    def should_stop(self, page_records: List[StockDataPoint], watermark: Optional[datetime]) -> bool:
        """
        Stop paging once the page reaches back past the watermark day.

        Only the last record of the page is checked, which assumes
        newest-first pages; other orders page through to the end.
        """
        if watermark is None or not page_records:
            return False
        if self.page_order is not PageOrder.NEWEST_FIRST:
            return False
        return page_records[-1].date < start_of_day(watermark)

    @abstractmethod
    async def fetch(self, symbol: str, watermark: Optional[datetime]) -> FetchResult:
        pass

    async def store(
        self, session: AsyncSession, symbol: str, fetched: FetchResult, watermark: Optional[datetime]
    ) -> MergeOutcome:
        return await merge(TimeSeriesRepository(session, self.model), symbol, fetched.records)

    async def synchronize(self, symbol: str) -> SyncResult:
        """
        Run the pipeline once; failures are reported, never raised.

        A vendor failure still stores whatever was fetched before it, but the
        result is unsuccessful and carries the error.
        """
        symbol = normalize_symbol(symbol)
        started_at = self.clock()
        watermark = None
        async with self.session_factory() as session:
            try:
                repository = TimeSeriesRepository(session, self.model)
                watermark = await resolve_watermark(
                    repository, symbol, self.default_lookback, now=started_at
                )
                logger.info(f"Synchronizing {self.dataset} for {symbol} since {watermark}")
                fetched = await self.fetch(symbol, watermark)
                outcome = await self.store(session, symbol, fetched, watermark)
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.exception(f"Synchronizing {self.dataset} for {symbol} failed")
                return SyncResult(
                    dataset=self.dataset,
                    symbol=symbol,
                    success=False,
                    watermark=watermark,
                    error=f"{type(e).__name__}: {e}",
                    started_at=started_at,
                    finished_at=self.clock(),
                )

        error = None
        if not fetched.complete:
            error = f"{type(fetched.error).__name__}: {fetched.error}"
            logger.warning(
                f"Synchronizing {self.dataset} for {symbol} stopped early "
                f"({outcome.inserted} records kept): {error}"
            )

        return SyncResult(
            dataset=self.dataset,
            symbol=symbol,
            success=fetched.complete,
            fetched=outcome.fetched,
            inserted=outcome.inserted,
            skipped=outcome.skipped,
            watermark=watermark,
            error=error,
            started_at=started_at,
            finished_at=self.clock(),
        )


class ShortInterestSync(DatasetSync):
    dataset = "short_interest"
    model = ShortInterest
    endpoint = "/data/stocks/short-interest/"

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_array(
            symbol, self.endpoint, responses.ShortInterestData, mappers.map_short_interest
        )


class ShortVolumeSync(DatasetSync):
    dataset = "short_volume"
    model = ShortVolume
    endpoint = "/data/stocks/short-volume/"
    default_lookback = pd.DateOffset(years=1)

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_until(
            symbol,
            self.endpoint,
            responses.ShortVolumeResponse,
            mappers.map_short_volume,
            lambda page: self.should_stop(page, watermark),
        )


class BorrowFeeSync(DatasetSync):
    dataset = "borrow_fee"
    model = BorrowFee
    endpoint = "/data/stocks/borrow-fee/ib/"
    default_lookback = pd.DateOffset(months=1)

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_until(
            symbol,
            self.endpoint,
            responses.BorrowFeeResponse,
            mappers.map_borrow_fee,
            lambda page: self.should_stop(page, watermark),
        )

    async def store(self, session, symbol, fetched, watermark):
        outcome = await super().store(session, symbol, fetched, watermark)
        daily = complete_days(aggregate_daily_borrow_fees(fetched.records), fetched, watermark)
        replaced = await TimeSeriesRepository(session, BorrowFeeDaily).replace(symbol, daily)
        logger.info(f"borrow_fee_daily {symbol}: {len(daily)} days rebuilt, {replaced} replaced")
        return outcome


class FailureToDeliverSync(DatasetSync):
    dataset = "failure_to_deliver"
    model = FailureToDeliver
    endpoint = "/data/stocks/failure-to-deliver/"
    default_lookback = pd.DateOffset(years=1)

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_array(
            symbol, self.endpoint, responses.FailureToDeliverData, mappers.map_failure_to_deliver
        )


class RedditMentionsSync(DatasetSync):
    dataset = "reddit_mentions"
    model = RedditMention
    endpoint = "/data/reddit/mentions/stock/"
    default_lookback = pd.DateOffset(months=1)

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_until(
            symbol,
            self.endpoint,
            responses.RedditMentionsResponse,
            mappers.map_reddit_mention,
            lambda page: self.should_stop(page, watermark),
        )


class OptionChainSync(DatasetSync):
    dataset = "option_chain"
    model = OptionChainSummary
    endpoint = "/data/options/chain-summary/"

    async def fetch(self, symbol, watermark):
        today = start_of_day(self.clock())
        return await self.client.fetch_single_page(
            symbol,
            self.endpoint,
            responses.OptionChainResponse,
            lambda response: mappers.map_option_chain(response, today),
        )


class StockSplitSync(DatasetSync):
    dataset = "stock_splits"
    model = StockSplit
    endpoint = "/data/stocks/splits/"

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_single_page(
            symbol,
            self.endpoint,
            responses.StockSplitResponse,
            lambda response: [mappers.map_stock_split(item) for item in response.items()],
        )


class FinraShortInterestSync(DatasetSync):
    dataset = "finra_short_interest"
    vendor = "finra"
    model = FinraShortInterest
    endpoint = SHORT_INTEREST_ENDPOINT
    default_lookback = pd.DateOffset(months=6)

    async def fetch(self, symbol, watermark):
        return await self.client.fetch_array(
            symbol, self.endpoint, FinraShortInterestData, mappers.map_finra_short_interest
        )


DATASET_SYNCS: Dict[str, Type[DatasetSync]] = {
    sync.dataset: sync
    for sync in (
        ShortInterestSync,
        ShortVolumeSync,
        BorrowFeeSync,
        FailureToDeliverSync,
        RedditMentionsSync,
        OptionChainSync,
        StockSplitSync,
        FinraShortInterestSync,
    )
}
