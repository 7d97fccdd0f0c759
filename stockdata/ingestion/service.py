import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker
from tqdm import tqdm

from stockdata.db.repositories.ticker_repo import normalize_symbol
from stockdata.errors import SyncError
from stockdata.providers.base import VendorDataClient
from stockdata.providers.chartexchange.client import ChartExchangeClient
from stockdata.providers.finra.client import FinraClient
from .config import SyncConfig
from .datasets import DATASET_SYNCS, DatasetSync
from .report import BatchSyncReport, SyncReport, SyncResult
from .watermark import utcnow

logger = logging.getLogger(__name__)


class SynchronizationService:
    """
    Runs dataset synchronizers for one or many symbols.

    Clients are keyed by vendor ("chartexchange", "finra"); a dataset whose
    vendor has no client fails with a SyncError in its result.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        clients: Dict[str, VendorDataClient],
        config: Optional[SyncConfig] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.clients = clients
        self.config = config or SyncConfig()
        self.clock = clock

    def build(self, dataset: str) -> DatasetSync:
        sync_cls = DATASET_SYNCS.get(dataset)
        if sync_cls is None:
            raise SyncError(f"Unknown dataset '{dataset}'")
        client = self.clients.get(sync_cls.vendor)
        if client is None:
            raise SyncError(f"No {sync_cls.vendor} client configured for '{dataset}'")
        return sync_cls(client, self.session_factory, clock=self.clock)

    async def synchronize(self, symbol: str, datasets: Optional[Iterable[str]] = None) -> SyncReport:
        """Synchronize the datasets of one symbol, one after another."""
        symbol = normalize_symbol(symbol)
        report = SyncReport(symbol=symbol)
        for dataset in datasets or self.config.datasets:
            try:
                sync = self.build(dataset)
            except SyncError as e:
                logger.error(f"{symbol}: {e}")
                now = self.clock()
                report.add(
                    SyncResult(
                        dataset=dataset,
                        symbol=symbol,
                        success=False,
                        error=str(e),
                        started_at=now,
                        finished_at=now,
                    )
                )
                continue
            report.add(await sync.synchronize(symbol))

        logger.info(
            f"{symbol}: {report.inserted} records inserted, "
            f"{len(report.failures)} dataset(s) failed"
        )
        return report

    async def synchronize_many(
        self, symbols: List[str], datasets: Optional[Iterable[str]] = None
    ) -> BatchSyncReport:
        datasets = list(datasets) if datasets else None
        batch = BatchSyncReport()

        iterator = tqdm(symbols, desc="Synchronizing tickers")
        for index, symbol in enumerate(iterator):
            iterator.set_postfix(symbol=symbol)
            batch.add(await self.synchronize(symbol, datasets))
            if self.config.delay_between_symbols and index < len(symbols) - 1:
                await asyncio.sleep(self.config.delay_between_symbols)

        return batch

    async def close(self) -> None:
        for client in self.clients.values():
            await client.close()


def default_clients() -> Dict[str, VendorDataClient]:
    """Vendor clients configured from the environment."""
    return {
        ChartExchangeClient.vendor: ChartExchangeClient(),
        FinraClient.vendor: FinraClient(),
    }
