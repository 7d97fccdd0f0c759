from datetime import date, datetime
from typing import List, Optional, Set, Type
from sqlalchemy import delete, select, func
from .base import BaseRepository
from .ticker_repo import TickerRepository, normalize_symbol
from stockdata.db.models.data_point import StockDataPoint


class TimeSeriesRepository(BaseRepository[StockDataPoint]):
    """Reads and writes for one dataset table."""

    def __init__(self, session, model: Type[StockDataPoint]):
        super().__init__(session, model)

    async def latest_date(self, symbol: str) -> Optional[datetime]:
        stmt = select(func.max(self.model.date)).where(self.model.symbol == normalize_symbol(symbol))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def existing_dates(self, symbol: str) -> Set[date]:
        """Calendar days that already have a row for the symbol."""
        stmt = select(self.model.date).where(self.model.symbol == normalize_symbol(symbol))
        result = await self.session.execute(stmt)
        return {d.date() for d in result.scalars().all()}

    async def get_by_symbol(
        self,
        symbol: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[StockDataPoint]:
        stmt = select(self.model).where(self.model.symbol == normalize_symbol(symbol))
        if start:
            stmt = stmt.where(self.model.date >= start)
        if end:
            stmt = stmt.where(self.model.date <= end)
        result = await self.session.execute(stmt.order_by(self.model.date))
        return list(result.scalars().all())

    async def get_latest(self, symbol: str) -> Optional[StockDataPoint]:
        stmt = (
            select(self.model)
            .where(self.model.symbol == normalize_symbol(symbol))
            .order_by(self.model.date.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count(self, symbol: str) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.model.symbol == normalize_symbol(symbol))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    def add_all(self, records: List[StockDataPoint]) -> None:
        """Stage records for insertion; the caller commits."""
        self.session.add_all(records)

    async def replace(self, symbol: str, records: List[StockDataPoint]) -> int:
        """
        Swap the stored rows of the records' days for the records.

        Only meant for derived tables whose rows are recomputed; vendor
        tables stay append-only. The caller commits.
        """
        if not records:
            return 0
        symbol = normalize_symbol(symbol)
        await TickerRepository(self.session).get_or_create(symbol)
        stmt = delete(self.model).where(
            self.model.symbol == symbol,
            self.model.date.in_([r.date for r in records]),
        )
        result = await self.session.execute(stmt)
        for record in records:
            record.symbol = symbol
        self.session.add_all(records)
        return result.rowcount
