from typing import List, Optional
from sqlalchemy import select
from .base import BaseRepository
from stockdata.db.models.ticker import StockTicker


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


class TickerRepository(BaseRepository[StockTicker]):
    def __init__(self, session):
        super().__init__(session, StockTicker)

    async def get(self, symbol: str) -> Optional[StockTicker]:
        return await self.session.get(StockTicker, normalize_symbol(symbol))

    async def exists(self, symbol: str) -> bool:
        return await self.get(symbol) is not None

    async def list_symbols(self, limit: Optional[int] = None) -> List[str]:
        stmt = select(StockTicker.symbol).order_by(StockTicker.symbol)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_or_create(
        self, symbol: str, exchange: Optional[str] = None, name: Optional[str] = None, commit: bool = False
    ) -> StockTicker:
        """Return the ticker, adding it to the session when missing."""
        symbol = normalize_symbol(symbol)
        ticker = await self.session.get(StockTicker, symbol)
        if ticker is None:
            ticker = StockTicker(symbol=symbol, exchange=exchange, name=name)
            self.session.add(ticker)
            await self.session.flush()
        if commit:
            await self.session.commit()
        return ticker

    async def delete(self, symbol: str) -> bool:
        """Delete a ticker; its time-series rows go with it (ON DELETE CASCADE)."""
        obj = await self.get(symbol)
        if obj:
            await self.session.delete(obj)
            await self.session.commit()
            return True
        return False
