import asyncio
import sys
import os

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from stockdata.db.session import engine, SessionLocal, create_tables
from stockdata.db.repositories.ticker_repo import TickerRepository
from stockdata.logging_config import configure_logging

DEFAULT_TICKERS = ["AAPL", "MSFT", "GME", "AMC", "TSLA"]


async def init_db(symbols):
    print("Creating tables...")
    await create_tables(engine)

    async with SessionLocal() as session:
        repo = TickerRepository(session)
        for symbol in symbols:
            await repo.get_or_create(symbol)
        await session.commit()
        stored = await repo.list_symbols()

    await engine.dispose()
    print(f"Tickers in database: {', '.join(stored)}")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Create tables and seed tickers")
    parser.add_argument("symbols", nargs="*", default=DEFAULT_TICKERS, help="Ticker symbols to seed")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(init_db(args.symbols))
