import asyncio
import sys
import os

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from stockdata.db.session import engine, SessionLocal, create_tables
from stockdata.db.repositories.ticker_repo import TickerRepository
from stockdata.ingestion.config import SyncConfig
from stockdata.ingestion.service import SynchronizationService, default_clients
from stockdata.logging_config import configure_logging


async def sync(symbols=None, datasets=None, limit=None, delay=0.0):
    await create_tables(engine)

    if not symbols:
        print("Connecting to database...")
        async with SessionLocal() as session:
            symbols = await TickerRepository(session).list_symbols(limit=limit)
        print(f"Found {len(symbols)} tickers in the database.")

    if not symbols:
        print("No tickers found! Did you run scripts/init_db.py?")
        return

    service = SynchronizationService(
        SessionLocal,
        default_clients(),
        config=SyncConfig(delay_between_symbols=delay),
    )
    try:
        report = await service.synchronize_many(symbols, datasets)
    finally:
        await service.close()
        await engine.dispose()

    print("\nSynchronization Report:")
    print(f"Tickers: {len(report.attempted)}")
    print(f"Fully synchronized: {report.success_count}")
    print(f"With failures: {report.failure_count}")
    print(f"Records inserted: {report.inserted}")

    failures = [(r.symbol, r.failures) for r in report.reports if r.failures]
    if failures:
        print("Failures (first 5):", failures[:5])


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Synchronize stored tickers from the data vendors")
    parser.add_argument("--symbols", nargs="+", help="Symbols to synchronize (default: every stored ticker)")
    parser.add_argument("--dataset", action="append", help="Dataset to synchronize; repeat for several")
    parser.add_argument("--limit", type=int, help="Limit number of tickers to process")
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds to wait between tickers")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(sync(symbols=args.symbols, datasets=args.dataset, limit=args.limit, delay=args.delay))
