import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from stockdata import __version__
from stockdata.config import ApiConfig, load_api_config
from stockdata.db.session import create_tables
from stockdata.ingestion.service import SynchronizationService, default_clients
from stockdata.logging_config import configure_logging
from .cache import TTLCache
from .routes import router

logger = logging.getLogger(__name__)


def create_app(
    engine: Optional[AsyncEngine] = None,
    session_factory: Optional[async_sessionmaker] = None,
    service: Optional[SynchronizationService] = None,
    config: Optional[ApiConfig] = None,
) -> FastAPI:
    """
    Build the query API.

    Without arguments the module-level engine and session factory are used
    and vendor clients are configured from the environment.
    """
    if engine is None or session_factory is None:
        from stockdata.db.session import SessionLocal, engine as default_engine

        engine = engine or default_engine
        session_factory = session_factory or SessionLocal
    config = config or load_api_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        await create_tables(engine)
        if app.state.service is None:
            app.state.service = SynchronizationService(session_factory, default_clients())
        logger.info("Stock data API started")
        yield
        await app.state.service.close()

    app = FastAPI(
        title="Stock short data API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory
    app.state.service = service
    app.state.cache = TTLCache(config.cache_ttl_seconds)
    app.include_router(router, prefix="/api")
    return app
