from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from stockdata.db.models import DATASET_MODELS
from stockdata.db.models.data_point import StockDataPoint
from stockdata.db.repositories.series_repo import TimeSeriesRepository
from stockdata.db.repositories.ticker_repo import TickerRepository, normalize_symbol

router = APIRouter()


async def get_session(request: Request):
    async with request.app.state.session_factory() as session:
        yield session


def to_dict(record: Any) -> Dict[str, Any]:
    return jsonable_encoder({c.name: getattr(record, c.name) for c in record.__table__.columns})


def resolve_model(dataset: str):
    model = DATASET_MODELS.get(dataset)
    if model is None:
        raise HTTPException(status_code=404, detail=f"Unknown dataset '{dataset}'")
    return model


async def require_ticker(session: AsyncSession, symbol: str) -> str:
    symbol = normalize_symbol(symbol)
    if not await TickerRepository(session).exists(symbol):
        raise HTTPException(status_code=404, detail=f"Unknown ticker '{symbol}'")
    return symbol


@router.get("/tickers")
async def list_tickers(session: AsyncSession = Depends(get_session)) -> List[Dict[str, Any]]:
    tickers = await TickerRepository(session).get_all(limit=10000)
    return [to_dict(t) for t in sorted(tickers, key=lambda t: t.symbol)]


@router.get("/tickers/{symbol}")
async def get_ticker(symbol: str, session: AsyncSession = Depends(get_session)) -> Dict[str, Any]:
    symbol = normalize_symbol(symbol)
    ticker = await TickerRepository(session).get(symbol)
    if ticker is None:
        raise HTTPException(status_code=404, detail=f"Unknown ticker '{symbol}'")
    return to_dict(ticker)


@router.post("/tickers/{symbol}", status_code=status.HTTP_201_CREATED)
async def add_ticker(
    symbol: str,
    exchange: Optional[str] = None,
    name: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
) -> Dict[str, Any]:
    ticker = await TickerRepository(session).get_or_create(symbol, exchange=exchange, name=name, commit=True)
    await session.refresh(ticker)
    return to_dict(ticker)


@router.delete("/tickers/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticker(request: Request, symbol: str, session: AsyncSession = Depends(get_session)):
    symbol = normalize_symbol(symbol)
    if not await TickerRepository(session).delete(symbol):
        raise HTTPException(status_code=404, detail=f"Unknown ticker '{symbol}'")
    await request.app.state.cache.invalidate_symbol(symbol)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/data/{dataset}/{symbol}")
async def get_series(
    request: Request,
    dataset: str,
    symbol: str,
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    session: AsyncSession = Depends(get_session),
) -> List[Dict[str, Any]]:
    """Rows of a dataset for one ticker, oldest first."""
    model = resolve_model(dataset)
    symbol = await require_ticker(session, symbol)

    cache = request.app.state.cache
    key = (dataset, symbol, start, end)
    cached = await cache.get(key)
    if cached is not None:
        return cached

    rows = await TimeSeriesRepository(session, model).get_by_symbol(symbol, start=start, end=end)
    payload = [to_dict(r) for r in rows]
    await cache.set(key, payload)
    return payload


@router.get("/data/{dataset}/{symbol}/latest")
async def get_latest(dataset: str, symbol: str, session: AsyncSession = Depends(get_session)) -> Dict[str, Any]:
    model = resolve_model(dataset)
    symbol = await require_ticker(session, symbol)
    record: Optional[StockDataPoint] = await TimeSeriesRepository(session, model).get_latest(symbol)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No {dataset} data for '{symbol}'")
    return to_dict(record)


@router.post("/sync/{symbol}")
async def synchronize(
    request: Request,
    symbol: str,
    dataset: Optional[List[str]] = Query(None),
) -> Dict[str, Any]:
    """
    Synchronize one ticker. Answers 200 even when datasets failed; each
    result carries its own `success` and `error`.
    """
    symbol = normalize_symbol(symbol)
    report = await request.app.state.service.synchronize(symbol, dataset)
    await request.app.state.cache.invalidate_symbol(symbol)
    return jsonable_encoder(report.model_dump())
