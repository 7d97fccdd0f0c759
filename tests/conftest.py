import json
from datetime import datetime
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from stockdata.config import ChartExchangeConfig, FinraConfig
from stockdata.db.session import create_engine, create_session_factory, create_tables
from stockdata.providers.chartexchange.client import ChartExchangeClient
from stockdata.providers.finra.client import FinraClient

BASE_URL = "https://vendor.test"


class VendorStub:
    """
    Canned vendor answers keyed by (path, page).

    Unknown routes answer 404. Every request is recorded.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, int], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, payload: Any, page: int = 1, status: int = 200) -> None:
        self.routes[(path, page)] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = int(request.url.params.get("page", "1"))
        if "offset" in request.url.params:
            limit = int(request.url.params["limit"])
            page = int(request.url.params["offset"]) // limit + 1
        status, payload = self.routes.get((request.url.path, page), (404, "not found"))
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, content=json.dumps(payload))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def vendor():
    return VendorStub()


@pytest.fixture
def chartexchange(vendor):
    config = ChartExchangeConfig(api_key="test-key", base_url=BASE_URL, page_size=3)
    return ChartExchangeClient(config, transport=vendor.transport())


@pytest.fixture
def finra(vendor):
    config = FinraConfig(access_token="test-token", base_url=BASE_URL, page_size=100)
    return FinraClient(config, transport=vendor.transport())


@pytest.fixture
async def engine():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def frozen_clock():
    return lambda: datetime(2024, 1, 10, 12, 0, 0)


def _borrow_fee_page(readings, page=1, total_pages=1):
    return {
        "data": [
            {"timestamp": ts, "available": 1000 * (i + 1), "fee": fee, "rebate": "0.1"}
            for i, (ts, fee) in enumerate(readings)
        ],
        "page": page,
        "total_pages": total_pages,
        "count": len(readings),
        "status": "ok",
    }


@pytest.fixture
def borrow_fee_page():
    """Build a paged borrow fee envelope from (timestamp, fee) pairs."""
    return _borrow_fee_page

