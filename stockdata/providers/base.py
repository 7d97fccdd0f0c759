"""
Vendor HTTP clients and the generic pagination driver.

Every dataset synchronizer goes through the same three entry points:
`fetch_until` for paged endpoints with a stop predicate, `fetch_single_page`
for envelope endpoints read once, and `fetch_array` for flat JSON arrays.
Each returns a `FetchResult`: the records mapped so far plus the vendor
failure, if any, that ended the fetch.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Type, TypeVar, runtime_checkable

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from stockdata.errors import ConfigurationError, DecodeError, RemoteError, StockDataError

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)
RecordT = TypeVar("RecordT")

MASK = "***"

# Failures that end a fetch without discarding what was already mapped
FETCH_ERRORS = (ConfigurationError, RemoteError, DecodeError)


class PageOrder(str, Enum):
    """Order in which a paged endpoint returns records."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


@runtime_checkable
class PagedItemSource(Protocol):
    """A decoded page that can hand out its items and the page count."""

    def items(self) -> List[Any]:
        ...

    def total_pages(self) -> int:
        ...


@dataclass
class FetchResult:
    """Records fetched from a vendor and the error that cut the fetch short."""

    records: List[Any] = field(default_factory=list)
    error: Optional[StockDataError] = None

    @property
    def complete(self) -> bool:
        return self.error is None


def request_timestamp() -> str:
    """UTC timestamp shared by every record of one pagination run."""
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="seconds")


def stamp(records: List[Any], symbol: str, request_id: str) -> List[Any]:
    for record in records:
        record.symbol = symbol
        record.request_id = request_id
    return records


class VendorDataClient(ABC):
    """
    Base class for market-data vendors.

    Subclasses decide how a page request looks (`build_request`); fetching,
    decoding and pagination are shared. Vendor failures are logged and
    returned, never raised; mapper errors propagate.
    """

    vendor: str = "vendor"
    secret_params: Tuple[str, ...] = ()

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        page_size: int = 1000,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    @abstractmethod
    def build_request(
        self, symbol: str, endpoint: str, page: int, page_size: int
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        """
        Return (path, query params, headers) for one page.

        Raises:
            ConfigurationError: when the vendor credential is missing
        """

    def masked_url(self, path: str, params: Dict[str, Any]) -> str:
        shown = {k: (MASK if k in self.secret_params else v) for k, v in params.items()}
        query = "&".join(f"{k}={v}" for k, v in shown.items())
        return f"{self.base_url}{path}?{query}"

    async def _get_json(self, symbol: str, endpoint: str, page: int, page_size: int) -> Any:
        """
        Issue one GET and return the decoded JSON body.

        Raises:
            ConfigurationError: when the credential is missing; nothing is sent
            RemoteError: on transport failures and non-2xx answers
            DecodeError: when the body is not JSON
        """
        path, params, headers = self.build_request(symbol, endpoint, page, page_size)

        logger.info(f"{self.vendor}: requesting {endpoint} for {symbol} (page {page})")
        logger.debug(f"{self.vendor}: GET {self.masked_url(path, params)}")

        try:
            response = await self._client.get(path, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise RemoteError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise RemoteError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(f"{self.vendor}: received {len(response.content)} bytes")
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON from {endpoint}: {e}") from e

    async def _get_page(
        self,
        symbol: str,
        endpoint: str,
        page: int,
        page_size: int,
        response_model: Type[ResponseT],
    ) -> ResponseT:
        payload = await self._get_json(symbol, endpoint, page, page_size)
        try:
            return response_model.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(f"{endpoint} did not match {response_model.__name__}: {e}") from e

    def _log_failure(self, symbol: str, endpoint: str, error: Exception) -> None:
        body = getattr(error, "body", None)
        detail = f": {body[:500]}" if body else ""
        logger.error(f"{self.vendor}: {endpoint} ({symbol}) failed: {type(error).__name__}: {error}{detail}")

    async def fetch_page(
        self,
        symbol: str,
        endpoint: str,
        page: int,
        page_size: int,
        response_model: Type[ResponseT],
    ) -> Optional[ResponseT]:
        """Fetch and decode one page; None when anything went wrong."""
        try:
            return await self._get_page(symbol, endpoint, page, page_size, response_model)
        except FETCH_ERRORS as e:
            self._log_failure(symbol, endpoint, e)
            return None

    async def fetch_until(
        self,
        symbol: str,
        endpoint: str,
        response_model: Type[ResponseT],
        map_item: Callable[[Any], RecordT],
        should_stop: Callable[[List[RecordT]], bool],
        page_size: Optional[int] = None,
    ) -> FetchResult:
        """
        Walk pages from 1 until a page fails, comes back empty, satisfies
        `should_stop`, or the last page is reached.

        Records collected before a failing page are kept and the failure is
        carried in `FetchResult.error`. Exceptions raised by `map_item`
        propagate.
        """
        page_size = page_size or self.page_size
        request_id = request_timestamp()
        result = FetchResult()
        page = 1

        while True:
            try:
                response = await self._get_page(symbol, endpoint, page, page_size, response_model)
            except FETCH_ERRORS as e:
                self._log_failure(symbol, endpoint, e)
                result.error = e
                break

            items = response.items()
            if not items:
                break

            page_records = stamp([map_item(item) for item in items], symbol, request_id)
            result.records.extend(page_records)
            total_pages = response.total_pages()
            logger.info(
                f"{self.vendor}: {endpoint} {symbol} page {page}/{total_pages}: "
                f"{len(page_records)} records ({len(result.records)} total)"
            )

            if should_stop(page_records):
                break
            if page >= total_pages:
                break
            page += 1

        return result

    async def fetch_single_page(
        self,
        symbol: str,
        endpoint: str,
        response_model: Type[ResponseT],
        map_response: Callable[[ResponseT], List[RecordT]],
    ) -> FetchResult:
        """Fetch page 1 once and map the whole response."""
        try:
            response = await self._get_page(symbol, endpoint, 1, self.page_size, response_model)
        except FETCH_ERRORS as e:
            self._log_failure(symbol, endpoint, e)
            return FetchResult(error=e)
        return FetchResult(stamp(map_response(response), symbol, request_timestamp()))

    async def fetch_array(
        self,
        symbol: str,
        endpoint: str,
        item_model: Type[BaseModel],
        map_item: Callable[[Any], RecordT],
    ) -> FetchResult:
        """Fetch page 1 of a flat JSON array endpoint and map every item."""
        try:
            payload = await self._get_json(symbol, endpoint, 1, self.page_size)
            try:
                items = TypeAdapter(List[item_model]).validate_python(payload)
            except ValidationError as e:
                raise DecodeError(f"{endpoint} is not a list of {item_model.__name__}: {e}") from e
        except FETCH_ERRORS as e:
            self._log_failure(symbol, endpoint, e)
            return FetchResult(error=e)
        logger.info(f"{self.vendor}: {endpoint} {symbol}: {len(items)} records")
        return FetchResult(stamp([map_item(item) for item in items], symbol, request_timestamp()))
