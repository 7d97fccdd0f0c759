import pytest
from datetime import datetime
from decimal import Decimal

from stockdata.config import ChartExchangeConfig, FinraConfig
from stockdata.errors import ConfigurationError, DateParseError, DecodeError, RemoteError
from stockdata.normalize import mappers
from stockdata.providers.base import PagedItemSource
from stockdata.providers.chartexchange import responses
from stockdata.providers.chartexchange.client import ChartExchangeClient
from stockdata.providers.finra.client import FinraClient, SHORT_INTEREST_ENDPOINT
from stockdata.providers.finra.responses import FinraShortInterestData

ENDPOINT = "/data/stocks/borrow-fee/ib/"
PATH = "/api/v1" + ENDPOINT


def never(page):
    return False


async def fetch_borrow_fees(client, should_stop=never):
    result = await client.fetch_until(
        "AAPL", ENDPOINT, responses.BorrowFeeResponse, mappers.map_borrow_fee, should_stop
    )
    return result.records

# --- Page requests ---

async def test_page_request_parameters(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.5")]))

    await fetch_borrow_fees(chartexchange)

    request = vendor.requests[0]
    assert request.url.path == PATH
    assert request.url.params["symbol"] == "AAPL"
    assert request.url.params["api_key"] == "test-key"
    assert request.url.params["page_size"] == "3"
    assert request.url.params["page"] == "1"

def test_logged_url_hides_api_key(chartexchange):
    url = chartexchange.masked_url(PATH, {"symbol": "AAPL", "api_key": "test-key", "page": 1})
    assert "test-key" not in url
    assert "api_key=***" in url

async def test_missing_api_key_sends_nothing(vendor):
    client = ChartExchangeClient(
        ChartExchangeConfig(api_key=None, base_url="https://vendor.test"), transport=vendor.transport()
    )
    page = await client.fetch_page("AAPL", ENDPOINT, 1, 10, responses.BorrowFeeResponse)

    assert page is None
    assert vendor.requests == []

async def test_remote_error_returns_none(chartexchange, vendor):
    vendor.add(PATH, "upstream exploded", status=502)
    assert await chartexchange.fetch_page("AAPL", ENDPOINT, 1, 3, responses.BorrowFeeResponse) is None

async def test_undecodable_body_returns_none(chartexchange, vendor):
    vendor.add(PATH, "<html>maintenance</html>")
    assert await chartexchange.fetch_page("AAPL", ENDPOINT, 1, 3, responses.BorrowFeeResponse) is None

async def test_unexpected_shape_returns_none(chartexchange, vendor):
    vendor.add(PATH, {"data": "not a list", "total_pages": 1})
    assert await chartexchange.fetch_page("AAPL", ENDPOINT, 1, 3, responses.BorrowFeeResponse) is None

# --- Pagination ---

async def test_empty_page_ends_pagination(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.5")], total_pages=5))
    vendor.add(PATH, borrow_fee_page([], page=2, total_pages=5), page=2)

    records = await fetch_borrow_fees(chartexchange)

    assert len(records) == 1
    assert len(vendor.requests) == 2

async def test_clean_stop_has_no_error(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.5")]))

    result = await chartexchange.fetch_until(
        "AAPL", ENDPOINT, responses.BorrowFeeResponse, mappers.map_borrow_fee, never
    )

    assert result.complete
    assert result.error is None

async def test_stop_predicate_wins_over_total_pages(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.5")], total_pages=10))
    vendor.add(PATH, borrow_fee_page([("2024-01-02 10:00:00", "1.4")], page=2, total_pages=10), page=2)

    records = await fetch_borrow_fees(chartexchange, should_stop=lambda page: True)

    assert len(records) == 1
    assert len(vendor.requests) == 1

async def test_stops_on_last_page(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.5")], total_pages=2))
    vendor.add(PATH, borrow_fee_page([("2024-01-02 10:00:00", "1.4")], page=2, total_pages=2), page=2)

    records = await fetch_borrow_fees(chartexchange)

    assert [r.fee for r in records] == [Decimal("1.5"), Decimal("1.4")]
    assert len(vendor.requests) == 2

async def test_failed_page_keeps_earlier_results(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-05 10:00:00", "1.5"), ("2024-01-04 10:00:00", "1.4")], total_pages=4))
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.3")], page=2, total_pages=4), page=2)
    vendor.add(PATH, "internal error", page=3, status=500)

    result = await chartexchange.fetch_until(
        "AAPL", ENDPOINT, responses.BorrowFeeResponse, mappers.map_borrow_fee, never
    )

    assert len(result.records) == 3
    assert len(vendor.requests) == 3
    assert not result.complete
    assert isinstance(result.error, RemoteError)
    assert result.error.status_code == 500

async def test_records_are_stamped(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("2024-01-03 10:00:00", "1.5")], total_pages=2))
    vendor.add(PATH, borrow_fee_page([("2024-01-02 10:00:00", "1.4")], page=2, total_pages=2), page=2)

    records = await fetch_borrow_fees(chartexchange)

    assert {r.symbol for r in records} == {"AAPL"}
    assert len({r.request_id for r in records}) == 1
    # YYYY-MM-DDTHH:MM:SS
    datetime.strptime(records[0].request_id, "%Y-%m-%dT%H:%M:%S")

async def test_results_field_is_preferred(chartexchange, vendor):
    vendor.add(
        PATH,
        {
            "data": [{"timestamp": "2024-01-01 10:00:00", "fee": "9.9"}],
            "results": [{"timestamp": "2024-01-03 10:00:00", "fee": "1.5"}],
            "total_pages": 1,
        },
    )
    records = await fetch_borrow_fees(chartexchange)

    assert [r.fee for r in records] == [Decimal("1.5")]

async def test_mapper_errors_propagate(chartexchange, vendor, borrow_fee_page):
    vendor.add(PATH, borrow_fee_page([("03/01/2024", "1.5")]))

    with pytest.raises(DateParseError):
        await fetch_borrow_fees(chartexchange)

# --- Single page and flat arrays ---

async def test_fetch_single_page(chartexchange, vendor):
    vendor.add(
        "/api/v1/data/stocks/splits/",
        {"results": [{"date": "2020-08-31", "from_factor": 1, "to_factor": 4}], "total_pages": 3},
    )
    result = await chartexchange.fetch_single_page(
        "AAPL",
        "/data/stocks/splits/",
        responses.StockSplitResponse,
        lambda response: [mappers.map_stock_split(i) for i in response.items()],
    )
    records = result.records

    assert len(records) == 1
    assert records[0].symbol == "AAPL"
    assert len(vendor.requests) == 1

async def test_fetch_array(chartexchange, vendor):
    vendor.add(
        "/api/v1/data/stocks/short-interest/",
        [
            {"date": "2024-01-12", "short_interest": "0.7", "short_position": 100},
            {"date": "2023-12-29", "short_interest": "0.6", "short_position": 90},
        ],
    )
    result = await chartexchange.fetch_array(
        "AAPL", "/data/stocks/short-interest/", responses.ShortInterestData, mappers.map_short_interest
    )
    records = result.records

    assert result.complete
    assert [r.short_position for r in records] == [100, 90]
    assert records[0].request_id == records[1].request_id

async def test_fetch_array_rejects_envelope(chartexchange, vendor):
    vendor.add("/api/v1/data/stocks/short-interest/", {"data": []})
    result = await chartexchange.fetch_array(
        "AAPL", "/data/stocks/short-interest/", responses.ShortInterestData, mappers.map_short_interest
    )
    assert result.records == []
    assert isinstance(result.error, DecodeError)

# --- FINRA ---

async def test_finra_request(finra, vendor):
    vendor.add(SHORT_INTEREST_ENDPOINT, [{"settlementDate": "2024-01-12", "currentShortPositionQuantity": 10}])

    result = await finra.fetch_array(
        "AAPL", SHORT_INTEREST_ENDPOINT, FinraShortInterestData, mappers.map_finra_short_interest
    )
    records = result.records

    request = vendor.requests[0]
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.url.params["symbolCode"] == "AAPL"
    assert request.url.params["limit"] == "100"
    assert request.url.params["offset"] == "0"
    assert records[0].short_interest == 10

async def test_finra_without_token(vendor):
    client = FinraClient(FinraConfig(access_token=None, base_url="https://vendor.test"), transport=vendor.transport())
    result = await client.fetch_array(
        "AAPL", SHORT_INTEREST_ENDPOINT, FinraShortInterestData, mappers.map_finra_short_interest
    )
    assert result.records == []
    assert isinstance(result.error, ConfigurationError)
    assert vendor.requests == []

def test_envelopes_are_paged_item_sources():
    page = responses.BorrowFeeResponse.model_validate({"results": [], "total_pages": 4})
    assert isinstance(page, PagedItemSource)
    assert page.items() == []
    assert page.total_pages() == 4
