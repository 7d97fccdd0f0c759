"""Response shapes of the ChartExchange API."""

from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

# Numbers arrive as strings, numbers, "N/A" or null depending on the endpoint
NumericText = Optional[Union[str, int, float]]


class PagedResponse(BaseModel, Generic[T]):
    """
    Paged envelope: {data, results, page, total_pages, count, status}.

    Endpoints fill either `results` or `data`; `results` wins when present.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Optional[List[T]] = None
    results: Optional[List[T]] = None
    page: Optional[int] = None
    page_count: Optional[int] = Field(None, alias="total_pages")
    count: Optional[int] = None
    status: Optional[Union[str, int]] = None
    message: Optional[str] = None

    def items(self) -> List[T]:
        if self.results is not None:
            return self.results
        return self.data or []

    def total_pages(self) -> int:
        return self.page_count or 0


class ShortInterestData(BaseModel):
    date: str
    short_interest: NumericText = None
    short_position: Optional[int] = None
    days_to_cover: NumericText = None
    change_number: Optional[int] = None
    change_percent: NumericText = None


class ShortVolumeData(BaseModel):
    date: str
    rt: int = 0
    st: int = 0
    lt: int = 0
    fs: int = 0
    fse: int = 0
    xnas: int = 0
    xphl: int = 0
    xnys: int = 0
    arcx: int = 0
    xcis: int = 0
    xase: int = 0
    xchi: int = 0
    edgx: int = 0
    bats: int = 0
    edga: int = 0
    baty: int = 0


class BorrowFeeData(BaseModel):
    timestamp: str
    available: Optional[int] = None
    fee: NumericText = None
    rebate: NumericText = None


class FailureToDeliverData(BaseModel):
    date: str
    failure_to_deliver: Optional[int] = None
    price: NumericText = None
    volume: Optional[int] = None
    settlement_date: Optional[str] = None
    cusip: Optional[str] = None
    company_name: Optional[str] = None


class RedditMentionData(BaseModel):
    symbol: Optional[str] = None
    subreddit: Optional[str] = None
    created: str
    sentiment: NumericText = None
    thing_id: Optional[str] = None
    thing_type: Optional[str] = None
    author: Optional[str] = None
    text: Optional[str] = None
    link: Optional[str] = None


class StockSplitData(BaseModel):
    date: str
    split_ratio: Optional[str] = None
    from_factor: NumericText = None
    to_factor: NumericText = None
    ex_date: Optional[str] = None
    record_date: Optional[str] = None
    payable_date: Optional[str] = None
    announcement_date: Optional[str] = None
    company_name: Optional[str] = None


class OptionChainData(BaseModel):
    """One contract row; only the summary is persisted."""

    model_config = ConfigDict(extra="allow")

    strike: NumericText = None
    expiration: Optional[str] = None
    type: Optional[str] = None
    volume: Optional[int] = None
    open_interest: Optional[int] = None


class OptionChainSummaryData(BaseModel):
    total_call_volume: int = 0
    total_put_volume: int = 0
    total_call_open_interest: int = 0
    total_put_open_interest: int = 0
    put_call_volume_ratio: NumericText = None
    put_call_open_interest_ratio: NumericText = None
    max_pain: NumericText = None
    total_implied_volatility: NumericText = None


ShortVolumeResponse = PagedResponse[ShortVolumeData]
BorrowFeeResponse = PagedResponse[BorrowFeeData]
RedditMentionsResponse = PagedResponse[RedditMentionData]
StockSplitResponse = PagedResponse[StockSplitData]


class OptionChainResponse(PagedResponse[OptionChainData]):
    summary: Optional[OptionChainSummaryData] = None
