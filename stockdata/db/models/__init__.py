from .base import Base
from .ticker import StockTicker
from .data_point import StockDataPoint
from .short_interest import ShortInterest
from .short_volume import ShortVolume
from .borrow_fee import BorrowFee, BorrowFeeDaily
from .failure_to_deliver import FailureToDeliver
from .reddit_mentions import RedditMention
from .option_chain import OptionChainSummary
from .stock_split import StockSplit
from .finra_short_interest import FinraShortInterest

DATASET_MODELS = {
    model.dataset: model
    for model in (
        ShortInterest,
        ShortVolume,
        BorrowFee,
        BorrowFeeDaily,
        FailureToDeliver,
        RedditMention,
        OptionChainSummary,
        StockSplit,
        FinraShortInterest,
    )
}
