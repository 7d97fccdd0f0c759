from sqlalchemy import Column, BigInteger, Numeric
from .base import Base
from .data_point import StockDataPoint


class OptionChainSummary(StockDataPoint, Base):
    """One aggregated option chain summary per symbol and day."""

    __tablename__ = "option_chain_summary"
    dataset = "option_chain"

    total_call_volume = Column(BigInteger, nullable=False, default=0)
    total_put_volume = Column(BigInteger, nullable=False, default=0)
    total_call_open_interest = Column(BigInteger, nullable=False, default=0)
    total_put_open_interest = Column(BigInteger, nullable=False, default=0)
    put_call_volume_ratio = Column(Numeric(18, 6), nullable=False, default=0)
    put_call_open_interest_ratio = Column(Numeric(18, 6), nullable=False, default=0)
    max_pain = Column(Numeric(18, 6), nullable=True)
    total_implied_volatility = Column(Numeric(18, 6), nullable=True)
