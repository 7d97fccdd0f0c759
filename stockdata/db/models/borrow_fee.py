from sqlalchemy import Column, BigInteger, Integer, Numeric
from .base import Base
from .data_point import StockDataPoint


class BorrowFee(StockDataPoint, Base):
    __tablename__ = "borrow_fee"
    dataset = "borrow_fee"

    available = Column(BigInteger, nullable=False, default=0)
    fee = Column(Numeric(18, 6), nullable=False, default=0)
    rebate = Column(Numeric(18, 6), nullable=False, default=0)


class BorrowFeeDaily(StockDataPoint, Base):
    """Daily OHLC of the intraday borrow fee readings."""

    __tablename__ = "borrow_fee_daily"
    dataset = "borrow_fee_daily"

    open = Column(Numeric(18, 6), nullable=False)
    high = Column(Numeric(18, 6), nullable=False)
    low = Column(Numeric(18, 6), nullable=False)
    close = Column(Numeric(18, 6), nullable=False)
    average = Column(Numeric(18, 6), nullable=False)
    data_point_count = Column(Integer, nullable=False)
    max_available = Column(BigInteger, nullable=False)
    min_available = Column(BigInteger, nullable=False)
    average_available = Column(BigInteger, nullable=False)
