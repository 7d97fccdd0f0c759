from sqlalchemy import Column, String, Numeric, DateTime
from .base import Base
from .data_point import StockDataPoint


class StockSplit(StockDataPoint, Base):
    __tablename__ = "stock_split"
    dataset = "stock_splits"

    split_ratio = Column(String(20), nullable=False, default="")  # e.g. "2:1"
    split_factor = Column(Numeric(18, 6), nullable=False, default=0)
    from_factor = Column(Numeric(18, 6), nullable=False, default=0)
    to_factor = Column(Numeric(18, 6), nullable=False, default=0)
    ex_date = Column(DateTime, nullable=True)
    record_date = Column(DateTime, nullable=True)
    payable_date = Column(DateTime, nullable=True)
    announcement_date = Column(DateTime, nullable=True)
    company_name = Column(String(255), nullable=True)
