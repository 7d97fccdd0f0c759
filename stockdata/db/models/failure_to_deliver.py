from sqlalchemy import Column, String, BigInteger, Numeric, DateTime
from .base import Base
from .data_point import StockDataPoint


class FailureToDeliver(StockDataPoint, Base):
    __tablename__ = "failure_to_deliver"
    dataset = "failure_to_deliver"

    failure_to_deliver = Column(BigInteger, nullable=False, default=0)
    price = Column(Numeric(18, 6), nullable=False, default=0)
    volume = Column(BigInteger, nullable=False, default=0)
    settlement_date = Column(DateTime, nullable=True)
    cusip = Column(String(20), nullable=True)
    company_name = Column(String(255), nullable=True)
