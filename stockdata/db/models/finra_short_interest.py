from sqlalchemy import Column, BigInteger, Numeric, DateTime
from .base import Base
from .data_point import StockDataPoint


class FinraShortInterest(StockDataPoint, Base):
    __tablename__ = "finra_short_interest"
    dataset = "finra_short_interest"

    short_interest = Column(BigInteger, nullable=False, default=0)
    previous_short_interest = Column(BigInteger, nullable=False, default=0)
    avg_daily_volume = Column(BigInteger, nullable=False, default=0)
    days_to_cover = Column(Numeric(18, 6), nullable=False, default=0)
    change_percent = Column(Numeric(18, 6), nullable=False, default=0)
    settlement_date = Column(DateTime, nullable=False)
