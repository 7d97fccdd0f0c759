from sqlalchemy import Column, BigInteger, Numeric
from .base import Base
from .data_point import StockDataPoint


class ShortInterest(StockDataPoint, Base):
    __tablename__ = "short_interest"
    dataset = "short_interest"

    short_interest_percent = Column(Numeric(18, 6), nullable=False, default=0)
    short_position = Column(BigInteger, nullable=False, default=0)
    days_to_cover = Column(Numeric(18, 6), nullable=False, default=0)
    change_number = Column(BigInteger, nullable=False, default=0)
    change_percent = Column(Numeric(18, 6), nullable=False, default=0)
