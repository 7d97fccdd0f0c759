from sqlalchemy import Column, String, DateTime, func
from .base import Base


class StockTicker(Base):
    __tablename__ = "tickers"

    symbol = Column(String(20), primary_key=True)
    exchange = Column(String(50), nullable=True)
    name = Column(String(255), nullable=True)
    last_updated = Column(DateTime, server_default=func.now(), onupdate=func.now())
