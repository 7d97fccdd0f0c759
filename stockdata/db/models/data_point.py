"""Shared columns of every time-series table."""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declared_attr


class StockDataPoint:
    """
    Mixin for dataset rows owned by a StockTicker.

    Rows are keyed by (symbol, date). `request_id` carries the UTC timestamp
    of the pagination run that fetched the row; every row of one run shares it.
    """

    dataset: str = ""

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False)
    request_id = Column(String(32))

    @declared_attr
    def symbol(cls):
        return Column(
            String(20),
            ForeignKey("tickers.symbol", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    @declared_attr
    def __table_args__(cls):
        return (
            UniqueConstraint("symbol", "date", name=f"uq_{cls.__tablename__}_symbol_date"),
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.symbol} {self.date}>"
