from sqlalchemy import Column, String, Numeric, DateTime, Text
from .base import Base
from .data_point import StockDataPoint


class RedditMention(StockDataPoint, Base):
    __tablename__ = "reddit_mentions"
    dataset = "reddit_mentions"

    subreddit = Column(String(100))
    created = Column(DateTime, nullable=False)
    sentiment = Column(Numeric(10, 6), nullable=True)
    author = Column(String(100), nullable=True)
    text = Column(Text, nullable=True)
    link = Column(String(500), nullable=True)
    thing_id = Column(String(50), nullable=True)
    thing_type = Column(String(20), nullable=True)
