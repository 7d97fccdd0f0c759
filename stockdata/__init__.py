"""Short interest, short volume and borrow fee ingestion for the charting dashboard."""

__version__ = "0.1.0"
