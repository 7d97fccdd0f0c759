from .base import PageOrder, PagedItemSource, VendorDataClient
from .chartexchange.client import ChartExchangeClient
from .finra.client import FinraClient

__all__ = ["PageOrder", "PagedItemSource", "VendorDataClient", "ChartExchangeClient", "FinraClient"]
