from .client import ChartExchangeClient

__all__ = ["ChartExchangeClient"]
