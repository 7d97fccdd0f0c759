from typing import Any, Dict, Optional, Tuple

import httpx

from stockdata.config import ChartExchangeConfig, load_chartexchange_config
from stockdata.errors import ConfigurationError
from ..base import VendorDataClient


class ChartExchangeClient(VendorDataClient):
    """
    ChartExchange REST client.

    Pages are requested as
    `{base_url}/api/v1{endpoint}?symbol=..&api_key=..&page_size=..&page=..`.
    """

    vendor = "chartexchange"
    secret_params = ("api_key",)

    def __init__(
        self,
        config: Optional[ChartExchangeConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or load_chartexchange_config()
        super().__init__(
            base_url=self.config.base_url,
            timeout_seconds=self.config.timeout_seconds,
            page_size=self.config.page_size,
            transport=transport,
        )

    def build_request(
        self, symbol: str, endpoint: str, page: int, page_size: int
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        if not self.config.api_key:
            raise ConfigurationError("CHARTEXCHANGE_API_KEY is not set")
        params = {
            "symbol": symbol,
            "api_key": self.config.api_key,
            "page_size": page_size,
            "page": page,
        }
        return f"/api/v1{endpoint}", params, {}
