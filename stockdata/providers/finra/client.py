from typing import Any, Dict, Optional, Tuple

import httpx

from stockdata.config import FinraConfig, load_finra_config
from stockdata.errors import ConfigurationError
from ..base import VendorDataClient

SHORT_INTEREST_ENDPOINT = "/data/group/otcMarket/name/consolidatedShortInterest"


class FinraClient(VendorDataClient):
    """
    FINRA regulatory data client.

    Uses an already issued bearer token; pages map to limit/offset.
    """

    vendor = "finra"

    def __init__(
        self,
        config: Optional[FinraConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or load_finra_config()
        super().__init__(
            base_url=self.config.base_url,
            timeout_seconds=self.config.timeout_seconds,
            page_size=self.config.page_size,
            transport=transport,
        )

    def build_request(
        self, symbol: str, endpoint: str, page: int, page_size: int
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        if not self.config.access_token:
            raise ConfigurationError("FINRA_ACCESS_TOKEN is not set")
        params = {
            "symbolCode": symbol,
            "limit": page_size,
            "offset": (page - 1) * page_size,
        }
        headers = {
            "Authorization": f"Bearer {self.config.access_token}",
            "Accept": "application/json",
        }
        return endpoint, params, headers
