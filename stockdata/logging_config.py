import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and the API process.

    Level comes from the argument, then LOG_LEVEL, then INFO. httpx request
    lines are kept at WARNING since the clients log requests themselves.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
