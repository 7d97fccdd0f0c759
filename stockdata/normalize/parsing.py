"""
Field parsers shared by the record mappers.

Dates are strict: a vendor date that does not match its format raises
DateParseError and aborts the run. Numbers are lenient: anything that is
not a number becomes zero, which is logged and counted.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from stockdata.errors import DateParseError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_fallback_count = 0


def parse_date(value: Optional[str], fmt: str = DATE_FORMAT) -> datetime:
    if not isinstance(value, str):
        raise DateParseError(value, fmt)
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        raise DateParseError(value, fmt) from None


def parse_optional_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a secondary date field; empty values are None."""
    if value is None or not str(value).strip():
        return None
    text = str(value).strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise DateParseError(value) from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_decimal_or_zero(value: Any) -> Decimal:
    if value is not None and not isinstance(value, bool):
        try:
            result = Decimal(str(value).strip())
            if result.is_finite():
                return result
        except InvalidOperation:
            pass
    _record_fallback(value)
    return Decimal(0)


def _record_fallback(value: Any) -> None:
    global _fallback_count
    _fallback_count += 1
    logger.debug(f"Numeric value {value!r} is not a number, using 0")


def numeric_fallback_count() -> int:
    """How many values have fallen back to zero in this process."""
    return _fallback_count


def percent_of(part: Union[int, Decimal], total: Union[int, Decimal]) -> Decimal:
    if total <= 0:
        return Decimal(0)
    return Decimal(part) / Decimal(total) * 100
