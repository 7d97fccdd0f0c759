from .parsing import (
    parse_date,
    parse_optional_date,
    parse_decimal_or_zero,
    percent_of,
    numeric_fallback_count,
)

__all__ = [
    "parse_date",
    "parse_optional_date",
    "parse_decimal_or_zero",
    "percent_of",
    "numeric_fallback_count",
]
