import re
from typing import Optional

from default import DEFAULT

# Letters and digits, optionally one slash for pairs: EURUSD, EUR/USD, DE30EU.
MARKET_FORMAT = re.compile(r"^[A-Z0-9]+(/[A-Z0-9]+)?$")


def normalize_market(value: str) -> str:
    return value.strip().upper()


def is_valid_market(value: str) -> bool:
    return get_market_validation_error(value) is None


def get_market_validation_error(value: str) -> Optional[str]:
    """
    Returns a user-facing message describing why the market symbol is
    rejected, or None when it is acceptable.
    """
    if not value or not value.strip():
        return "Market is required."
    normalized = normalize_market(value)
    if len(normalized) < DEFAULT.market_min_length:
        return f"Market must be at least {DEFAULT.market_min_length} characters."
    if len(normalized) > DEFAULT.market_max_length:
        return f"Market must be at most {DEFAULT.market_max_length} characters."
    if not MARKET_FORMAT.match(normalized):
        return (
            "Use only letters and numbers, or a pair with one slash "
            "(e.g. EURUSD, EUR/USD, DE30EU)."
        )
    return None
