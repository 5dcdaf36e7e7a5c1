"""
Flag interpretation shared by the importer and the statistics views.

Every place that needs to know whether a trade liquidated a local high/low
goes through is_local_high_low_liquidated so the categorizations agree.
"""

import re
from typing import Iterable, List

WIN = "Win"
LOSE = "Lose"

LOSE_PATTERN = re.compile(r"^(lose|loss|l)$", re.IGNORECASE)


def is_local_high_low_liquidated(value) -> bool:
    """
    True for True, numeric 1, or exactly the strings "true"/"1" (any case,
    no surrounding whitespace).
    None, False, 0, "" and anything else count as not liquidated.
    """
    if value is True:
        return True
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).lower() in ("true", "1")


def is_lose_outcome(outcome_text: str) -> bool:
    return bool(LOSE_PATTERN.match(outcome_text or ""))


def filter_executed_trades(trades: Iterable) -> List:
    """Drop trades explicitly marked as not executed."""
    return [trade for trade in trades if trade.executed is not False]
