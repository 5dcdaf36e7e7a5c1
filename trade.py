from collections import namedtuple
from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class ParsedTrade:
    """
    A journal trade as produced by the CSV importer, before persistence
    assigns its identity fields.
    """
    trade_date: str = ""           # YYYY-MM-DD, or "" when the source had no date
    trade_time: str = "00:00:00"   # HH:MM[:SS]
    day_of_week: str = ""
    quarter: str = ""              # Q1..Q4
    market: str = ""
    direction: str = ""            # Long / Short
    setup_type: str = ""
    liquidity: str = ""
    mss: str = ""
    trend: Optional[str] = None
    strategy_id: Optional[str] = None
    trade_outcome: str = ""        # Win / Lose
    break_even: bool = False       # orthogonal to trade_outcome
    risk_per_trade: Optional[float] = None
    risk_reward_ratio: Optional[float] = None
    risk_reward_ratio_long: Optional[float] = None
    sl_size: Optional[float] = None
    reentry: bool = False
    news_related: bool = False
    local_high_low: Any = False    # bool, 1/0 or "true"/"1" depending on the source
    partials_taken: bool = False
    executed: bool = True
    launch_hour: bool = False
    evaluation: str = ""
    notes: Optional[str] = None
    trade_link: str = ""
    liquidity_taken: str = ""
    displacement_size: Optional[float] = 0
    fvg_size: Optional[float] = None
    confidence_at_entry: Optional[int] = None
    mind_state_at_entry: Optional[int] = None
    calculated_profit: Optional[float] = None
    pnl_percentage: Optional[float] = None

    def to_dict(self):
        return asdict(self)

    def with_identity(self, trade_id, user_id, account_id) -> "Trade":
        values = asdict(self)
        values.update(id=trade_id, user_id=user_id, account_id=account_id)
        return Trade(**values)


@dataclass(frozen=True)
class Trade(ParsedTrade):
    """A persisted trade; identity fields are opaque to the statistics code."""
    id: Optional[str] = None
    user_id: Optional[str] = None
    account_id: Optional[str] = None


RowError = namedtuple("RowError", ["row_index", "field", "message"])


@dataclass
class ParseResult:
    rows: List[ParsedTrade] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)

    def to_dict(self):
        return {
            "rows": [row.to_dict() for row in self.rows],
            "errors": [error._asdict() for error in self.errors],
        }
