from dataclasses import asdict, dataclass


@dataclass
class GroupStats:
    """
    Win/loss breakdown for one category of trades.

    Break-even is a flag on top of Win/Lose, so be_wins and be_losses are
    subsets of wins and losses respectively.
    """
    label: str
    total: int = 0
    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0
    win_rate: float = 0.0           # excludes break-even wins, keeps break-even losses
    win_rate_with_be: float = 0.0   # every break-even trade dilutes the rate

    @property
    def break_even(self) -> int:
        return self.be_wins + self.be_losses

    def to_dict(self):
        data = asdict(self)
        data["break_even"] = self.break_even
        return data


@dataclass
class MarketStats(GroupStats):
    profit: float = 0.0
    pnl_percentage: float = 0.0


@dataclass
class SLSizeStats:
    market: str
    average_sl_size: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class EvaluationStats(GroupStats):
    """Per-grade stats; rates are rounded to whole percentages."""


@dataclass
class DisplacementStats:
    market: str
    total_trades: int = 0             # every trade in the market, with or without a displacement
    average_displacement: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class PartialTradesStats:
    """
    Outcome counts for trades where partials were taken.

    partial_win_rate ignores break-even partials; partial_win_rate_with_be
    counts break-even wins as wins and break-even losses as losses. Neutral
    break-even partials (no Win/Lose outcome) only show up in the totals.
    """
    partial_wins: int = 0
    partial_losses: int = 0
    be_partial_wins: int = 0
    be_partial_losses: int = 0
    partial_win_rate: float = 0.0
    partial_win_rate_with_be: float = 0.0
    total_partial_trades: int = 0
    total_be_partials: int = 0

    def to_dict(self):
        return asdict(self)
