"""
Account-level risk statistics from synthetic per-trade P&L.

P&L is rebuilt from risk_per_trade and risk_reward_ratio rather than read
from calculated_profit: a win earns risk x RR, a loss costs the risk, a
break-even trade is worth 0.
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence

from default import DEFAULT
import my_utils
from trade_flags import LOSE, WIN


@dataclass
class MacroStats:
    profit_factor: float = 0.0
    consistency_score: float = 0.0
    consistency_score_with_be: float = 0.0
    sharpe_with_be: float = 0.0
    trade_quality_index: float = 0.0
    multiple_r: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class ProfitStats:
    total_profit: float = 0.0
    average_profit: float = 0.0
    average_pnl_percentage: float = 0.0
    max_drawdown: float = 0.0   # percent, running-balance sizing

    def to_dict(self):
        return asdict(self)


def _risk_pct(trade) -> float:
    return DEFAULT.risk_per_trade if trade.risk_per_trade is None else trade.risk_per_trade


def _reward_ratio(trade) -> float:
    return DEFAULT.risk_reward_ratio if trade.risk_reward_ratio is None else trade.risk_reward_ratio


def synthetic_pnl(trade, account_balance: float) -> float:
    if trade.break_even:
        return 0.0
    risk_amount = account_balance * _risk_pct(trade) / 100
    return risk_amount * _reward_ratio(trade) if trade.trade_outcome == WIN else -risk_amount


def calculate_sharpe(returns: Sequence[float]) -> float:
    """Sample mean over sample standard deviation; 0 for < 2 returns or no variance."""
    if len(returns) < 2:
        return 0.0
    variance = my_utils.sample_variance(returns)
    if variance <= 0:
        return 0.0
    return (sum(returns) / len(returns)) / math.sqrt(variance)


def _r_multiple(trade):
    """R earned by a trade: 0 for break-even, +RR for a win, -1 for a loss, None otherwise."""
    rr = trade.risk_reward_ratio if my_utils.is_number(trade.risk_reward_ratio) else 0
    if trade.break_even:
        return 0
    if trade.trade_outcome == WIN:
        return rr
    if trade.trade_outcome == LOSE:
        return -1
    return None


def calculate_multiple_r(trades: Sequence) -> float:
    return sum(r for r in (_r_multiple(t) for t in trades) if r is not None)


def calculate_trade_quality_index(trades: Sequence) -> float:
    """
    TQI = win rate x 1 / (1 + stddev(R)), in [0, 1].

    Break-even trades count in the total but not as wins; trades with an
    outcome other than Win/Lose are ignored.
    """
    r_values = []
    wins = 0
    for trade in trades:
        r = _r_multiple(trade)
        if r is None:
            continue
        if not trade.break_even and trade.trade_outcome == WIN:
            wins += 1
        r_values.append(r)

    if not r_values:
        return 0.0
    win_rate = wins / len(r_values)
    return win_rate * (1 / (1 + my_utils.population_std(r_values)))


def _consistency(daily_pnl: Dict[str, float]) -> float:
    positive_days = sum(1 for pnl in daily_pnl.values() if pnl > 0)
    return my_utils.percentage(positive_days, len(daily_pnl))


def calculate_macro_stats(trades: Sequence, account_balance: float) -> MacroStats:
    """
    Profit factor, day-level consistency (excluding and including
    break-even trades), Sharpe over per-trade P&L, TQI and total R.
    """
    gross_profit = 0.0
    gross_loss = 0.0
    daily_non_be_pnl: Dict[str, float] = {}
    daily_all_pnl: Dict[str, float] = {}
    returns_with_be: List[float] = []

    for trade in trades:
        day = (trade.trade_date or "")[:10]
        pnl = synthetic_pnl(trade, account_balance)

        if not trade.break_even:
            if trade.trade_outcome == WIN:
                gross_profit += pnl
            else:
                gross_loss += -pnl
            daily_non_be_pnl[day] = daily_non_be_pnl.get(day, 0.0) + pnl

        daily_all_pnl[day] = daily_all_pnl.get(day, 0.0) + pnl
        returns_with_be.append(pnl)

    return MacroStats(
        profit_factor=gross_profit / gross_loss if gross_loss > 0 else 0.0,
        consistency_score=_consistency(daily_non_be_pnl),
        consistency_score_with_be=_consistency(daily_all_pnl),
        sharpe_with_be=calculate_sharpe(returns_with_be),
        trade_quality_index=calculate_trade_quality_index(trades),
        multiple_r=calculate_multiple_r(trades),
    )


def calculate_profit_stats(trades: Sequence, account_balance: float) -> ProfitStats:
    """
    Totals over non break-even trades in date order.

    total/average profit size each trade off the starting balance; the max
    drawdown sizes each trade off the running balance.
    """
    ordered = sorted((t for t in trades if not t.break_even), key=lambda t: t.trade_date or "")

    total_profit = 0.0
    running_balance = account_balance
    peak = 0.0
    max_drawdown = 0.0

    for trade in ordered:
        total_profit += synthetic_pnl(trade, account_balance)

        running_balance += synthetic_pnl(trade, running_balance)
        peak = max(peak, running_balance)
        drawdown = (peak - running_balance) / peak * 100 if peak > 0 else 0.0
        max_drawdown = max(max_drawdown, drawdown)

    return ProfitStats(
        total_profit=total_profit,
        average_profit=total_profit / len(ordered) if ordered else 0.0,
        average_pnl_percentage=my_utils.percentage(total_profit, account_balance),
        max_drawdown=max_drawdown,
    )
