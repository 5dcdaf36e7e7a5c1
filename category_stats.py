"""
Per-category win/loss statistics over journal trades.

Every view is built on group_trades + process_group. Inputs are never
modified; non-executed trades are counted like any other, so filter them
first (trade_flags.filter_executed_trades) if they should not be.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Sequence

from default import DEFAULT
from group_stats import (
    DisplacementStats,
    EvaluationStats,
    GroupStats,
    MarketStats,
    PartialTradesStats,
    SLSizeStats,
)
from interval_stats import DEFAULT_TIME_INTERVALS, IntervalStats, TimeInterval
from metrics_names import MetricNames
import my_utils
from trade_flags import LOSE, WIN, is_local_high_low_liquidated


def process_group(label: str, trades: Sequence, stats_class=GroupStats, **extra) -> GroupStats:
    """
    Build the stats for one labeled group of trades.

    win_rate      = clean wins / (clean wins + clean losses + BE losses)
    win_rate_with_be = clean wins / (clean wins + clean losses + all BE)

    A break-even win contributes nothing to win_rate, a break-even loss still
    counts against it.
    """
    wins = losses = be_wins = be_losses = 0
    for trade in trades:
        if trade.trade_outcome == WIN:
            wins += 1
            be_wins += 1 if trade.break_even else 0
        elif trade.trade_outcome == LOSE:
            losses += 1
            be_losses += 1 if trade.break_even else 0

    non_be_wins = wins - be_wins
    non_be_losses = losses - be_losses
    be_count = be_wins + be_losses

    return stats_class(
        label=label,
        total=len(trades),
        wins=wins,
        losses=losses,
        be_wins=be_wins,
        be_losses=be_losses,
        win_rate=my_utils.percentage(non_be_wins, non_be_wins + non_be_losses + be_losses),
        win_rate_with_be=my_utils.percentage(non_be_wins, non_be_wins + non_be_losses + be_count),
        **extra,
    )


def group_trades(trades: Iterable, key_fn: Callable) -> Dict[str, List]:
    groups = defaultdict(list)
    for trade in trades:
        groups[key_fn(trade) or MetricNames.UNKNOWN].append(trade)
    return groups


def calculate_grouped_stats(trades: Iterable, key_fn: Callable) -> List[GroupStats]:
    """Stats per distinct key, largest group first."""
    groups = group_trades(trades, key_fn)
    stats = [process_group(label, members) for label, members in groups.items()]
    return sorted(stats, key=lambda g: g.total, reverse=True)


def calculate_market_stats(trades: Sequence, account_balance: float) -> List[MarketStats]:
    if not trades:
        return []
    groups = group_trades(trades, lambda t: t.market)
    stats = []
    for market, members in groups.items():
        profit = sum(t.calculated_profit for t in members if my_utils.is_number(t.calculated_profit))
        pnl_percentage = profit / account_balance * 100 if account_balance > 0 else 0.0
        stats.append(
            process_group(market, members, MarketStats, profit=profit, pnl_percentage=pnl_percentage)
        )
    return sorted(stats, key=lambda g: g.total, reverse=True)


def calculate_setup_stats(trades: Sequence) -> List[GroupStats]:
    return calculate_grouped_stats(trades, lambda t: t.setup_type)


def calculate_direction_stats(trades: Sequence) -> List[GroupStats]:
    return calculate_grouped_stats(trades, lambda t: t.direction)


def calculate_day_stats(trades: Sequence) -> List[GroupStats]:
    return calculate_grouped_stats(trades, lambda t: t.day_of_week)


def calculate_liquidity_stats(trades: Sequence) -> List[GroupStats]:
    return calculate_grouped_stats(trades, lambda t: t.liquidity)


def calculate_mss_stats(trades: Sequence) -> List[GroupStats]:
    return calculate_grouped_stats(trades, lambda t: t.mss or MetricNames.MSS_NORMAL)


def calculate_news_stats(trades: Sequence) -> List[GroupStats]:
    return calculate_grouped_stats(
        trades, lambda t: MetricNames.NEWS if t.news_related else MetricNames.NO_NEWS
    )


def calculate_local_hl_stats(trades: Sequence) -> Dict[str, GroupStats]:
    """Both buckets are always present, zeroed when no trade falls in them."""
    result = {
        MetricNames.LIQUIDATED: GroupStats(MetricNames.LIQUIDATED),
        MetricNames.NOT_LIQUIDATED: GroupStats(MetricNames.NOT_LIQUIDATED),
    }
    groups = calculate_grouped_stats(
        trades,
        lambda t: MetricNames.LIQUIDATED
        if is_local_high_low_liquidated(t.local_high_low)
        else MetricNames.NOT_LIQUIDATED,
    )
    for stats in groups:
        result[stats.label] = stats
    return result


def calculate_trend_stats(trades: Sequence) -> List[GroupStats]:
    """Only trend-following and counter-trend trades; anything else is left out."""
    stats = []
    for trend in MetricNames.get_trend_names():
        subset = [t for t in trades if (t.trend or "").strip() == trend]
        if subset:
            stats.append(process_group(trend, subset))
    return sorted(stats, key=lambda g: g.total, reverse=True)


def calculate_reentry_stats(trades: Sequence) -> List[GroupStats]:
    subset = [t for t in trades if t.reentry]
    return [process_group(MetricNames.REENTRY, subset)] if subset else []


def calculate_break_even_stats(trades: Sequence) -> List[GroupStats]:
    subset = [t for t in trades if t.break_even]
    if not subset:
        return []
    stats = process_group(MetricNames.BREAK_EVEN, subset)
    # plain wins / total; every trade in this view is break-even
    stats.win_rate = my_utils.percentage(stats.wins, stats.total)
    return [stats]


def calculate_interval_stats(
    trades: Sequence, intervals: Sequence[TimeInterval] = DEFAULT_TIME_INTERVALS
) -> List[IntervalStats]:
    """One entry per interval, in the given order, empty buckets included."""
    results = []
    for interval in intervals:
        label, start, end = interval
        bucket = [t for t in trades if my_utils.is_time_in_interval(t.trade_time, start, end)]
        results.append(process_group(label, bucket, IntervalStats, start=start, end=end))
    return results


def calculate_sl_size_stats(trades: Sequence) -> List[SLSizeStats]:
    """Average stop-loss size per market; markets averaging 0 are dropped."""
    sizes = defaultdict(list)
    for trade in trades:
        market = trade.market or MetricNames.UNKNOWN
        values = sizes[market]
        if my_utils.is_number(trade.sl_size):
            values.append(trade.sl_size)
    stats = [SLSizeStats(market, my_utils.get_average(values)) for market, values in sizes.items()]
    stats = [s for s in stats if s.average_sl_size > 0]
    return sorted(stats, key=lambda s: s.average_sl_size, reverse=True)


def calculate_average_displacement_per_market(trades: Sequence) -> List[DisplacementStats]:
    """
    Average positive displacement_size per market, to 2 decimals, largest
    first. Markets without any positive displacement are left out;
    total_trades still counts every trade in the market.
    """
    totals = defaultdict(int)
    sizes = defaultdict(list)
    for trade in trades:
        market = trade.market or MetricNames.UNKNOWN
        totals[market] += 1
        if my_utils.is_number(trade.displacement_size) and trade.displacement_size > 0:
            sizes[market].append(trade.displacement_size)

    stats = [
        DisplacementStats(market, totals[market], round(my_utils.get_average(values), 2))
        for market, values in sizes.items()
    ]
    return sorted(stats, key=lambda s: s.average_displacement, reverse=True)


def calculate_partial_trades_stats(trades: Sequence) -> PartialTradesStats:
    wins = losses = be_wins = be_losses = neutral_be = 0
    for trade in trades:
        if not trade.partials_taken:
            continue
        if trade.break_even:
            if trade.trade_outcome == WIN:
                be_wins += 1
            elif trade.trade_outcome == LOSE:
                be_losses += 1
            else:
                neutral_be += 1
        elif trade.trade_outcome == WIN:
            wins += 1
        elif trade.trade_outcome == LOSE:
            losses += 1

    return PartialTradesStats(
        partial_wins=wins,
        partial_losses=losses,
        be_partial_wins=be_wins,
        be_partial_losses=be_losses,
        partial_win_rate=my_utils.percentage(wins, wins + losses),
        partial_win_rate_with_be=my_utils.percentage(wins + be_wins, wins + losses + be_wins + be_losses),
        total_partial_trades=wins + losses + be_wins + be_losses + neutral_be,
        total_be_partials=be_wins + be_losses + neutral_be,
    )


def calculate_evaluation_stats(
    trades: Sequence, grade_order: Sequence[str] = DEFAULT.evaluation_grades
) -> List[EvaluationStats]:
    """Stats per evaluation grade, in grade_order, with whole-number rates."""
    groups = group_trades(trades, lambda t: t.evaluation or MetricNames.NOT_EVALUATED)
    results = []
    for grade in grade_order:
        if grade not in groups:
            continue
        stats = process_group(grade, groups[grade], EvaluationStats)
        stats.win_rate = my_utils.round_half_up(stats.win_rate)
        stats.win_rate_with_be = my_utils.round_half_up(stats.win_rate_with_be)
        results.append(stats)
    return results
