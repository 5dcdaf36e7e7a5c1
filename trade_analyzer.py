from typing import Any, Dict, List, Sequence

import category_stats
import macro_stats
from group_stats import GroupStats
from interval_stats import DEFAULT_TIME_INTERVALS
from streak import calculate_streaks
from trade import ParsedTrade
from trade_flags import LOSE, WIN, filter_executed_trades, is_local_high_low_liquidated


class TradeAnalyzer:
    """
    Runs every statistic over one collection of journal trades.

    Non-executed trades only show up in the executed/non-executed counts;
    every other figure is computed over executed trades.

    Args:
        trades (Sequence[ParsedTrade]): Imported or persisted trades.
        account_balance (float): Starting balance used for P&L percentages.
        intervals: Time-of-day buckets for the interval view.
    """

    def __init__(self, trades: Sequence[ParsedTrade], account_balance: float = 0.0, intervals=DEFAULT_TIME_INTERVALS):
        if not all(isinstance(t, ParsedTrade) for t in trades):
            raise TypeError("Input 'trades' must be a sequence of ParsedTrade objects.")
        self.trades = list(trades)
        self.executed_trades = filter_executed_trades(self.trades)
        self.account_balance = account_balance
        self.intervals = intervals

    def overview(self) -> Dict[str, int]:
        executed = self.executed_trades
        return {
            "total": len(self.trades),
            "executed": len(executed),
            "non_executed": len(self.trades) - len(executed),
            "wins": sum(1 for t in executed if t.trade_outcome == WIN),
            "losses": sum(1 for t in executed if t.trade_outcome == LOSE),
            "break_even": sum(1 for t in executed if t.break_even),
            "local_high_low": sum(1 for t in executed if is_local_high_low_liquidated(t.local_high_low)),
            "reentry": sum(1 for t in executed if t.reentry),
            "news": sum(1 for t in executed if t.news_related),
            "partials": sum(1 for t in executed if t.partials_taken),
        }

    def overall(self) -> GroupStats:
        return category_stats.process_group("All", self.executed_trades)

    def category_report(self) -> Dict[str, Any]:
        trades = self.executed_trades
        return {
            "market": category_stats.calculate_market_stats(trades, self.account_balance),
            "setup": category_stats.calculate_setup_stats(trades),
            "direction": category_stats.calculate_direction_stats(trades),
            "day": category_stats.calculate_day_stats(trades),
            "mss": category_stats.calculate_mss_stats(trades),
            "news": category_stats.calculate_news_stats(trades),
            "liquidity": category_stats.calculate_liquidity_stats(trades),
            "local_high_low": category_stats.calculate_local_hl_stats(trades),
            "trend": category_stats.calculate_trend_stats(trades),
            "reentry": category_stats.calculate_reentry_stats(trades),
            "break_even": category_stats.calculate_break_even_stats(trades),
            "interval": category_stats.calculate_interval_stats(trades, self.intervals),
            "evaluation": category_stats.calculate_evaluation_stats(trades),
            "sl_size": category_stats.calculate_sl_size_stats(trades),
            "displacement": category_stats.calculate_average_displacement_per_market(trades),
            "partials": category_stats.calculate_partial_trades_stats(trades),
        }

    def macro(self) -> macro_stats.MacroStats:
        return macro_stats.calculate_macro_stats(self.executed_trades, self.account_balance)

    def profit(self) -> macro_stats.ProfitStats:
        return macro_stats.calculate_profit_stats(self.executed_trades, self.account_balance)

    def streaks(self):
        return calculate_streaks(self.executed_trades)

    def report(self) -> Dict[str, Any]:
        """Everything above as plain JSON-serializable data."""
        categories = {}
        for name, value in self.category_report().items():
            if hasattr(value, "to_dict"):
                categories[name] = value.to_dict()
            elif isinstance(value, dict):
                categories[name] = {key: stats.to_dict() for key, stats in value.items()}
            else:
                categories[name] = [stats.to_dict() for stats in value]

        return {
            "overview": self.overview(),
            "overall": self.overall().to_dict(),
            "categories": categories,
            "macro": self.macro().to_dict(),
            "profit": self.profit().to_dict(),
            "streaks": self.streaks()._asdict(),
        }

    @staticmethod
    def format_table(group_stats: List[GroupStats]) -> str:
        if not group_stats:
            return "No trades to analyze."

        headers = ["Group", "Total", "Wins", "Losses", "BE", "Win Rate", "Win Rate (BE)"]
        widths = [20, 7, 6, 7, 4, 10, 14]

        header_line = " | ".join(
            f"{h:<{w}}" if i == 0 else f"{h:>{w}}" for i, (h, w) in enumerate(zip(headers, widths))
        )
        separator = "-" * len(header_line)
        lines = [separator, header_line, separator]

        for stats in group_stats:
            values = [
                stats.label[: widths[0]],
                str(stats.total),
                str(stats.wins),
                str(stats.losses),
                str(stats.break_even),
                f"{stats.win_rate:.1f}%",
                f"{stats.win_rate_with_be:.1f}%",
            ]
            lines.append(
                " | ".join(
                    f"{v:<{w}}" if i == 0 else f"{v:>{w}}" for i, (v, w) in enumerate(zip(values, widths))
                )
            )

        lines.append(separator)
        return "\n".join(lines)
