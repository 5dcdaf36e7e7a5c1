from collections import namedtuple

from trade_flags import LOSE

TradePnl = namedtuple("TradePnl", ["pnl_percentage", "calculated_profit"])


def _as_number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number == number else 0.0


def calculate_trade_pnl(outcome, risk_pct, rr, break_even, account_balance) -> TradePnl:
    """
    P&L of a single trade from its risk percentage and reward ratio.

    A loss costs the risked percentage; a win earns risk x RR. Break-even
    trades and a missing balance produce zero.
    """
    if not account_balance or break_even:
        return TradePnl(0.0, 0.0)

    risk = _as_number(risk_pct)
    reward = _as_number(rr)
    pnl_pct = -risk if outcome == LOSE else risk * reward

    return TradePnl(pnl_pct, (pnl_pct / 100) * account_balance)
