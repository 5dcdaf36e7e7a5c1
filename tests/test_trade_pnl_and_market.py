import pytest

from market_validator import get_market_validation_error, is_valid_market, normalize_market
from trade_flags import filter_executed_trades, is_lose_outcome
from trade_pnl import TradePnl, calculate_trade_pnl


class TestCalculateTradePnl:
    def test_win(self):
        assert calculate_trade_pnl("Win", 1, 2, False, 10000) == TradePnl(2.0, 200.0)

    def test_loss(self):
        assert calculate_trade_pnl("Lose", 0.5, 3, False, 10000) == TradePnl(-0.5, -50.0)

    @pytest.mark.parametrize(
        "break_even, balance",
        [(True, 10000), (False, 0), (False, None)],
    )
    def test_zero_cases(self, break_even, balance):
        assert calculate_trade_pnl("Win", 1, 2, break_even, balance) == TradePnl(0.0, 0.0)

    def test_non_numeric_inputs_count_as_zero(self):
        assert calculate_trade_pnl("Win", "abc", 2, False, 10000) == TradePnl(0.0, 0.0)
        assert calculate_trade_pnl("Win", 1, float("nan"), False, 10000) == TradePnl(0.0, 0.0)


class TestMarketValidator:
    @pytest.mark.parametrize("market", ["EURUSD", "eur/usd", " DE30EU ", "US30"])
    def test_valid(self, market):
        assert is_valid_market(market)
        assert get_market_validation_error(market) is None

    @pytest.mark.parametrize(
        "market, fragment",
        [
            ("", "required"),
            ("   ", "required"),
            ("X", "at least 2"),
            ("ABCDEFGHIJK", "at most 10"),
            ("EUR.USD", "letters and numbers"),
            ("EU/US/JP", "letters and numbers"),
        ],
    )
    def test_invalid(self, market, fragment):
        message = get_market_validation_error(market)
        assert message is not None
        assert fragment in message
        assert not is_valid_market(market)

    def test_normalize(self):
        assert normalize_market("  eurusd ") == "EURUSD"


class TestTradeFlags:
    @pytest.mark.parametrize("text", ["Lose", "loss", "L", "LOSS"])
    def test_lose_outcomes(self, text):
        assert is_lose_outcome(text)

    @pytest.mark.parametrize("text", ["Win", "Lost", "", None])
    def test_other_outcomes(self, text):
        assert not is_lose_outcome(text)

    def test_filter_executed_trades(self, make_trade):
        trades = [make_trade(executed=True), make_trade(executed=False), make_trade()]
        assert len(filter_executed_trades(trades)) == 2
