import math

import pytest

import macro_stats


@pytest.fixture
def journal(make_trade):
    return [
        make_trade(trade_date="2024-01-02", trade_outcome="Win", risk_per_trade=1, risk_reward_ratio=2),
        make_trade(trade_date="2024-01-02", trade_outcome="Lose", risk_per_trade=1, risk_reward_ratio=2),
        make_trade(trade_date="2024-01-03", trade_outcome="Lose", risk_per_trade=1, risk_reward_ratio=2),
        make_trade(trade_date="2024-01-04", trade_outcome="Win", break_even=True),
    ]


class TestSyntheticPnl:
    def test_win_loss_and_break_even(self, make_trade):
        assert macro_stats.synthetic_pnl(make_trade(risk_per_trade=1, risk_reward_ratio=3), 10000) == 300
        assert macro_stats.synthetic_pnl(make_trade(trade_outcome="Lose", risk_per_trade=2), 10000) == -200
        assert macro_stats.synthetic_pnl(make_trade(break_even=True), 10000) == 0

    def test_missing_risk_uses_defaults(self, make_trade):
        trade = make_trade(risk_per_trade=None, risk_reward_ratio=None)
        # 0.5% risk at 2R
        assert macro_stats.synthetic_pnl(trade, 10000) == 100

    def test_unrecognized_outcome_counts_as_loss(self, make_trade):
        assert macro_stats.synthetic_pnl(make_trade(trade_outcome="Stopped", risk_per_trade=1), 1000) == -10


class TestMacroStats:
    def test_journal(self, journal):
        stats = macro_stats.calculate_macro_stats(journal, 10000)

        assert stats.profit_factor == pytest.approx(1.0)
        assert stats.consistency_score == pytest.approx(50.0)
        assert stats.consistency_score_with_be == pytest.approx(100 / 3)
        assert stats.sharpe_with_be == pytest.approx(0.0)
        assert stats.trade_quality_index == pytest.approx(0.25 / (1 + math.sqrt(1.5)))
        assert stats.multiple_r == 0

    def test_no_losses_gives_zero_profit_factor(self, make_trade):
        stats = macro_stats.calculate_macro_stats([make_trade(), make_trade()], 10000)
        assert stats.profit_factor == 0.0
        assert stats.consistency_score == 100.0

    def test_empty_input(self):
        stats = macro_stats.calculate_macro_stats([], 10000)
        assert stats == macro_stats.MacroStats()
        assert stats.to_dict()["profit_factor"] == 0.0

    def test_zero_balance(self, journal):
        stats = macro_stats.calculate_macro_stats(journal, 0)
        assert stats.profit_factor == 0.0
        assert stats.sharpe_with_be == 0.0
        # R based figures do not depend on the balance
        assert stats.multiple_r == 0


class TestSharpe:
    def test_sample_statistics(self):
        # mean 2, sample variance 1
        assert macro_stats.calculate_sharpe([1.0, 2.0, 3.0]) == pytest.approx(2.0)

    @pytest.mark.parametrize("returns", [[], [5.0], [3.0, 3.0, 3.0]])
    def test_degenerate_returns(self, returns):
        assert macro_stats.calculate_sharpe(returns) == 0.0


class TestRMultiples:
    def test_multiple_r(self, make_trade):
        trades = [
            make_trade(risk_reward_ratio=2.5),
            make_trade(trade_outcome="Lose"),
            make_trade(break_even=True, risk_reward_ratio=4),
            make_trade(trade_outcome="Open"),
            make_trade(risk_reward_ratio=None),
        ]
        assert macro_stats.calculate_multiple_r(trades) == pytest.approx(1.5)

    def test_trade_quality_index_all_wins_same_r(self, make_trade):
        trades = [make_trade(risk_reward_ratio=2), make_trade(risk_reward_ratio=2)]
        assert macro_stats.calculate_trade_quality_index(trades) == pytest.approx(1.0)

    def test_trade_quality_index_empty(self, make_trade):
        assert macro_stats.calculate_trade_quality_index([]) == 0.0
        assert macro_stats.calculate_trade_quality_index([make_trade(trade_outcome="")]) == 0.0


class TestProfitStats:
    def test_journal(self, journal):
        stats = macro_stats.calculate_profit_stats(journal, 10000)
        assert stats.total_profit == pytest.approx(0.0)
        assert stats.average_profit == pytest.approx(0.0)
        assert stats.average_pnl_percentage == pytest.approx(0.0)
        # 10000 -> 10200 -> 10098 -> 9997.02
        assert stats.max_drawdown == pytest.approx(1.99)

    def test_trades_are_taken_in_date_order(self, make_trade):
        trades = [
            make_trade(trade_date="2024-02-02", trade_outcome="Lose", risk_per_trade=1),
            make_trade(trade_date="2024-02-01", trade_outcome="Win", risk_per_trade=1, risk_reward_ratio=1),
        ]
        stats = macro_stats.calculate_profit_stats(trades, 1000)
        assert stats.total_profit == pytest.approx(0.0)
        # 1000 -> 1010 -> 999.9
        assert stats.max_drawdown == pytest.approx(1.0)

    def test_empty(self):
        stats = macro_stats.calculate_profit_stats([], 1000)
        assert stats.to_dict() == {
            "total_profit": 0.0,
            "average_profit": 0.0,
            "average_pnl_percentage": 0.0,
            "max_drawdown": 0.0,
        }

    def test_average_profit(self, make_trade):
        trades = [make_trade(risk_per_trade=1, risk_reward_ratio=2), make_trade(risk_per_trade=1, risk_reward_ratio=4)]
        stats = macro_stats.calculate_profit_stats(trades, 1000)
        assert stats.total_profit == pytest.approx(60.0)
        assert stats.average_profit == pytest.approx(30.0)
        assert stats.average_pnl_percentage == pytest.approx(6.0)
