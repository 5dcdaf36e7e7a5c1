"""
Shared fixtures for the trade import and statistics tests.
"""

import pytest

from trade import Trade


# Test configuration to run tests in order and provide better reporting
def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line(
        "markers", "essential: mark test as essential for production readiness"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to mark essential tests."""
    for item in items:
        if "essential" in item.nodeid:
            item.add_marker(pytest.mark.essential)


def build_trade(**overrides):
    values = {
        "trade_date": "2024-01-02",
        "trade_time": "09:30:00",
        "market": "EURUSD",
        "direction": "Long",
        "trade_outcome": "Win",
        "risk_per_trade": 1.0,
        "risk_reward_ratio": 2.0,
    }
    values.update(overrides)
    return Trade(**values)


@pytest.fixture
def make_trade():
    return build_trade


@pytest.fixture
def mixed_group(make_trade):
    """4 clean wins, 3 clean losses, 1 break-even win, 2 break-even losses."""
    return (
        [make_trade(trade_outcome="Win") for _ in range(4)]
        + [make_trade(trade_outcome="Lose") for _ in range(3)]
        + [make_trade(trade_outcome="Win", break_even=True)]
        + [make_trade(trade_outcome="Lose", break_even=True) for _ in range(2)]
    )


BASIC_MAPPING = {
    "Date": "trade_date",
    "Market": "market",
    "Outcome": "trade_outcome",
    "Risk": "risk_per_trade",
    "RR": "risk_reward_ratio",
}


@pytest.fixture
def basic_mapping():
    return dict(BASIC_MAPPING)

