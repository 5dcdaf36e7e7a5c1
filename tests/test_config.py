from unittest.mock import patch

import pytest

from config import Config
from default import DEFAULT


def write_ini(directory, name, body):
    path = directory / name
    path.write_text(body, encoding="utf-8")
    return path


@pytest.fixture
def no_config_env():
    with patch.dict("os.environ", {}, clear=False) as env:
        env.pop("CONFIG_ENV", None)
        yield


class TestConfig:
    def test_defaults_without_file(self, tmp_path, no_config_env):
        config = Config(str(tmp_path))
        assert config.default_risk_per_trade is None
        assert config.default_risk_reward_ratio is None
        assert config.import_profile == DEFAULT.import_profile
        assert config.account_balance == DEFAULT.account_balance
        assert config.import_defaults() == {}

    def test_values_from_file(self, tmp_path, no_config_env):
        write_ini(
            tmp_path,
            "config.ini",
            "[import]\ndefault_risk_per_trade = 0.75\ndefault_risk_reward_ratio = 3\nprofile = eu_broker\n"
            "[stats]\naccount_balance = 25000\n",
        )
        config = Config(str(tmp_path))
        assert config.import_profile == "eu_broker"
        assert config.import_defaults() == {
            "risk_per_trade": 0.75,
            "risk_reward_ratio": 3.0,
            "account_balance": 25000.0,
        }

    def test_blank_and_invalid_numbers_fall_back(self, tmp_path, no_config_env, caplog):
        write_ini(tmp_path, "config.ini", "[import]\ndefault_risk_per_trade =\n[stats]\naccount_balance = lots\n")
        config = Config(str(tmp_path))
        assert config.default_risk_per_trade is None
        assert config.account_balance == DEFAULT.account_balance
        assert "Invalid number 'lots'" in caplog.text

    def test_environment_overlay(self, tmp_path):
        write_ini(tmp_path, "config.ini", "[import]\nprofile = default\n[stats]\naccount_balance = 1000\n")
        write_ini(tmp_path, "config.live.ini", "[stats]\naccount_balance = 5000\n")
        with patch.dict("os.environ", {"CONFIG_ENV": "live"}):
            config = Config(str(tmp_path))
        assert config.account_balance == 5000.0
        assert config.import_profile == "default"

    def test_missing_environment_file_uses_default(self, tmp_path, caplog):
        write_ini(tmp_path, "config.ini", "[stats]\naccount_balance = 1000\n")
        with patch.dict("os.environ", {"CONFIG_ENV": "staging"}):
            config = Config(str(tmp_path))
        assert config.account_balance == 1000.0
        assert "config.staging.ini" in caplog.text

    def test_bundled_config_loads(self, no_config_env):
        config = Config()
        assert config.import_profile == "default"
        assert config.import_defaults() == {}
