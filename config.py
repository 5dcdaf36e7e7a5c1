import configparser
import logging
import os

from default import DEFAULT

LOGGER = logging.getLogger(__name__)


class Config:
    def __init__(self, config_dir=None):
        self.config_dir = config_dir or os.path.dirname(os.path.abspath(__file__))
        self.config = self.load_config()
        self.default_risk_per_trade = self.get_float('import', 'default_risk_per_trade', None)
        self.default_risk_reward_ratio = self.get_float('import', 'default_risk_reward_ratio', None)
        self.import_profile = self.get_string('import', 'profile', DEFAULT.import_profile)
        self.account_balance = self.get_float('stats', 'account_balance', DEFAULT.account_balance)

    def import_defaults(self):
        """Defaults mapping handed to parse_csv_trades; unset options are left out."""
        defaults = {}
        if self.default_risk_per_trade is not None:
            defaults['risk_per_trade'] = self.default_risk_per_trade
        if self.default_risk_reward_ratio is not None:
            defaults['risk_reward_ratio'] = self.default_risk_reward_ratio
        if self.account_balance:
            defaults['account_balance'] = self.account_balance
        return defaults

    def load_config(self, config_base_name="config"):
        config = configparser.ConfigParser()

        default_config_path = os.path.join(self.config_dir, f"{config_base_name}.ini")
        config.read(default_config_path)

        env = os.environ.get("CONFIG_ENV")
        if env:
            env_config_path = os.path.join(self.config_dir, f"{config_base_name}.{env}.ini")
            if os.path.exists(env_config_path):
                config.read(env_config_path)
                LOGGER.info("Loaded configuration for environment: %s", env)
            else:
                LOGGER.warning("Environment '%s' specified, but config file '%s' not found. Using default.", env, env_config_path)
        else:
            LOGGER.debug("Using default configuration.")

        return config

    def get_float(self, section, option, default):
        """Safely retrieves a float value from the configuration."""
        try:
            value_str = self.config.get(section, option).strip()
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default
        if not value_str:
            return default
        try:
            return float(value_str)
        except ValueError:
            LOGGER.warning("Invalid number '%s' for '%s.%s'. Using default: %s", value_str, section, option, default)
            return default

    def get_string(self, section, option, default=""):
        try:
            return self.config.get(section, option)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default
