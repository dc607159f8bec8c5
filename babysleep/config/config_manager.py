# babysleep/config/config_manager.py
import copy
import logging
import os

import yaml

from babysleep.utils.constants import default_values, insight_defaults

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/config.yaml'
CONFIG_PATH_ENV = 'BABYSLEEP_CONFIG'

DEFAULT_CONFIG = {
    'analytics': {
        'timezone': None,
        'night_start_hour': default_values['night_start_hour'],
        'night_end_hour': default_values['night_end_hour'],
        'max_wake_window_minutes': default_values['max_wake_window_minutes'],
        'recent_session_count': default_values['recent_session_count'],
        'due_soon_minutes': default_values['due_soon_minutes'],
        'history_days': default_values['history_days'],
        'history_lookback_days': default_values['history_lookback_days'],
    },
    'insights': {
        'min_sessions': insight_defaults['min_sessions'],
        'lookback_days': insight_defaults['lookback_days'],
        'model': insight_defaults['model'],
        'max_tokens': insight_defaults['max_tokens'],
        'timeout_seconds': insight_defaults['timeout_seconds'],
        'api_key_env': insight_defaults['api_key_env'],
    },
    'storage': {
        'data_dir': 'data',
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


class ConfigManager:
    """Central configuration manager"""

    def __init__(self, config_path=None):
        self.config_path = config_path or os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        self.config = self._load_config()

    def _load_config(self):
        """Load configuration from file, layered over the built-in defaults"""
        config = copy.deepcopy(DEFAULT_CONFIG)

        if not os.path.exists(self.config_path):
            logger.info(f"No config file at {self.config_path}, using defaults")
            return config

        with open(self.config_path, 'r') as file:
            loaded = yaml.safe_load(file) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping, got {type(loaded).__name__}")

        _deep_update(config, loaded)
        return config

    def get(self, key, default=None):
        """Get configuration value"""
        # Support nested keys with dot notation
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def section(self, name):
        """Return a copy of a top-level section as a plain dict"""
        return dict(self.config.get(name) or {})

    def get_api_key(self):
        """Read the LLM API key from the environment, ignoring the template placeholder"""
        env_name = self.get('insights.api_key_env', insight_defaults['api_key_env'])
        api_key = os.environ.get(env_name)
        if not api_key or api_key == insight_defaults['api_key_placeholder']:
            return None
        return api_key


def _deep_update(base, overrides):
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base
