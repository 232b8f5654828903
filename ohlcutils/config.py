# config.py
import os
import yaml

from .errors import InvalidArgument

# OHLC field names, in column order ("SYMBOL.Field")
OHLC_FIELDS = ['Open', 'High', 'Low', 'Close', 'Volume', 'Adjusted']
FIELD_SEPARATOR = '.'

# end points
DEFAULT_INTERVAL = 10
DEFAULT_OFFSET = 0

# download
DEFAULT_START_DATE = "2007-01-01"
DEFAULT_PROVIDER = "yahoo"
LEAN_DATA_PATH = "data/equity/usa/minute"
LEAN_PRICE_SCALE = 10000.0

# chart shading colors (mask True / mask False)
SHADE_TRUE_COLOR = "lightgreen"
SHADE_FALSE_COLOR = "lightgrey"

# Aggregation periods -> pandas period frequency
PERIOD_FREQ = {
    "seconds": "s",
    "minutes": "min",
    "hours": "h",
    "days": "D",
    "weeks": "W",
    "months": "M",
    "quarters": "Q",
    "years": "Y",
}

# How to_period() aggregates each OHLC field, unknown fields keep the last value
FIELD_AGGREGATION = {
    "open": "first",
    "high": "max",
    "low": "min",
    "close": "last",
    "volume": "sum",
    "adjusted": "last",
}


def get_default_config():
    """Get default configuration for the command-line build"""
    return {
        'symbols': ['SPY'],
        'start_date': DEFAULT_START_DATE,
        'end_date': None,
        'provider': DEFAULT_PROVIDER,
        'lean_data_path': LEAN_DATA_PATH,
        'max_retries': 3,

        # Aggregation
        'interval': DEFAULT_INTERVAL,
        'offset': DEFAULT_OFFSET,
        'period': None,  # e.g. "weeks", overrides interval/offset when set

        # Derived signals
        'roll_window': 20,

        # Output
        'chart': None,
    }


def load_config(config_path='ohlcutils.yaml'):
    """
    Load configuration from YAML file, on top of the defaults

    Missing keys keep their default, a missing file gives the defaults.
    """
    config = get_default_config()
    if config_path is None:
        return config
    if not os.path.exists(config_path):
        print(f"Config file {config_path} not found, using defaults")
        return config

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise InvalidArgument(f"Config file {config_path} must contain a mapping")

    unknown = set(loaded) - set(config)
    if unknown:
        print(f"⚠ Warning: ignoring unknown config keys: {sorted(unknown)}")
    config.update({k: v for k, v in loaded.items() if k in config})
    return config
