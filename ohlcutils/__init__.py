# ohlcutils/__init__.py
"""
Utilities for OHLC Time Series

This package provides small, pure transformations over OHLC price tables held
in pandas DataFrames indexed by timestamp, with "SYMBOL.Field" column names
(e.g. "SPY.Open", "SPY.Close").

Main components:
- series: symbol names, column extraction and validation
- endpoints: interval end points and aggregation to lower periodicity
- ops_ts: lag and difference operators for arrays and time series
- rolling: rolling sum and rolling max
- merge: pairwise recursive merge of chunked series, multi-symbol batches
- ohlc: price adjustment and reduced form of OHLC data
- data_loaders: price download (Yahoo Finance, Lean zip archives)
- chart: candlestick chart with background shading
- main_build: command-line download and aggregation

Usage:
    # Command line
    python -m ohlcutils.main_build --symbols SPY QQQ --start 2020-01-01 --period weeks

    # Python API
    from ohlcutils import compute_endpoints, to_period, get_symbols
    prices = {}
    get_symbols(["SPY"], prices, start_date="2020-01-01")
    end_points = compute_endpoints(len(prices["SPY"]), interval=5, offset=2)
    weekly = to_period(prices["SPY"], end_points=end_points)
"""

from . import config
from . import endpoints
from . import merge
from . import ohlc
from . import ops_ts
from . import rolling
from . import series

# Export key functions for convenience
from .errors import (
    DataUnavailable,
    InvalidArgument,
    OhlcUtilsError,
    OpResult,
    TypeMismatch,
)
from .series import extract_column, make_ohlc, symbol_name
from .endpoints import calendar_endpoints, compute_endpoints, to_period
from .ops_ts import diff, diff_series, lag, lag_series
from .rolling import rolling_max, rolling_sum
from .merge import apply_symbols, concat_all, merge_columns, reduce_pairwise
from .ohlc import adjust_ohlc, diff_ohlc, expand_form, reduce_form
from .data_loaders import LeanZipProvider, YahooProvider, get_symbols

__version__ = '1.0.0'
__all__ = [
    'config',
    'endpoints',
    'merge',
    'ohlc',
    'ops_ts',
    'rolling',
    'series',
    'DataUnavailable',
    'InvalidArgument',
    'OhlcUtilsError',
    'OpResult',
    'TypeMismatch',
    'extract_column',
    'make_ohlc',
    'symbol_name',
    'calendar_endpoints',
    'compute_endpoints',
    'to_period',
    'diff',
    'diff_series',
    'lag',
    'lag_series',
    'rolling_max',
    'rolling_sum',
    'apply_symbols',
    'concat_all',
    'merge_columns',
    'reduce_pairwise',
    'adjust_ohlc',
    'diff_ohlc',
    'expand_form',
    'reduce_form',
    'LeanZipProvider',
    'YahooProvider',
    'get_symbols',
]
