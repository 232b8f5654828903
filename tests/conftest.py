"""
Shared fixtures: small OHLC tables with known values
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from ohlcutils.series import make_ohlc


@pytest.fixture
def daily_ohlc():
    """Ten business days of SPY prices, Adjusted = 0.9 * Close"""
    index = pd.bdate_range("2024-01-01", periods=10)
    close = np.array([100.0, 101.0, 102.5, 101.5, 103.0, 104.0, 103.5, 105.0, 106.0, 105.5])
    values = np.column_stack([
        close - 0.5,        # Open
        close + 1.0,        # High
        close - 1.5,        # Low
        close,              # Close
        np.arange(1, 11) * 1000.0,  # Volume
        close * 0.9,        # Adjusted
    ])
    return make_ohlc("SPY", values, index=index)


@pytest.fixture
def minute_ohlc():
    """Two trading days of 3 minute bars each"""
    index = pd.DatetimeIndex([
        "2024-03-04 09:30", "2024-03-04 09:31", "2024-03-04 09:32",
        "2024-03-05 09:30", "2024-03-05 09:31", "2024-03-05 09:32",
    ])
    values = [
        [10.0, 11.0, 9.5, 10.5, 100.0, 10.5],
        [10.5, 12.0, 10.0, 11.5, 200.0, 11.5],
        [11.5, 11.75, 10.25, 11.0, 300.0, 11.0],
        [11.0, 11.5, 10.5, 11.25, 400.0, 11.25],
        [11.25, 13.0, 11.0, 12.5, 500.0, 12.5],
        [12.5, 12.75, 8.0, 9.0, 600.0, 9.0],
    ]
    return make_ohlc("QQQ", values, index=index)
