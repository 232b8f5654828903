"""
Rolling Aggregations
Windowed sum via cumulative sums and windowed max via a monotonic deque,
both returning complete series (no NaN warm-up rows)
"""
import numba as nb
import numpy as np
import pandas as pd

from .errors import InvalidArgument
from .series import as_frame


def _check_window(window) -> int:
    if int(window) != window or window < 1:
        raise InvalidArgument(f"window must be a positive integer, got {window}")
    return int(window)


def rolling_sum(series, window: int):
    """
    Rolling sum over a trailing window of points

    The sum at any row is that row plus the window-1 rows before it. The
    first window rows equal the cumulative sum, so the result never holds
    NaN. Missing input values count as zero.

    Args:
        series: DataFrame or Series
        window: lookback length in rows

    Returns:
        Same type as series, same index and columns

    Example:
        [1, 2, 3, 4, 5] with window=3 -> [1, 3, 6, 9, 12]
    """
    window = _check_window(window)
    as_frame(series, "series")
    cum_sum = series.fillna(0).cumsum()
    roll_sum = cum_sum - cum_sum.shift(window)
    roll_sum.iloc[:window] = cum_sum.iloc[:window]
    return roll_sum


@nb.jit(nopython=True)
def _roll_max_kernel(values: np.ndarray, window: int) -> np.ndarray:
    """Trailing max per column, with window-1 zeros prepended to every column"""
    n_rows, n_cols = values.shape
    out = np.empty((n_rows, n_cols), dtype=np.float64)
    n_pad = window - 1
    padded = np.zeros(n_rows + n_pad, dtype=np.float64)
    # deque of positions into padded, values decreasing from head to tail
    deque = np.empty(n_rows + n_pad, dtype=np.int64)
    for j in range(n_cols):
        padded[n_pad:] = values[:, j]
        head = 0
        tail = 0
        for i in range(n_rows + n_pad):
            while tail > head and padded[deque[tail - 1]] <= padded[i]:
                tail -= 1
            deque[tail] = i
            tail += 1
            if deque[head] <= i - window:
                head += 1
            if i >= n_pad:
                out[i - n_pad, j] = padded[deque[head]]
    return out


def rolling_max(series, window: int):
    """
    Rolling maximum over a trailing window of points

    window-1 zeros are prepended before rolling, so the first window
    outputs are the max of a growing prefix that includes the zero pad (an
    all-negative start therefore shows 0). NaN input raises InvalidArgument.

    Returns:
        Same type as series, with the original index and column names
    """
    window = _check_window(window)
    frame = as_frame(series, "series")
    values = np.ascontiguousarray(frame.to_numpy(dtype=np.float64))
    if np.isnan(values).any():
        raise InvalidArgument("argument \"series\" must not hold NaN")
    if values.shape[0] == 0:
        return series.astype(np.float64)
    roll_max = _roll_max_kernel(values, window)
    if isinstance(series, pd.Series):
        return pd.Series(roll_max[:, 0], index=series.index, name=series.name)
    return pd.DataFrame(roll_max, index=frame.index, columns=frame.columns)
