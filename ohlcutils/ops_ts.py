"""
Lag and Difference Operators
Array versions (lag, diff) work on numeric vectors and matrices row-wise and
fail softly, returning an OpResult. Series versions (lag_series, diff_series)
keep the time index and pad the boundary rows instead of leaving NaN
"""
import warnings
import numpy as np
import pandas as pd

from .errors import OpResult, TypeMismatch
from .series import check_series


# ============================================================================
# Array Operators
# ============================================================================

def _as_numeric_array(x, name: str):
    """
    Convert x to a numeric 1-D or 2-D array, or build the TypeMismatch
    Returns (array, error), exactly one of them is None
    """
    try:
        arr = np.asarray(x)
    except (TypeError, ValueError):
        arr = None

    if arr is None or arr.dtype.kind not in 'iuf':
        error = TypeMismatch(f"argument \"{name}\" must be numeric.", arg_name=name)
    elif arr.ndim not in (1, 2):
        error = TypeMismatch(f"argument \"{name}\" must be a vector or matrix.", arg_name=name)
    else:
        return arr, None

    warnings.warn(str(error), RuntimeWarning, stacklevel=3)
    return None, error


def _shift_rows(arr: np.ndarray, lag: int, pad: np.ndarray) -> np.ndarray:
    """
    Shift rows by lag (positive: down, negative: up), exposed rows come from pad
    pad has the same shape as arr, so row i of the result is either
    arr[i - lag] or pad[i]
    """
    n_rows = arr.shape[0]
    out = pad.copy()
    if lag > 0 and lag < n_rows:
        out[lag:] = arr[:n_rows - lag]
    elif lag < 0 and -lag < n_rows:
        out[:n_rows + lag] = arr[-lag:]
    elif lag == 0:
        out[:] = arr
    return out


def lag(x, lag: int = 1, name: str = "x") -> OpResult:
    """
    Apply a lag to a numeric vector or matrix

    Values are shifted by lag rows and the leading (or trailing) stub rows
    are padded with zeros. Positive lag replaces the current row with the
    row lag rows above, negative lag with the row lag rows below. Vectors
    behave as single-column matrices.

    Args:
        x: numeric vector or matrix (array-like)
        lag: number of rows to shift
        name: argument name reported when x is rejected

    Returns:
        OpResult with a fresh array of the same shape, or a TypeMismatch

    Example:
        lag([1, 2, 3, 4], lag=2).value -> [0, 0, 1, 2]
    """
    arr, error = _as_numeric_array(x, name)
    if error is not None:
        return OpResult.failure(error)
    return OpResult.success(_shift_rows(arr, int(lag), np.zeros_like(arr)))


def diff(x, lag: int = 1, name: str = "x") -> OpResult:
    """
    Row differences of a numeric vector or matrix, lag rows apart

    Positive lag gives the current row minus the row lag rows above,
    negative lag the current row minus the row lag rows below.

    The lagged comparator is padded with the input's own edge rows, so the
    stub rows are compared against themselves and come out as zero. NaN in
    the input propagates to the result (unlike diff_series).

    Returns:
        OpResult with a fresh array of the same shape, or a TypeMismatch
    """
    arr, error = _as_numeric_array(x, name)
    if error is not None:
        return OpResult.failure(error)
    lagged = _shift_rows(arr, int(lag), arr)
    return OpResult.success(arr - lagged)


# ============================================================================
# Series Operators (time index preserved)
# ============================================================================

def lag_series(series, k: int = 1):
    """
    Apply a time lag to a series, padding with the first or last row

    Positive k moves values from k periods in the past to the present,
    negative k moves values from the future to the present. The exposed
    rows hold the first (k > 0) or last (k < 0) original row instead of NaN.

    Returns:
        Same type as series, same index and columns
    """
    check_series(series, "series")
    n_rows = len(series)
    out = series.shift(k)
    if n_rows > 0 and k != 0:
        stub = min(abs(k), n_rows)
        if k > 0:
            out.iloc[:stub] = series.iloc[[0] * stub].to_numpy()
        else:
            out.iloc[n_rows - stub:] = series.iloc[[n_rows - 1] * stub].to_numpy()
    # shift upcasts integers to float for the NaN rows, which are filled by now
    if isinstance(series, pd.Series):
        return out.astype(series.dtype)
    return out.astype(series.dtypes.to_dict())


def diff_series(series, lag: int = 1):
    """
    Time differences of a series, padding with zeros instead of NaN

    Every incomplete row of the result is set to zero: the lag boundary
    rows, and any row where a NaN in the input made the difference missing.
    """
    check_series(series, "series")
    out = series.diff(periods=lag)
    if isinstance(out, pd.DataFrame):
        incomplete = out.isna().any(axis=1)
    else:
        incomplete = out.isna()
    out.loc[incomplete] = 0
    return out
