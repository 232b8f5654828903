"""
OHLC Transforms: price adjustment and reduced form
"""
import pandas as pd

from .errors import InvalidArgument
from .ops_ts import diff_series
from .series import as_frame


def adjust_ohlc(ohlc: pd.DataFrame) -> pd.DataFrame:
    """
    Adjust the four price columns with the Adjusted (sixth) column

    Open, High, Low and Close are multiplied by Adjusted / Close, which
    accounts for splits and dividends. Volume and Adjusted are unchanged.

    Args:
        ohlc: DataFrame with columns Open, High, Low, Close, Volume, Adjusted

    Returns:
        New DataFrame with the same shape, index and columns
    """
    frame = as_frame(ohlc, "ohlc")
    if frame.shape[1] < 6:
        raise InvalidArgument(f"ohlc needs 6 columns (Open..Adjusted), got {frame.shape[1]}")
    adjusted = frame.astype(float)
    ratio = adjusted.iloc[:, 5] / adjusted.iloc[:, 3]
    adjusted.iloc[:, :4] = adjusted.iloc[:, :4].mul(ratio, axis=0)
    return adjusted


def reduce_form(ohlc: pd.DataFrame) -> pd.DataFrame:
    """
    Reduced form of an OHLC series

    Close becomes its one-period difference, with the first row keeping the
    original Close; Open, High and Low become their difference from Close.
    Volume is unchanged. Only the first five columns are kept.
    """
    frame = as_frame(ohlc, "ohlc").iloc[:, :5].astype(float)
    if frame.shape[1] < 5:
        raise InvalidArgument(f"ohlc needs 5 columns (Open..Volume), got {frame.shape[1]}")
    close = frame.iloc[:, 3]
    reduced = frame.copy()
    reduced.iloc[:, :3] = frame.iloc[:, :3].sub(close, axis=0)
    close_diff = diff_series(close, lag=1)
    if len(close_diff) > 0:
        close_diff.iloc[0] = close.iloc[0]
    reduced.iloc[:, 3] = close_diff
    return reduced


def expand_form(reduced: pd.DataFrame) -> pd.DataFrame:
    """
    Standard form of an OHLC series from its reduced form (inverse of reduce_form)

    Close is rebuilt as the cumulative sum of the reduced Close, then Open,
    High and Low are shifted back by the rebuilt Close.
    """
    frame = as_frame(reduced, "reduced").iloc[:, :5].astype(float)
    if frame.shape[1] < 5:
        raise InvalidArgument(f"reduced needs 5 columns (Open..Volume), got {frame.shape[1]}")
    close = frame.iloc[:, 3].cumsum()
    expanded = frame.copy()
    expanded.iloc[:, :3] = frame.iloc[:, :3].add(close, axis=0)
    expanded.iloc[:, 3] = close
    return expanded


def diff_ohlc(ohlc: pd.DataFrame, reduce: bool = True) -> pd.DataFrame:
    """Reduced form of an OHLC series (reduce=True), or its standard form (reduce=False)"""
    if reduce:
        return reduce_form(ohlc)
    return expand_form(ohlc)
