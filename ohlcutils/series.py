"""
OrderedSeries helpers
An OrderedSeries is a pandas DataFrame (or single-column Series) with a
strictly increasing index and unique, numeric, "SYMBOL.Field" named columns
"""
import re
import numpy as np
import pandas as pd

from .config import FIELD_SEPARATOR, OHLC_FIELDS
from .errors import InvalidArgument


def check_series(x, name: str = "series"):
    """
    Validate an OrderedSeries argument

    Args:
        x: DataFrame or Series
        name: argument name used in error messages

    Returns:
        x, unchanged
    """
    if not isinstance(x, (pd.DataFrame, pd.Series)):
        raise InvalidArgument(f"argument \"{name}\" must be a pandas DataFrame or Series, "
                              f"got {type(x).__name__}")
    frame = x.to_frame() if isinstance(x, pd.Series) else x
    if frame.columns.duplicated().any():
        raise InvalidArgument(f"argument \"{name}\" has duplicate column names")
    non_numeric = [c for c, dtype in frame.dtypes.items()
                   if not pd.api.types.is_numeric_dtype(dtype) or pd.api.types.is_bool_dtype(dtype)]
    if non_numeric:
        raise InvalidArgument(f"argument \"{name}\" has non-numeric columns: {non_numeric}")
    if len(frame.index) > 1 and not (frame.index.is_monotonic_increasing and frame.index.is_unique):
        raise InvalidArgument(f"argument \"{name}\" index must be strictly increasing")
    return x


def as_frame(x, name: str = "series") -> pd.DataFrame:
    """Validated DataFrame view of x (Series become single-column frames)"""
    check_series(x, name)
    if isinstance(x, pd.Series):
        return x.to_frame()
    return x


def field_name(column) -> str:
    """Field part of a column name ("SPY.Close" -> "Close", "Close" -> "Close")"""
    return str(column).split(FIELD_SEPARATOR)[-1]


def symbol_name(series, field: int = 0) -> str:
    """
    Extract the symbol name (ticker) of an OHLC series from its first column name

    The column name is assumed to be "symbol.Field"; field=1 returns the
    field part instead, e.g. "Open" from "SPY.Open".
    """
    columns = series.columns if isinstance(series, pd.DataFrame) else [series.name]
    if len(columns) == 0 or columns[0] is None:
        raise InvalidArgument("series has no column names")
    parts = str(columns[0]).split(FIELD_SEPARATOR)
    try:
        return parts[field]
    except IndexError:
        raise InvalidArgument(
            f"column name \"{columns[0]}\" has no part {field}") from None


def extract_column(ohlc, col_name: str = "Close") -> pd.DataFrame:
    """
    Extract price columns from an OHLC series by field name

    The field part of each column name (after the separator) is matched
    against col_name as a case-insensitive prefix, so "vol" matches
    "SPY.Volume". Symbols such as "LOW" are not confused with the Low
    field because only the field part is matched.

    Args:
        ohlc: OHLC DataFrame
        col_name: field name (or its prefix) to extract

    Returns:
        DataFrame with the matching columns, in their original order
    """
    frame = as_frame(ohlc, "ohlc")
    pattern = re.compile(re.escape(col_name), re.IGNORECASE)
    matches = [c for c in frame.columns if pattern.match(field_name(c))]
    if not matches:
        raise InvalidArgument(f"No column name containing \"{col_name}\"")
    return frame.loc[:, matches].copy()


def make_ohlc(symbol: str, data, index=None, fields=None) -> pd.DataFrame:
    """
    Build an OHLC DataFrame with "symbol.Field" column names

    Args:
        symbol: ticker used as column prefix
        data: 2-D array-like, one column per field
        index: row index (DatetimeIndex or None for positions)
        fields: field names (default: first ncol of Open..Adjusted)
    """
    values = np.asarray(data, dtype=float)
    if values.ndim != 2:
        raise InvalidArgument("data must be 2-dimensional")
    if fields is None:
        if values.shape[1] > len(OHLC_FIELDS):
            raise InvalidArgument(f"expected at most {len(OHLC_FIELDS)} columns, got {values.shape[1]}")
        fields = OHLC_FIELDS[:values.shape[1]]
    columns = [f"{symbol}{FIELD_SEPARATOR}{f}" for f in fields]
    return pd.DataFrame(values, index=index, columns=columns)
