"""
End points and aggregation to lower periodicity
End points are row positions delimiting aggregation intervals: interval i
covers rows end_points[i]:end_points[i+1]
"""
import numpy as np
import pandas as pd

from .config import DEFAULT_INTERVAL, DEFAULT_OFFSET, FIELD_AGGREGATION, PERIOD_FREQ
from .errors import InvalidArgument
from .series import as_frame, field_name


def compute_endpoints(length, interval: int = DEFAULT_INTERVAL, offset: int = DEFAULT_OFFSET) -> np.ndarray:
    """
    Equally spaced end points over a series

    The offset shifts the end points forward and creates an initial stub
    interval of offset rows. When the length isn't a multiple of the
    interval, a final stub interval covers the tail.

    Args:
        length: number of rows, or any sized object (a series)
        interval: number of rows per interval
        offset: number of rows in the initial stub interval

    Returns:
        int64 array starting at 0 and ending at length

    Example:
        compute_endpoints(20, interval=7, offset=4) -> [0, 4, 11, 18, 20]
    """
    n_rows = length if isinstance(length, (int, np.integer)) else len(length)
    n_rows = int(n_rows)
    if n_rows < 0:
        raise InvalidArgument(f"length must be non-negative, got {n_rows}")
    if interval < 1:
        raise InvalidArgument(f"interval must be positive, got {interval}")
    if offset < 0:
        raise InvalidArgument(f"offset must be non-negative, got {offset}")
    if offset >= interval:
        raise InvalidArgument("offset must be less than interval")

    # number of intervals that fit over the rows, plus one past the end
    num_agg = n_rows // interval
    end_points = offset + interval * np.arange(num_agg + 2, dtype=np.int64)
    if offset > 0:
        end_points = np.concatenate(([0], end_points))

    # generation overshoots by at most two points
    for _ in range(2):
        if end_points[-1] > n_rows:
            end_points = end_points[:-1]
    if end_points[-1] < n_rows:
        end_points = np.append(end_points, n_rows)
    return end_points.astype(np.int64)


def calendar_endpoints(index, period: str = "days", k: int = 1) -> np.ndarray:
    """
    End points at the last row of every k calendar periods

    Args:
        index: DatetimeIndex (or a series carrying one)
        period: "seconds", "minutes", "hours", "days", "weeks", "months",
                "quarters" or "years"
        k: number of periods per interval
    """
    if isinstance(index, (pd.DataFrame, pd.Series)):
        index = index.index
    if not isinstance(index, pd.DatetimeIndex):
        raise InvalidArgument("calendar end points need a DatetimeIndex")
    if period not in PERIOD_FREQ:
        raise InvalidArgument(f"Unknown period \"{period}\", expected one of {list(PERIOD_FREQ)}")
    if k < 1:
        raise InvalidArgument(f"k must be positive, got {k}")

    n_rows = len(index)
    if n_rows == 0:
        return np.zeros(1, dtype=np.int64)

    stamps = index.tz_localize(None) if index.tz is not None else index
    ordinals = stamps.to_period(PERIOD_FREQ[period]).asi8
    # every row where the calendar period changes starts a new interval
    changes = np.flatnonzero(np.diff(ordinals) != 0) + 1
    end_points = np.concatenate(([0], changes, [n_rows])).astype(np.int64)

    if k > 1:
        end_points = end_points[::k]
        if end_points[-1] != n_rows:
            end_points = np.append(end_points, n_rows)
    return end_points


def _check_endpoints(end_points, n_rows: int) -> np.ndarray:
    end_points = np.asarray(end_points, dtype=np.int64)
    if end_points.ndim != 1 or len(end_points) == 0:
        raise InvalidArgument("end_points must be a non-empty 1-D integer sequence")
    if end_points[0] != 0:
        raise InvalidArgument(f"end_points must start at 0, got {end_points[0]}")
    if end_points[-1] != n_rows:
        raise InvalidArgument(f"end_points must end at the row count {n_rows}, got {end_points[-1]}")
    if np.any(np.diff(end_points) <= 0):
        raise InvalidArgument("end_points must be strictly increasing")
    return end_points


def to_period(ohlc, period: str = "minutes", k: int = 1, end_points=None) -> pd.DataFrame:
    """
    Aggregate an OHLC series to a lower periodicity

    Rows between consecutive end points collapse into one row stamped with
    the last timestamp of the interval. Open takes the first value, High
    the max, Low the min, Close the last, Volume the sum; Adjusted and any
    other field take the last value.

    Args:
        ohlc: OHLC DataFrame
        period: calendar period used when end_points is None
        k: number of periods per interval
        end_points: explicit end points, period and k are ignored when given

    Returns:
        DataFrame with one row per interval and the same columns
    """
    frame = as_frame(ohlc, "ohlc")
    n_rows = len(frame)
    if end_points is None:
        end_points = calendar_endpoints(frame.index, period=period, k=k)
    end_points = _check_endpoints(end_points, n_rows)
    if n_rows == 0:
        return frame.iloc[:0].copy()

    starts = end_points[:-1]
    lasts = end_points[1:] - 1
    out = {}
    for col in frame.columns:
        values = frame[col].to_numpy(dtype=float)
        how = FIELD_AGGREGATION.get(field_name(col).lower(), "last")
        if how == "first":
            out[col] = values[starts]
        elif how == "max":
            out[col] = np.maximum.reduceat(values, starts)
        elif how == "min":
            out[col] = np.minimum.reduceat(values, starts)
        elif how == "sum":
            out[col] = np.add.reduceat(values, starts)
        else:
            out[col] = values[lasts]
    return pd.DataFrame(out, index=frame.index[lasts], columns=frame.columns)
