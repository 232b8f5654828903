"""
Chart an OHLC series with a fixed y-axis range and background shading
"""
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .config import SHADE_FALSE_COLOR, SHADE_TRUE_COLOR
from .errors import InvalidArgument
from .series import as_frame, field_name, symbol_name


def _ohlc_positions(frame):
    """Column positions of Open, High, Low, Close, or None if frame isn't OHLC"""
    fields = [field_name(c).lower() for c in frame.columns]
    try:
        return [fields.index(f) for f in ('open', 'high', 'low', 'close')]
    except ValueError:
        return None


def _draw_candles(ax, x, values, positions):
    op, hi, lo, cl = (values[:, p] for p in positions)
    up = cl >= op
    width = 0.6 * (np.min(np.diff(x)) if len(x) > 1 else 1.0)
    ax.vlines(x, lo, hi, color='black', linewidth=0.8)
    ax.bar(x[up], (cl - op)[up], bottom=op[up], width=width, color='green', edgecolor='black')
    ax.bar(x[~up], (op - cl)[~up], bottom=cl[~up], width=width, color='red', edgecolor='black')


def chart_xts(series, ylim=None, shade=None, ax=None, title=None):
    """
    Plot a series with an optional fixed y-axis range and vertical shading

    OHLC tables are drawn as candlesticks, other series as lines.

    Args:
        series: DataFrame or Series with a DatetimeIndex
        ylim: (low, high) y-axis range
        shade: boolean mask with one value per row; True rows get a light
               green background, False rows light grey
        ax: matplotlib Axes to draw on (default: a new figure)
        title: chart title (default: the symbol name)

    Returns:
        The matplotlib Axes
    """
    frame = as_frame(series, "series")
    if not isinstance(frame.index, pd.DatetimeIndex):
        raise InvalidArgument("series must have a DatetimeIndex")
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 5))

    x = frame.index.to_numpy()
    x_num = np.arange(len(frame), dtype=float)
    values = frame.to_numpy(dtype=float)
    positions = _ohlc_positions(frame)
    if positions is not None:
        _draw_candles(ax, x_num, values, positions)
    else:
        for j, col in enumerate(frame.columns):
            ax.plot(x_num, values[:, j], label=str(col))
        if frame.shape[1] > 1:
            ax.legend()

    if ylim is not None:
        if len(ylim) != 2:
            raise InvalidArgument(f"ylim must have two elements, got {len(ylim)}")
        ax.set_ylim(*ylim)

    if shade is not None:
        mask = np.asarray(shade, dtype=bool)
        if mask.shape != (len(frame),):
            raise InvalidArgument(f"shade must have one value per row ({len(frame)}), got shape {mask.shape}")
        trans = ax.get_xaxis_transform()
        ax.fill_between(x_num, 0, 1, where=mask, step='mid', transform=trans,
                        color=SHADE_TRUE_COLOR, zorder=0)
        ax.fill_between(x_num, 0, 1, where=~mask, step='mid', transform=trans,
                        color=SHADE_FALSE_COLOR, zorder=0)

    # rows are plotted by position so gaps (nights, weekends) don't show
    if len(x) > 0:
        ticks = np.linspace(0, len(x) - 1, num=min(len(x), 6)).astype(int)
        ax.set_xticks(ticks)
        ax.set_xticklabels([pd.Timestamp(x[t]).strftime('%Y-%m-%d') for t in ticks], rotation=30)

    if title is None and frame.shape[1] > 0:
        title = symbol_name(frame)
    if title:
        ax.set_title(title)
    return ax
