"""
Recursive Merge
Combine a list of objects pairwise, halving the list each round, instead of
a left fold that re-copies the growing result for every item
"""
import numpy as np
import pandas as pd

from .errors import InvalidArgument


def reduce_pairwise(items, combine, *args, **kwargs):
    """
    Reduce a sequence of objects to one by combining neighbours pairwise

    Each round combines items (0, 1), (2, 3), ... and carries an unpaired
    last item forward unchanged, until one item is left. The number of
    rounds is logarithmic in len(items). For an associative combine the
    result equals the sequential left fold.

    Args:
        items: sequence of objects (series, arrays, ...)
        combine: binary function returning one object from two
        *args, **kwargs: extra arguments passed to combine

    Returns:
        A single object
    """
    pending = list(items)
    if not pending:
        raise InvalidArgument("items must not be empty")
    while len(pending) > 1:
        pending = [
            combine(pending[i], pending[i + 1], *args, **kwargs)
            if i + 1 < len(pending) else pending[i]
            for i in range(0, len(pending), 2)
        ]
    return pending[0]


def _rbind(first, second):
    """Row-concatenate two objects of the same kind"""
    if isinstance(first, (pd.DataFrame, pd.Series)):
        return pd.concat([first, second])
    if isinstance(first, np.ndarray):
        return np.concatenate([first, second], axis=0)
    if isinstance(first, (list, tuple)):
        return first + second
    raise InvalidArgument(f"Can't concatenate objects of type {type(first).__name__}")


def concat_all(items):
    """
    Row-concatenate a list of series, arrays or lists into one

    Same result as pd.concat(items) on a list of series, e.g. rebuilding a
    series split into daily chunks.
    """
    return reduce_pairwise(items, _rbind)


def merge_columns(first, second, how: str = "outer"):
    """Merge two series column-wise, aligning rows on the index"""
    return pd.concat([first, second], axis=1, join=how)


def apply_symbols(func, symbols=None, env_in=None, env_out=None, out_name="merged", **kwargs):
    """
    Apply a function to the series of several symbols and merge the outputs

    Args:
        func: function returning a series from a series (e.g. extract_column)
        symbols: symbols to process (default: all keys of env_in, sorted)
        env_in: mapping from symbol to series
        env_out: mapping receiving the merged output
        out_name: key of the merged output in env_out
        **kwargs: extra arguments passed to func

    Returns:
        out_name
    """
    if env_in is None or env_out is None:
        raise InvalidArgument("env_in and env_out mappings are required")
    if symbols is None:
        symbols = sorted(env_in)
    missing = [s for s in symbols if s not in env_in]
    if missing:
        raise InvalidArgument(f"Symbols not found in env_in: {missing}")

    outputs = [func(env_in[symbol], **kwargs) for symbol in symbols]
    env_out[out_name] = reduce_pairwise(outputs, merge_columns)
    return out_name
