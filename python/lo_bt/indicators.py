"""Indicator computation utilities.

All statistics are trailing windows ending at the current bar, so a value
at bar t only uses data at or before t. Values are NaN until the window
is full.
"""

from __future__ import annotations

import pandas as pd


def _check_window(window: int) -> int:
    if int(window) != window or window <= 0:
        raise ValueError("window must be a positive integer")
    return int(window)


def rolling_mean(series: pd.Series, window: int) -> pd.Series:
    """Rolling arithmetic mean, e.g. of log returns for momentum."""
    window = _check_window(window)
    return series.astype(float).rolling(window).mean()


def sma(price: pd.Series, window: int) -> pd.Series:
    """Simple moving average of price (full window required)."""
    return rolling_mean(price, window)


def distance(price: pd.Series, window: int) -> pd.Series:
    """Price minus its SMA."""
    return price.astype(float) - sma(price, window)
