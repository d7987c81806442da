"""Performance metrics over a run's net-wealth curve.

All functions take the simulation's equity curve (one ``EquityPoint`` per
processed bar) and return NaN when the curve is too short to say anything.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from .types import EquityPoint


def net_wealth_series(equity_curve: Sequence[EquityPoint]) -> pd.Series:
    """Net wealth indexed by bar timestamp."""
    return pd.Series(
        [float(p.net_wealth) for p in equity_curve],
        index=pd.DatetimeIndex([p.timestamp for p in equity_curve]),
        name="NetWealth",
        dtype=float,
    )


def max_drawdown(equity_curve: Sequence[EquityPoint]) -> float:
    """Largest peak-to-trough loss of net wealth, as a positive fraction.

    Wealth at or below zero counts as a full (1.0) drawdown.
    """
    x = net_wealth_series(equity_curve).to_numpy()
    if len(x) == 0:
        return float("nan")
    peak = np.maximum.accumulate(x)
    dd = 1.0 - x / np.maximum(peak, np.finfo(float).tiny)
    return float(min(np.nanmax(dd), 1.0))


def cagr(equity_curve: Sequence[EquityPoint]) -> float:
    """Compound annual growth from first to last bar (calendar days / 365).

    A run that ends with no wealth left returns -1.0.
    """
    if len(equity_curve) < 2:
        return float("nan")
    first, last = equity_curve[0], equity_curve[-1]
    days = (last.timestamp.date() - first.timestamp.date()).days
    if days <= 0 or first.net_wealth <= 0:
        return float("nan")
    total = float(last.net_wealth) / float(first.net_wealth)
    if total <= 0:
        return -1.0
    return total ** (365.0 / days) - 1.0


def equity_metrics(equity_curve: Sequence[EquityPoint]) -> dict[str, float]:
    """Max drawdown and CAGR of net wealth."""
    return {"max_dd": max_drawdown(equity_curve), "cagr": cagr(equity_curve)}
