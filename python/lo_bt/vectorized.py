"""Vectorized accounting of the long-only strategies.

Recomputes the same economics with whole-series operations instead of the
bar-by-bar loop. Positions come from the same enter/exit predicates, so
they match the event-driven loop bar for bar; returns are compounded in
log space with a proportional cost `tc` charged on every position change.
Strategy and buy-and-hold curves both start once the rolling windows are
full, so the benchmark runs from the last warm-up price to the end.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .price_series import PriceSeries
from .signals import SignalRule, check_warmup


@dataclass(frozen=True)
class VectorizedResult:
    data: pd.DataFrame
    aperf: float  # absolute strategy performance (final wealth)
    operf: float  # out-/underperformance vs buy-and-hold


def vectorized_positions(rule: SignalRule) -> np.ndarray:
    """0/1 position per bar: 1 on enter, 0 on exit, else carry the previous state."""
    n = len(rule)
    raw = np.full(n, np.nan)
    raw[rule.exit] = 0.0
    # enter and exit never both hold on one bar, so ffill reproduces the loop
    raw[rule.enter] = 1.0
    raw[: rule.warmup] = 0.0
    pos = pd.Series(raw).ffill().fillna(0.0)
    return pos.to_numpy()


def run_vectorized(rule: SignalRule, series: PriceSeries, amount: float, tc: float = 0.0) -> VectorizedResult:
    check_warmup(rule, series)

    data = series.frame
    data["position"] = vectorized_positions(rule)
    data["strategy"] = data["position"].shift(1) * data["return"]
    trades = data["position"].diff().fillna(0) != 0
    data.loc[trades, "strategy"] -= tc
    data = data.iloc[rule.warmup :].copy()

    data["creturns"] = amount * np.exp(data["return"].cumsum())
    data["cstrategy"] = amount * np.exp(data["strategy"].cumsum())

    aperf = float(data["cstrategy"].iloc[-1])
    operf = aperf - float(data["creturns"].iloc[-1])
    return VectorizedResult(data=data, aperf=round(aperf, 2), operf=round(operf, 2))
