"""Signal rules: per-bar enter/exit predicates for the long-only loop.

Each builder computes its indicators over the whole series in one pass and
turns them into two boolean arrays read bar by bar by the simulation loop:

- ``enter[t]``: go long at bar t when flat
- ``exit[t]``: go flat at bar t when long

Rolling windows end at the current bar, so neither array looks ahead.
Comparisons against NaN are False, so undefined bars never trigger.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .errors import InsufficientWarmup
from .indicators import distance as distance_func, rolling_mean as rolling_mean_func, sma as sma_func
from .price_series import PriceSeries


@dataclass(frozen=True, eq=False)
class SignalRule:
    """An (enter, exit) predicate pair plus its warm-up index."""

    name: str
    warmup: int
    indicators: pd.DataFrame
    enter: np.ndarray
    exit: np.ndarray
    description: str = ""

    def __len__(self) -> int:
        return int(len(self.enter))


def check_warmup(rule: SignalRule, series: PriceSeries) -> None:
    """Fail fast when no bar has all rolling statistics defined."""
    if rule.warmup >= len(series):
        raise InsufficientWarmup(
            f"{rule.name} needs warm-up index {rule.warmup} but series has {len(series)} bars"
        )


def _as_bool(x: pd.Series) -> np.ndarray:
    return x.to_numpy(dtype=bool)


def sma_crossover(series: PriceSeries, sma1: int, sma2: int) -> SignalRule:
    """Long while SMA1 > SMA2; exit only on SMA1 < SMA2 (equality holds)."""
    price = series.price
    ind = pd.DataFrame(
        {"price": price, "SMA1": sma_func(price, sma1), "SMA2": sma_func(price, sma2)},
        index=series.index,
    )
    return SignalRule(
        name="sma",
        warmup=max(int(sma1), int(sma2)),
        indicators=ind,
        enter=_as_bool(ind["SMA1"] > ind["SMA2"]),
        exit=_as_bool(ind["SMA1"] < ind["SMA2"]),
        description=f"SMA1={sma1} & SMA2={sma2}",
    )


def momentum(series: PriceSeries, momentum: int) -> SignalRule:
    """Long while the rolling mean log return is positive.

    Enter on mean > 0, exit on mean < 0; an exact zero does neither.
    """
    ind = pd.DataFrame(
        {"return": series.log_return, "momentum": rolling_mean_func(series.log_return, momentum)},
        index=series.index,
    )
    return SignalRule(
        name="momentum",
        warmup=int(momentum),
        indicators=ind,
        enter=_as_bool(ind["momentum"] > 0),
        exit=_as_bool(ind["momentum"] < 0),
        description=f"{momentum} days",
    )


def mean_reversion(series: PriceSeries, sma: int, threshold: float) -> SignalRule:
    """Buy when price < SMA - threshold; sell once price is back at SMA or above.

    The exit fires at the SMA itself, not at SMA + threshold.
    """
    if threshold < 0:
        raise ValueError("threshold must be >= 0")
    price = series.price
    ind = pd.DataFrame({"price": price, "SMA": sma_func(price, sma)}, index=series.index)
    ind["distance"] = distance_func(price, sma)
    return SignalRule(
        name="mean_reversion",
        warmup=int(sma),
        indicators=ind,
        enter=_as_bool(ind["price"] < ind["SMA"] - float(threshold)),
        exit=_as_bool(ind["price"] >= ind["SMA"]),
        description=f"SMA={sma} & thr={threshold}",
    )


STRATEGIES = {
    "sma": sma_crossover,
    "momentum": momentum,
    "mean_reversion": mean_reversion,
}


def build_rule(series: PriceSeries, strategy: str, **params) -> SignalRule:
    """Build a rule by strategy name."""
    try:
        builder = STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"Unknown strategy: {strategy!r} (expected one of {sorted(STRATEGIES)})") from None
    return builder(series, **params)
