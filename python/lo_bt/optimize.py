"""Very small random-search optimizer.

Replicates the "try a handful of windows and compare" exploration loop.
For anything serious, replace this with a mature library.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from .config import BacktestConfig, CostConfig
from .errors import InsufficientWarmup
from .price_series import PriceSeries
from .metrics import equity_metrics
from .signals import build_rule
from .simulation import LongOnlyBacktest

logger = logging.getLogger(__name__)

# candidate grids (keep them small)
GRIDS: dict[str, dict[str, list]] = {
    "sma": {
        "sma1": [5, 10, 15, 20, 30],
        "sma2": [20, 40, 60, 100, 200],
    },
    "momentum": {
        "momentum": [1, 3, 5, 10, 20, 40, 60],
    },
    "mean_reversion": {
        "sma": [10, 20, 30, 50],
        "threshold": [0.0, 1.0, 2.0, 3.0, 5.0],
    },
}


@dataclass(frozen=True)
class OptResult:
    score: float
    net_performance_pct: float
    max_dd: float
    trade_count: int
    params: dict[str, Any]


def _sample(grid: dict[str, list], rng: random.Random) -> dict[str, Any]:
    params = {k: rng.choice(v) for k, v in grid.items()}
    # crossover needs a short and a long window
    if "sma1" in params and params["sma1"] > params["sma2"]:
        params["sma1"], params["sma2"] = params["sma2"], params["sma1"]
    return params


def random_search(
    series: PriceSeries,
    strategy: str,
    n_evals: int = 50,
    seed: int = 7,
    dd_penalty: float = 0.5,
    output_dir: Optional[str | Path] = None,
    cost_cfg: CostConfig = CostConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
) -> list[OptResult]:
    """Random search over a strategy's grid, best-first.

    Score = net performance [%] - dd_penalty * max drawdown [%].
    Parameter sets whose warm-up does not fit the series are skipped.
    """
    if strategy not in GRIDS:
        raise ValueError(f"Unknown strategy: {strategy!r}")
    rng = random.Random(seed)
    bt = LongOnlyBacktest(series, cost_cfg=cost_cfg, bt_cfg=bt_cfg)

    results: list[OptResult] = []
    seen: set[tuple] = set()
    for _ in range(int(n_evals)):
        params = _sample(GRIDS[strategy], rng)
        key = tuple(sorted(params.items()))
        if key in seen:
            continue
        seen.add(key)

        try:
            summary = bt.run(build_rule(series, strategy, **params))
        except InsufficientWarmup:
            logger.debug("skipping %s %s: not enough history", strategy, params)
            continue

        mdd = equity_metrics(bt.equity_curve)["max_dd"]
        score = summary.net_performance_pct - dd_penalty * mdd * 100.0
        results.append(
            OptResult(
                score=float(score),
                net_performance_pct=summary.net_performance_pct,
                max_dd=float(mdd),
                trade_count=summary.trade_count,
                params=params,
            )
        )

    # sort best-first
    results.sort(key=lambda r: r.score, reverse=True)

    if output_dir is not None:
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        rows = []
        for r in results:
            d = dict(r.params)
            d.update({"score": r.score, "net_performance_pct": r.net_performance_pct, "max_dd": r.max_dd, "trades": r.trade_count})
            rows.append(d)
        pd.DataFrame(rows).to_csv(out_dir / f"opt_results_{strategy}.csv", index=False, encoding="utf-8")

    return results
