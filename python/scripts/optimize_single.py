"""Example: optimize a strategy on one window and validate on the next."""

from __future__ import annotations

import argparse
import logging

from lo_bt.backtest import run_strategy
from lo_bt.config import BacktestConfig, CostConfig
from lo_bt.data_provider import CsvProvider, YfinanceProvider
from lo_bt.optimize import GRIDS, random_search


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--symbol", type=str, default="AAPL")
    p.add_argument("--strategy", type=str, default="sma", choices=sorted(GRIDS))
    p.add_argument("--csv", type=str, default=None)
    p.add_argument("--price_label", type=str, default="close")
    p.add_argument("--train_start", type=str, default="2018-01-01")
    p.add_argument("--train_end", type=str, default="2018-12-31")
    p.add_argument("--valid_start", type=str, default="2019-01-01")
    p.add_argument("--valid_end", type=str, default="2019-12-31")
    p.add_argument("--ftc", type=float, default=0.0)
    p.add_argument("--ptc", type=float, default=0.001)
    p.add_argument("--n", type=int, default=50)
    p.add_argument("--out", type=str, default="outputs_opt")
    args = p.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if args.csv:
        series = CsvProvider().fetch(args.csv, args.symbol, price_label=args.price_label)
    else:
        series = YfinanceProvider().fetch(args.symbol, args.train_start, args.valid_end, price_label=args.price_label)

    cost_cfg = CostConfig(fixed_cost=args.ftc, proportional_cost=args.ptc)
    bt_cfg = BacktestConfig(symbol=args.symbol)

    results = random_search(
        series.select(args.train_start, args.train_end),
        strategy=args.strategy,
        n_evals=args.n,
        output_dir=args.out,
        cost_cfg=cost_cfg,
        bt_cfg=bt_cfg,
    )
    if not results:
        raise SystemExit("no parameter set fits the training window")

    best = results[0]
    print("Best params (train):", best.params, f"score={best.score:.2f}")

    summary, _ = run_strategy(
        series.select(args.valid_start, args.valid_end),
        args.strategy,
        best.params,
        output_dir=f"{args.out}/valid",
        cost_cfg=cost_cfg,
        bt_cfg=bt_cfg,
    )
    print("VALID net performance [%]:", round(summary.net_performance_pct, 2))
    print("VALID trades:", summary.trade_count)


if __name__ == "__main__":
    main()
