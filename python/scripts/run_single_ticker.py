"""Run the three long-only strategies on one symbol and print the summaries."""

from __future__ import annotations

import argparse
import json
import logging

from lo_bt.config import BacktestConfig, CostConfig, MeanReversionParams, MomentumParams, SmaParams
from lo_bt.data_provider import CsvProvider, YfinanceProvider
from lo_bt.metrics import equity_metrics
from lo_bt.simulation import LongOnlyBacktest


def load_params(path: str | None) -> dict:
    if not path:
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--symbol", type=str, default="AAPL")
    p.add_argument("--start", type=str, default="2019-01-01")
    p.add_argument("--end", type=str, default="2019-12-31")
    p.add_argument("--csv", type=str, default=None, help="CSV path with a Date column and a price column.")
    p.add_argument("--price_label", type=str, default="close", help="Price column to trade on.")
    p.add_argument("--amount", type=float, default=1000.0)
    p.add_argument("--ftc", type=float, default=10.0, help="Fixed transaction cost per trade.")
    p.add_argument("--ptc", type=float, default=0.01, help="Proportional transaction cost per trade.")
    p.add_argument("--params_json", type=str, default=None, help="JSON with SMA1/SMA2/momentum/SMA/threshold keys.")
    p.add_argument("--strict", action="store_true", help="Reject orders that overdraw cash.")
    p.add_argument("--quiet", action="store_true", help="Do not log individual trades.")
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.csv:
        series = CsvProvider().fetch(args.csv, args.symbol, price_label=args.price_label, start=args.start, end=args.end)
    else:
        series = YfinanceProvider().fetch(args.symbol, args.start, args.end, price_label=args.price_label)

    params = load_params(args.params_json)
    sma = SmaParams.from_params_dict(params)
    mom = MomentumParams.from_params_dict(params)
    mr = MeanReversionParams.from_params_dict(params)

    bt = LongOnlyBacktest(
        series,
        cost_cfg=CostConfig(fixed_cost=args.ftc, proportional_cost=args.ptc),
        bt_cfg=BacktestConfig(symbol=args.symbol, initial_amount=args.amount, verbose=not args.quiet, strict=args.strict),
    )

    runs = [
        ("sma", lambda: bt.run_sma_strategy(sma.sma1, sma.sma2)),
        ("momentum", lambda: bt.run_momentum_strategy(mom.momentum)),
        ("mean_reversion", lambda: bt.run_mean_reversion_strategy(mr.sma, mr.threshold)),
    ]
    for name, run in runs:
        summary = run()
        m = equity_metrics(bt.equity_curve)
        print(json.dumps({"strategy": name, **summary.__dict__, **m}))


if __name__ == "__main__":
    main()
