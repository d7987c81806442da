"""Backtest runner utilities."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping, Optional

import pandas as pd

from .config import BacktestConfig, CostConfig
from .data_provider import CsvProvider, YfinanceProvider
from .price_series import PriceSeries
from .report import equity_frame
from .signals import build_rule
from .simulation import LongOnlyBacktest
from .types import Summary, TradeEvent


def run_strategy(
    series: PriceSeries,
    strategy: str,
    params: Mapping[str, Any],
    output_dir: Optional[str | Path] = "outputs",
    cost_cfg: CostConfig = CostConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
) -> tuple[Summary, dict[str, Path]]:
    """Run one named strategy and write equity/trade CSVs.

    Trades are collected from the ledger's event stream, which is only
    produced when ``bt_cfg.verbose`` is set. With ``output_dir=None``
    nothing is written.
    """
    bt = LongOnlyBacktest(series, cost_cfg=cost_cfg, bt_cfg=bt_cfg)
    events: list[TradeEvent] = []
    bt.ledger.subscribe(events.append)

    summary = bt.run(build_rule(series, strategy, **dict(params)))

    if output_dir is None:
        return summary, {}

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    symbol = (series.symbol or bt_cfg.symbol).replace(".", "_")
    eq_path = out_dir / f"equity_{symbol}_{strategy}.csv"
    tr_path = out_dir / f"trades_{symbol}_{strategy}.csv"

    equity_frame(bt.equity_curve).to_csv(eq_path, encoding="utf-8")
    trades = pd.DataFrame(
        [asdict(e) for e in events],
        columns=["timestamp", "side", "units", "price", "cash_after", "net_wealth_after"],
    )
    trades.to_csv(tr_path, index=False, encoding="utf-8")

    return summary, {"equity": eq_path, "trades": tr_path}


def run_from_yfinance(
    symbol: str,
    start: str,
    end: str,
    strategy: str,
    params: Mapping[str, Any],
    interval: str = "1d",
    price_label: str = "Close",
    output_dir: str | Path = "outputs",
    cost_cfg: CostConfig = CostConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
) -> tuple[Summary, dict[str, Path]]:
    """Convenience runner using yfinance."""
    series = YfinanceProvider().fetch(
        symbol=symbol, start=start, end=end, interval=interval, price_label=price_label
    )
    return run_strategy(series, strategy, params, output_dir, cost_cfg, bt_cfg)


def run_from_csv(
    csv_path: str | Path,
    symbol: str,
    strategy: str,
    params: Mapping[str, Any],
    price_label: str = "close",
    start: Optional[str] = None,
    end: Optional[str] = None,
    output_dir: str | Path = "outputs",
    cost_cfg: CostConfig = CostConfig(),
    bt_cfg: BacktestConfig = BacktestConfig(),
) -> tuple[Summary, dict[str, Path]]:
    series = CsvProvider().fetch(csv_path=csv_path, symbol=symbol, price_label=price_label, start=start, end=end)
    return run_strategy(series, strategy, params, output_dir, cost_cfg, bt_cfg)
