"""Event-driven long-only backtest loop.

One parameterized state machine serves every strategy:
- FLAT + enter[t]  -> buy with all current cash -> LONG
- LONG + exit[t]   -> sell all units            -> FLAT
- after the last bar: mandatory close-out

Bars are processed in ascending order from the rule's warm-up index, so
the decision at bar t only sees indicators up to t and every ledger change
at t is visible at t+1.
"""

from __future__ import annotations

import logging
from typing import List

from .config import BacktestConfig, CostConfig
from .ledger import Ledger
from .price_series import PriceSeries
from .report import PerformanceReport
from .signals import SignalRule, check_warmup, mean_reversion, momentum, sma_crossover
from .types import EquityPoint, Position, Summary

logger = logging.getLogger(__name__)

_TITLES = {
    "sma": "SMA strategy",
    "momentum": "momentum strategy",
    "mean_reversion": "mean reversion strategy",
}


class LongOnlyBacktest:
    """Runs long-only strategies over one shared price series.

    Every run resets the ledger first, so strategies can be run one after
    another on the same instance without leaking state.
    """

    def __init__(
        self,
        series: PriceSeries,
        cost_cfg: CostConfig = CostConfig(),
        bt_cfg: BacktestConfig = BacktestConfig(),
    ):
        self.series = series
        self.cost_cfg = cost_cfg
        self.bt_cfg = bt_cfg
        self.ledger = Ledger(
            series,
            initial_amount=bt_cfg.initial_amount,
            cost_cfg=cost_cfg,
            verbose=bt_cfg.verbose,
            strict=bt_cfg.strict,
        )
        self.position = Position.FLAT
        self.equity_curve: List[EquityPoint] = []

    # ---------- public API ----------

    def run(self, rule: SignalRule) -> Summary:
        """Simulate one strategy from its warm-up index to the last bar."""
        if len(rule) != len(self.series):
            raise ValueError("rule and series lengths differ")

        title = _TITLES.get(rule.name, rule.name)
        logger.info("Running %s | %s", title, rule.description)
        logger.info("fixed costs %s | proportional costs %s", self.cost_cfg.fixed_cost, self.cost_cfg.proportional_cost)

        check_warmup(rule, self.series)
        self._reset()

        last = len(self.series) - 1
        for bar in range(rule.warmup, last + 1):
            self.step(bar, rule)
        self.ledger.close_out(last)
        self.position = Position.FLAT

        report = PerformanceReport.from_ledger(self.ledger)
        for line in report.lines():
            logger.info("%s", line)
        return report.summary

    def step(self, bar: int, rule: SignalRule) -> None:
        """Evaluate the transition table once for bar."""
        if self.position is Position.FLAT:
            if rule.enter[bar]:
                self.ledger.buy(bar, amount=self.ledger.cash)
                self.position = Position.LONG
        elif self.position is Position.LONG:
            if rule.exit[bar]:
                self.ledger.sell(bar, units=self.ledger.units)
                self.position = Position.FLAT

        self.equity_curve.append(
            EquityPoint(
                timestamp=self.series.get_bar_timestamp(bar),
                position=self.position,
                net_wealth=self.ledger.net_wealth(bar),
            )
        )

    def run_sma_strategy(self, sma1: int, sma2: int) -> Summary:
        """SMA crossover strategy
        ======================
        BUY if short SMA crosses above long SMA.
        HOLD, and then SELL when short SMA crosses below long SMA.
        """
        return self.run(sma_crossover(self.series, sma1, sma2))

    def run_momentum_strategy(self, momentum_window: int) -> Summary:
        """Momentum strategy
        =================
        BUY when the rolling average return is positive.
        HOLD, and then SELL when it turns negative.
        """
        return self.run(momentum(self.series, momentum_window))

    def run_mean_reversion_strategy(self, sma: int, threshold: float) -> Summary:
        """Mean reversion strategy
        =======================
        BUY when price is below the SMA by more than threshold.
        HOLD, and then SELL when price is back at the SMA or above.
        """
        return self.run(mean_reversion(self.series, sma, threshold))

    # ---------- internal helpers ----------

    def _reset(self) -> None:
        self.ledger.reset()
        self.position = Position.FLAT
        self.equity_curve = []
