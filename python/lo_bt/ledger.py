"""Cash/position accounting for a single symbol.

State (cash, units, trades) changes only through buy/sell/close_out.
Signal code never touches the ledger directly.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional

from .config import CostConfig
from .cost_model import CostModel
from .errors import InvalidOrder
from .price_series import PriceSeries
from .types import TradeEvent

logger = logging.getLogger(__name__)

TradeObserver = Callable[[TradeEvent], None]


class Ledger:
    """Tracks cash balance, unit holdings and trade count.

    Attributes
    ==========
    initial_amount: float
        cash at the start of every run
    cash: float
        current cash balance (may go negative unless strict)
    units: float
        units currently held
    trades: int
        buy/sell/close-out calls since the last reset
    verbose: bool
        emit trade events and log individual trades
    strict: bool
        reject orders that overdraw cash or sell unheld units
    """

    def __init__(
        self,
        series: PriceSeries,
        initial_amount: float,
        cost_cfg: CostConfig = CostConfig(),
        verbose: bool = False,
        strict: bool = False,
    ):
        self.series = series
        self.initial_amount = float(initial_amount)
        self.cost_cfg = cost_cfg
        self.cost_model = CostModel(cost_cfg)
        self.verbose = verbose
        self.strict = strict
        self._observers: List[TradeObserver] = []
        self.reset()

    def reset(self) -> None:
        """Restore the initial state before a new run."""
        self.cash = float(self.initial_amount)
        self.units = 0
        self.trades = 0

    def subscribe(self, observer: TradeObserver) -> None:
        """Register a callback for trade events (verbose mode only)."""
        self._observers.append(observer)

    # ---------- valuation ----------

    def net_wealth(self, bar: int) -> float:
        return float(self.cash + self.units * self.series.get_price(bar))

    @property
    def performance_pct(self) -> float:
        """Return on initial amount in percent; meaningful after close-out."""
        return (self.cash - self.initial_amount) / self.initial_amount * 100

    # ---------- orders ----------

    def _resolve_units(self, price: float, units: Optional[float], amount: Optional[float]) -> float:
        if (units is None) == (amount is None):
            raise InvalidOrder("exactly one of units or amount must be given")
        if units is None:
            return math.floor(amount / price)
        return units

    def buy(self, bar: int, units: Optional[float] = None, amount: Optional[float] = None) -> float:
        """Buy `units`, or as many whole units as `amount` pays for at the bar's price."""
        price = self.series.get_price(bar)
        units = self._resolve_units(price, units, amount)

        delta = self.cost_model.buy_cash_delta(units, price)
        if self.strict and self.cash + delta < 0:
            raise InvalidOrder(f"buying {units} units at {price:.2f} needs {-delta:.2f}, cash is {self.cash:.2f}")

        self.cash += delta
        self.units += units
        self.trades += 1
        self._report(bar, "BUY", units, price)
        return units

    def sell(self, bar: int, units: Optional[float] = None, amount: Optional[float] = None) -> float:
        """Sell `units`, or as many whole units as `amount` is worth at the bar's price."""
        price = self.series.get_price(bar)
        units = self._resolve_units(price, units, amount)

        if self.strict and units > self.units:
            raise InvalidOrder(f"selling {units} units but only {self.units} held")

        self.cash += self.cost_model.sell_cash_delta(units, price)
        self.units -= units
        self.trades += 1
        self._report(bar, "SELL", units, price)
        return units

    def close_out(self, bar: int) -> None:
        """Liquidate all holdings at the bar's price, free of costs.

        Counts as a trade even when nothing is held.
        """
        date, price = self.series.get_date_price(bar)
        self.cash += self.units * price
        self.units = 0
        self.trades += 1

        if self.verbose:
            logger.info("%s | inventory %s units at %.2f", date, self.units, price)

    # ---------- observation ----------

    def _report(self, bar: int, side: str, units: float, price: float) -> None:
        if not self.verbose:
            return
        date = self.series.get_bar_timestamp(bar)
        net_wealth = self.net_wealth(bar)
        verb = "BUYING" if side == "BUY" else "SELLING"
        logger.info("%s | %s %s units at %.2f", date, verb, units, price)
        logger.info("%s | current balance %.2f", date, self.cash)
        logger.info("%s | current net wealth %.2f", date, net_wealth)

        event = TradeEvent(
            timestamp=date,
            side=side,
            units=units,
            price=float(price),
            cash_after=float(self.cash),
            net_wealth_after=float(net_wealth),
        )
        for observer in self._observers:
            observer(event)
