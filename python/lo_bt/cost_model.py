"""Fixed + proportional cost model."""

from __future__ import annotations

from dataclasses import dataclass

from .config import CostConfig


@dataclass(frozen=True)
class CostBreakdown:
    notional: float
    proportional_fee: float
    fixed_fee: float


class CostModel:
    """Costs:
    - proportional: fraction of notional, applied on buys and sells
    - fixed: flat amount per buy or sell
    - close-out at period end is not charged
    """

    def __init__(self, cfg: CostConfig):
        self.cfg = cfg

    def breakdown(self, units: float, price: float) -> CostBreakdown:
        notional = float(units) * float(price)
        return CostBreakdown(
            notional=notional,
            proportional_fee=notional * float(self.cfg.proportional_cost),
            fixed_fee=float(self.cfg.fixed_cost),
        )

    def buy_cash_delta(self, units: float, price: float) -> float:
        """Cash change of a buy: -(units*price*(1+ptc) + ftc)."""
        b = self.breakdown(units, price)
        return -(b.notional + b.proportional_fee + b.fixed_fee)

    def sell_cash_delta(self, units: float, price: float) -> float:
        """Cash change of a sell: units*price*(1-ptc) - ftc."""
        b = self.breakdown(units, price)
        return b.notional - b.proportional_fee - b.fixed_fee
