"""Performance report derived from a closed-out ledger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import pandas as pd

from .types import EquityPoint, Summary

if TYPE_CHECKING:
    from .ledger import Ledger

RULE = "=" * 55


@dataclass(frozen=True)
class PerformanceReport:
    """Read-only view of a finished run."""

    summary: Summary

    @classmethod
    def from_ledger(cls, ledger: "Ledger") -> "PerformanceReport":
        return cls(
            Summary(
                final_cash=float(ledger.cash),
                net_performance_pct=float(ledger.performance_pct),
                trade_count=int(ledger.trades),
            )
        )

    def lines(self) -> list[str]:
        s = self.summary
        return [
            f"Final balance   [$] {s.final_cash:.2f}",
            f"Net performance [%] {s.net_performance_pct:.2f}",
            f"Trades Executed [#] {s.trade_count}",
            RULE,
        ]


def equity_frame(equity_curve: Sequence[EquityPoint]) -> pd.DataFrame:
    """Equity curve as a frame indexed by Date (columns: Position, NetWealth)."""
    return pd.DataFrame(
        [(p.timestamp, p.position.value, p.net_wealth) for p in equity_curve],
        columns=["Date", "Position", "NetWealth"],
    ).set_index("Date")

