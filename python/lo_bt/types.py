"""Shared types for the long-only backtester.

The guiding principle is to keep the runtime objects small and explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Position(Enum):
    """Position state tracked by the simulation loop (not by the ledger)."""

    FLAT = 0
    LONG = 1


@dataclass(frozen=True)
class TradeEvent:
    """A single executed buy or sell, emitted only in verbose mode."""

    timestamp: datetime
    side: str  # 'BUY'/'SELL'
    units: float
    price: float
    cash_after: float
    net_wealth_after: float


@dataclass(frozen=True)
class EquityPoint:
    """Net wealth after a processed bar's action."""

    timestamp: datetime
    position: Position
    net_wealth: float


@dataclass(frozen=True)
class Summary:
    """Final result of one strategy run."""

    final_cash: float
    net_performance_pct: float
    trade_count: int
