"""Error taxonomy.

Every error is terminal for the current run: there is no partial-result
recovery because each bar depends on the previous bar's state.
"""

from __future__ import annotations


class BacktestError(Exception):
    """Base class for all backtest errors."""


class InvalidOrder(BacktestError, ValueError):
    """Ambiguous or missing units/amount, or an order rejected in strict mode."""


class IndexOutOfRange(BacktestError, IndexError):
    """Bar index outside 0..N-1."""


class InsufficientWarmup(BacktestError, ValueError):
    """Strategy windows need more history than the series provides."""


class InvalidSeries(BacktestError, ValueError):
    """Price data violates the PriceSeries invariants."""
