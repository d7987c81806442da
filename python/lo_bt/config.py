"""Configuration objects.

Style rules:
- keep signatures stable (no alias chaos)
- prefer explicit field names
"""

from __future__ import annotations

from dataclasses import dataclass, fields

# Legacy parameter names -> field names.
_PARAM_ALIASES = {
    "SMA1": "sma1",
    "SMA2": "sma2",
    "SMA": "sma",
    "thr": "threshold",
    "ftc": "fixed_cost",
    "ptc": "proportional_cost",
    "amount": "initial_amount",
}


class _FromParams:
    @classmethod
    def from_params_dict(cls, d: dict):
        """Create the config from a parameter dict.

        Keys may be legacy names (e.g. ``SMA1``, ``ftc``) or field names.
        Unknown keys are ignored.
        """
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for k, v in (d or {}).items():
            key = _PARAM_ALIASES.get(k, k)
            if key in names:
                kwargs[key] = v
        return cls(**kwargs)


@dataclass(frozen=True)
class CostConfig(_FromParams):
    """Transaction costs charged on buy/sell (close-out is free)."""

    # flat amount per trade
    fixed_cost: float = 0.0
    # fraction of notional per trade
    proportional_cost: float = 0.0

    def __post_init__(self) -> None:
        if self.fixed_cost < 0:
            raise ValueError("fixed_cost must be >= 0")
        if self.proportional_cost < 0:
            raise ValueError("proportional_cost must be >= 0")


@dataclass(frozen=True)
class BacktestConfig(_FromParams):
    """Backtest run configuration.

    Notes:
    - `verbose` enables the per-trade event stream and trade log lines.
    - `strict` guards buy/sell against negative cash and selling unheld
      units. The default keeps the permissive legacy behaviour.
    """

    symbol: str = "AAPL"
    initial_amount: float = 1000.0
    verbose: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        if not self.initial_amount > 0:
            raise ValueError("initial_amount must be positive")


@dataclass(frozen=True)
class SmaParams(_FromParams):
    sma1: int = 5
    sma2: int = 20


@dataclass(frozen=True)
class MomentumParams(_FromParams):
    momentum: int = 20


@dataclass(frozen=True)
class MeanReversionParams(_FromParams):
    sma: int = 30
    threshold: float = 3.0
