"""Price series: the read-only substrate of every run.

Holds (timestamp, price, log return) bars indexed by integer position.
The first raw observation is dropped because its return is undefined.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .errors import IndexOutOfRange, InvalidSeries


class PriceSeries:
    """Ordered, time-indexed price/return bars for a single symbol."""

    def __init__(self, df: pd.DataFrame, symbol: str = ""):
        missing = [c for c in ("price", "return") if c not in df.columns]
        if missing:
            raise InvalidSeries(f"Missing required columns: {missing}")

        data = df[["price", "return"]].astype(float).copy()
        if not isinstance(data.index, pd.DatetimeIndex):
            data.index = pd.to_datetime(data.index)

        if data.index.has_duplicates:
            raise InvalidSeries("duplicate timestamps")
        if not data.index.is_monotonic_increasing:
            raise InvalidSeries("timestamps must be strictly increasing")

        price = data["price"].to_numpy()
        if not (np.all(np.isfinite(price)) and np.all(price > 0)):
            raise InvalidSeries("prices must be finite and positive")
        if data["return"].isna().any():
            raise InvalidSeries("log returns must be defined for every bar")

        self.symbol = symbol
        self._df = data
        self._price = price.copy()
        self._price.setflags(write=False)

    @classmethod
    def from_prices(
        cls,
        prices: Sequence[float] | pd.Series,
        index: Optional[Sequence] = None,
        symbol: str = "",
    ) -> "PriceSeries":
        """Build bars from raw observations.

        N raw prices give N-1 bars: the first observation only seeds the
        first log return. Without an index, daily dates from 2000-01-03 are used.
        """
        if isinstance(prices, pd.Series) and index is None:
            raw = prices.astype(float)
        else:
            values = np.asarray(prices, dtype=float)
            if index is None:
                index = pd.date_range("2000-01-03", periods=len(values), freq="D")
            raw = pd.Series(values, index=pd.to_datetime(index))

        if not np.all(np.isfinite(raw.to_numpy())) or (raw <= 0).any():
            raise InvalidSeries("prices must be finite and positive")
        df = pd.DataFrame({"price": raw})
        df["return"] = np.log(df["price"] / df["price"].shift(1))
        return cls(df.dropna(), symbol=symbol)

    def __len__(self) -> int:
        return int(len(self._df))

    def __repr__(self) -> str:
        return f"PriceSeries(symbol={self.symbol!r}, bars={len(self)})"

    @property
    def index(self) -> pd.DatetimeIndex:
        return self._df.index

    @property
    def price(self) -> pd.Series:
        return self._df["price"].copy()

    @property
    def log_return(self) -> pd.Series:
        return self._df["return"].copy()

    @property
    def frame(self) -> pd.DataFrame:
        """Copy of the underlying frame (columns: price, return)."""
        return self._df.copy()

    def select(self, start: str | datetime | None = None, end: str | datetime | None = None) -> "PriceSeries":
        """Restrict to an inclusive date range."""
        df = self._df.loc[start:end]
        return PriceSeries(df, symbol=self.symbol)

    def _check_bar(self, bar: int) -> int:
        n = len(self)
        if not 0 <= bar < n:
            raise IndexOutOfRange(f"bar {bar} outside 0..{n - 1}")
        return int(bar)

    def get_bar_timestamp(self, bar: int) -> datetime:
        return self._df.index[self._check_bar(bar)].to_pydatetime()

    def get_price(self, bar: int) -> float:
        return float(self._price[self._check_bar(bar)])

    def get_date_price(self, bar: int) -> tuple[datetime, float]:
        """Return the timestamp and price for the given bar."""
        bar = self._check_bar(bar)
        return self._df.index[bar].to_pydatetime(), float(self._price[bar])
