from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from lo_bt.price_series import PriceSeries


def random_walk(n: int = 300, seed: int = 0, start: float = 100.0, vol: float = 0.015) -> PriceSeries:
    rng = np.random.default_rng(seed)
    steps = rng.normal(0.0002, vol, size=n + 1)
    prices = start * np.exp(np.cumsum(steps))
    index = pd.bdate_range("2019-01-01", periods=n + 1)
    return PriceSeries.from_prices(prices, index=index, symbol="TEST")


@pytest.fixture()
def walk() -> PriceSeries:
    return random_walk()


@pytest.fixture()
def five_bars() -> PriceSeries:
    # bars: 100, 102, 101, 105, 108 (99 only seeds the first return)
    return PriceSeries.from_prices([99, 100, 102, 101, 105, 108], symbol="FIVE")
