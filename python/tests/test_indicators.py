from __future__ import annotations

import math

import pandas as pd
import pytest

from lo_bt.indicators import distance, rolling_mean, sma
from lo_bt.signals import mean_reversion


def test_sma_is_trailing_full_window():
    s = sma(pd.Series([1.0, 2.0, 3.0, 4.0]), 3)
    assert math.isnan(s.iloc[0]) and math.isnan(s.iloc[1])
    assert list(s.iloc[2:]) == [2.0, 3.0]


def test_rolling_mean_of_returns():
    r = rolling_mean(pd.Series([0.1, -0.1, 0.3]), 2)
    assert r.iloc[1] == pytest.approx(0.0)
    assert r.iloc[2] == pytest.approx(0.1)


def test_distance_is_price_minus_sma():
    d = distance(pd.Series([10.0, 12.0, 8.0]), 2)
    assert math.isnan(d.iloc[0])
    assert list(d.iloc[1:]) == [1.0, -2.0]


@pytest.mark.parametrize("window", [0, -3, 2.5])
def test_bad_window(window):
    with pytest.raises(ValueError):
        rolling_mean(pd.Series([1.0, 2.0]), window)


def test_mean_reversion_exposes_distance(five_bars):
    ind = mean_reversion(five_bars, 2, 1.0).indicators
    pd.testing.assert_series_equal(
        ind["distance"], ind["price"] - ind["SMA"], check_names=False
    )
