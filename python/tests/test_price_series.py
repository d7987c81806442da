from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from lo_bt.errors import IndexOutOfRange, InvalidSeries
from lo_bt.price_series import PriceSeries


def test_from_prices_drops_first_observation():
    s = PriceSeries.from_prices([100.0, 110.0, 99.0])
    assert len(s) == 2
    assert list(s.price) == [110.0, 99.0]
    assert s.log_return.iloc[0] == pytest.approx(math.log(1.1))
    assert s.log_return.iloc[1] == pytest.approx(math.log(99.0 / 110.0))


def test_get_date_price_by_bar(five_bars):
    date, price = five_bars.get_date_price(3)
    assert price == 105.0
    assert date == five_bars.index[3].to_pydatetime()


@pytest.mark.parametrize("bar", [-1, 5, 100])
def test_bar_out_of_range(five_bars, bar):
    with pytest.raises(IndexOutOfRange):
        five_bars.get_date_price(bar)


def test_duplicate_timestamps_rejected():
    idx = pd.to_datetime(["2020-01-01", "2020-01-02", "2020-01-02"])
    df = pd.DataFrame({"price": [1.0, 2.0, 3.0], "return": [0.1, 0.2, 0.3]}, index=idx)
    with pytest.raises(InvalidSeries):
        PriceSeries(df)


def test_unsorted_timestamps_rejected():
    idx = pd.to_datetime(["2020-01-02", "2020-01-01"])
    df = pd.DataFrame({"price": [1.0, 2.0], "return": [0.1, 0.2]}, index=idx)
    with pytest.raises(InvalidSeries):
        PriceSeries(df)


def test_non_positive_price_rejected():
    with pytest.raises(InvalidSeries):
        PriceSeries.from_prices([100.0, 0.0, 101.0])


def test_missing_columns_rejected():
    df = pd.DataFrame({"close": [1.0, 2.0]}, index=pd.date_range("2020-01-01", periods=2))
    with pytest.raises(InvalidSeries):
        PriceSeries(df)


def test_accessors_return_copies(five_bars):
    p = five_bars.price
    p.iloc[0] = -1.0
    assert five_bars.get_price(0) == 100.0
    with pytest.raises(ValueError):
        five_bars._price[0] = 1.0


def test_select_is_inclusive():
    idx = pd.date_range("2020-01-01", periods=6, freq="D")
    s = PriceSeries.from_prices(np.arange(1.0, 7.0), index=idx)
    sub = s.select("2020-01-03", "2020-01-05")
    assert len(sub) == 3
    assert sub.get_price(0) == 3.0
