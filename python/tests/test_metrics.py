from __future__ import annotations

import math
from datetime import datetime, timedelta

import pytest

from lo_bt.metrics import cagr, equity_metrics, max_drawdown, net_wealth_series
from lo_bt.simulation import LongOnlyBacktest
from lo_bt.types import EquityPoint, Position


def curve(values, start=datetime(2020, 1, 1), step_days=1):
    return [
        EquityPoint(timestamp=start + timedelta(days=i * step_days), position=Position.FLAT, net_wealth=v)
        for i, v in enumerate(values)
    ]


def test_max_drawdown_on_hand_built_curve():
    # peak 120 -> trough 90 is the worst; the later 110 -> 100 dip is smaller
    assert max_drawdown(curve([100, 120, 90, 110, 100, 130])) == pytest.approx(0.25)


def test_max_drawdown_monotone_curve_is_zero():
    assert max_drawdown(curve([100, 101, 102])) == 0.0


def test_max_drawdown_caps_wiped_out_wealth():
    assert max_drawdown(curve([100, 50, -10])) == 1.0


def test_empty_and_short_curves_are_nan():
    assert math.isnan(max_drawdown([]))
    assert math.isnan(cagr(curve([100])))


def test_cagr_over_one_year():
    c = curve([100.0, 121.0], start=datetime(2021, 1, 1), step_days=365)
    assert cagr(c) == pytest.approx(0.21)


def test_cagr_over_two_years():
    c = curve([100.0, 110.0, 121.0], start=datetime(2021, 1, 1), step_days=365)
    assert cagr(c) == pytest.approx(0.10)


def test_cagr_when_wealth_is_gone():
    c = curve([100.0, 50.0, -5.0], step_days=30)
    assert cagr(c) == -1.0


def test_net_wealth_series_is_time_indexed():
    c = curve([1.0, 2.0])
    s = net_wealth_series(c)
    assert list(s) == [1.0, 2.0]
    assert s.index[1] == c[1].timestamp


def test_equity_metrics_on_a_run(walk):
    bt = LongOnlyBacktest(walk)
    bt.run_sma_strategy(5, 20)
    m = equity_metrics(bt.equity_curve)
    assert 0.0 <= m["max_dd"] <= 1.0
    assert math.isfinite(m["cagr"])
