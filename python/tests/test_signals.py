from __future__ import annotations

import numpy as np
import pytest

from lo_bt.errors import InsufficientWarmup
from lo_bt.indicators import sma
from lo_bt.price_series import PriceSeries
from lo_bt.signals import build_rule, check_warmup, mean_reversion, momentum, sma_crossover


def test_sma_rule_predicates(five_bars):
    rule = sma_crossover(five_bars, 1, 2)
    assert rule.warmup == 2
    assert list(rule.enter) == [False, True, False, True, True]
    assert list(rule.exit) == [False, False, True, False, False]


def test_indicators_do_not_look_ahead(walk):
    full = sma_crossover(walk, 5, 20)
    cut = PriceSeries(walk.frame.iloc[:150])
    part = sma_crossover(cut, 5, 20)
    np.testing.assert_array_equal(full.enter[:150], part.enter)
    np.testing.assert_array_equal(full.exit[:150], part.exit)


def test_undefined_windows_never_trigger(walk):
    rule = momentum(walk, 10)
    assert not rule.enter[:9].any()
    assert not rule.exit[:9].any()


def test_mean_reversion_exit_at_sma(five_bars):
    rule = mean_reversion(five_bars, 2, 0.0)
    # price >= SMA(2) wherever price did not fall
    assert list(rule.exit[1:]) == [True, False, True, True]
    assert list(rule.enter[1:]) == [False, True, False, False]


def test_enter_and_exit_never_overlap(walk):
    for rule in (sma_crossover(walk, 5, 20), momentum(walk, 5), mean_reversion(walk, 20, 1.0)):
        assert not (rule.enter & rule.exit).any()


def test_check_warmup(five_bars):
    check_warmup(sma_crossover(five_bars, 1, 4), five_bars)
    with pytest.raises(InsufficientWarmup):
        check_warmup(sma_crossover(five_bars, 1, 5), five_bars)


def test_invalid_parameters(five_bars):
    with pytest.raises(ValueError):
        sma(five_bars.price, 0)
    with pytest.raises(ValueError):
        mean_reversion(five_bars, 2, -1.0)
    with pytest.raises(ValueError):
        build_rule(five_bars, "breakout", lookback=3)


def test_build_rule_by_name(five_bars):
    rule = build_rule(five_bars, "momentum", momentum=2)
    assert rule.name == "momentum"
    assert rule.warmup == 2
