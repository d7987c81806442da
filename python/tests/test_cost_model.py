from __future__ import annotations

import pytest

from lo_bt.config import CostConfig
from lo_bt.cost_model import CostModel


def test_breakdown():
    b = CostModel(CostConfig(fixed_cost=2.0, proportional_cost=0.01)).breakdown(10, 50.0)
    assert b.notional == 500.0
    assert b.proportional_fee == pytest.approx(5.0)
    assert b.fixed_fee == 2.0


def test_cash_deltas_are_built_from_breakdown():
    model = CostModel(CostConfig(fixed_cost=2.0, proportional_cost=0.01))
    assert model.buy_cash_delta(10, 50.0) == pytest.approx(-(500.0 * 1.01 + 2.0))
    assert model.sell_cash_delta(10, 50.0) == pytest.approx(500.0 * 0.99 - 2.0)


def test_zero_costs_move_only_notional():
    model = CostModel(CostConfig())
    assert model.buy_cash_delta(3, 100.0) == -300.0
    assert model.sell_cash_delta(3, 100.0) == 300.0


def test_fixed_cost_applies_to_empty_orders():
    model = CostModel(CostConfig(fixed_cost=10.0))
    assert model.buy_cash_delta(0, 100.0) == -10.0
    assert model.sell_cash_delta(0, 100.0) == -10.0
