"""
Unit Tests for the Pricing Evaluator

Tests forward, return-to-origin and excess weight charges.
"""

import pytest

from courier_rates.models import CourierPricing, Zone, ZonePricing
from courier_rates.pipeline.pricing import (
    compute_excess_charges,
    evaluate_forward,
    evaluate_return,
)


@pytest.fixture
def same_as_forward():
    return ZonePricing(Zone.WITHIN_CITY, base_price=30.0, increment_price=10.0, flat_rto_charge=5.0)


@pytest.fixture
def separate_rto():
    return ZonePricing(
        Zone.WITHIN_STATE,
        base_price=35.0,
        increment_price=20.0,
        is_rto_same_as_forward=False,
        rto_base_price=30.0,
        rto_increment_price=15.0,
        flat_rto_charge=5.0,
    )


def courier_pricing(zone_pricing, **overrides):
    fields = {
        "courier_id": "C1",
        "weight_slab": 0.5,
        "increment_weight": 0.5,
        "increment_price": 12.0,
        "zone_pricing": (zone_pricing,),
    }
    fields.update(overrides)
    return CourierPricing(**fields)


# =============================================================================
# FORWARD / RETURN
# =============================================================================

class TestForward:

    def test_base_only(self, same_as_forward):
        assert evaluate_forward(same_as_forward, 0) == pytest.approx(30.0)

    def test_with_increments(self, same_as_forward):
        assert evaluate_forward(same_as_forward, 3) == pytest.approx(60.0)

    def test_courier_level_increment_price(self):
        zone_pricing = ZonePricing(Zone.WITHIN_CITY, base_price=30.0)
        assert evaluate_forward(zone_pricing, 2, default_increment_price=12.0) == pytest.approx(54.0)


class TestReturn:

    def test_same_as_forward_adds_flat(self, same_as_forward):
        # 30 + 2 * 10 + 5
        assert evaluate_return(same_as_forward, 2) == pytest.approx(55.0)

    def test_separate_rto_pricing(self, separate_rto):
        # 30 + 2 * 15 + 5
        assert evaluate_return(separate_rto, 2) == pytest.approx(65.0)

    def test_flat_charge_added_once(self, separate_rto):
        assert evaluate_return(separate_rto, 0) == pytest.approx(35.0)


# =============================================================================
# EXCESS WEIGHT
# =============================================================================

class TestExcessCharges:

    def test_no_excess(self, same_as_forward):
        assert compute_excess_charges(0.0, courier_pricing(same_as_forward), same_as_forward) == (0.0, 0.0)

    def test_excess_same_as_forward(self, same_as_forward):
        # 0.7 kg over -> 2 increments at 10
        forward, rto = compute_excess_charges(0.7, courier_pricing(same_as_forward), same_as_forward)
        assert forward == pytest.approx(20.0)
        assert rto == pytest.approx(20.0)

    def test_excess_separate_rto(self, separate_rto):
        forward, rto = compute_excess_charges(0.7, courier_pricing(separate_rto), separate_rto)
        assert forward == pytest.approx(40.0)
        assert rto == pytest.approx(30.0)

    def test_excess_on_exact_increment(self, same_as_forward):
        # 0.8 - 0.5 over 0.1 kg increments is exactly 3, not 4
        pricing = courier_pricing(same_as_forward, increment_weight=0.1)
        forward, rto = compute_excess_charges(0.8 - 0.5, pricing, same_as_forward)
        assert forward == pytest.approx(30.0)
        assert rto == pytest.approx(30.0)

    def test_excess_without_rto(self, same_as_forward):
        pricing = courier_pricing(same_as_forward, is_rto_applicable=False)
        forward, rto = compute_excess_charges(0.2, pricing, same_as_forward)
        assert forward == pytest.approx(10.0)
        assert rto == 0.0

    def test_excess_uses_courier_level_price(self):
        zone_pricing = ZonePricing(Zone.WITHIN_CITY, base_price=30.0)
        forward, _ = compute_excess_charges(0.5, courier_pricing(zone_pricing), zone_pricing)
        assert forward == pytest.approx(12.0)
