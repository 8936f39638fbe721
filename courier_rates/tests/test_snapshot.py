"""
Unit Tests for the Plan Snapshot

Tests plan validation and flattening of plans into courier-zone rows.
"""

import pytest

from courier_rates.errors import InvalidPricingConfig
from courier_rates.models import CourierPricing, PricingPlan, Zone, ZonePricing
from courier_rates.pipeline.snapshot import (
    SNAPSHOT_SCHEMA,
    build_snapshot,
    validate_courier_pricing,
)


def plan_with(*pricing) -> PricingPlan:
    return PricingPlan(id="BAD", name="Bad", courier_pricing=tuple(pricing))


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:

    def test_valid_plan(self, plan):
        for pricing in plan.courier_pricing:
            assert validate_courier_pricing(pricing) == []

    def test_zero_increment_weight(self, couriers):
        bad = CourierPricing("FAST", weight_slab=0.5, increment_weight=0.0)
        with pytest.raises(InvalidPricingConfig) as exc:
            build_snapshot(plan_with(bad), couriers)
        assert "increment_weight" in str(exc.value)

    def test_negative_money_fields(self):
        bad = CourierPricing(
            "FAST",
            weight_slab=0.5,
            increment_weight=0.5,
            cod_charge_fixed=-1.0,
            zone_pricing=(ZonePricing(Zone.WITHIN_CITY, base_price=-5.0),),
        )
        errors = validate_courier_pricing(bad)
        assert len(errors) == 2

    def test_every_problem_reported(self, couriers):
        bad_a = CourierPricing("FAST", weight_slab=-1.0, increment_weight=0.0)
        bad_b = CourierPricing("CHEAP", weight_slab=0.5, increment_weight=0.5, increment_price=-2.0)
        with pytest.raises(InvalidPricingConfig) as exc:
            build_snapshot(plan_with(bad_a, bad_b), couriers)
        assert len(exc.value.errors) == 3

    def test_duplicate_zone(self):
        bad = CourierPricing(
            "FAST",
            weight_slab=0.5,
            increment_weight=0.5,
            zone_pricing=(
                ZonePricing(Zone.WITHIN_CITY, 30.0),
                ZonePricing(Zone.WITHIN_CITY, 35.0),
            ),
        )
        assert any("duplicate" in e for e in validate_courier_pricing(bad))

    def test_invalid_pricing_config_is_value_error(self, couriers):
        bad = CourierPricing("FAST", weight_slab=0.5, increment_weight=0.0)
        with pytest.raises(ValueError):
            build_snapshot(plan_with(bad), couriers)


# =============================================================================
# SNAPSHOT
# =============================================================================

class TestBuildSnapshot:

    def test_one_row_per_courier_zone(self, plan, couriers):
        snapshot = build_snapshot(plan, couriers)
        # FAST 5 + CHEAP 4 + RETURNS 2 + DORMANT 1
        assert len(snapshot) == 12
        assert snapshot.columns == list(SNAPSHOT_SCHEMA)

    def test_courier_level_increment_fallback(self, plan, couriers):
        snapshot = build_snapshot(plan, couriers)
        row = snapshot.filter(
            (snapshot["courier_id"] == "CHEAP") & (snapshot["zone"] == Zone.WITHIN_CITY.value)
        ).row(0, named=True)
        assert row["increment_price"] == pytest.approx(20.0)

    def test_inactive_couriers_kept(self, plan, couriers):
        snapshot = build_snapshot(plan, couriers)
        dormant = snapshot.filter(snapshot["courier_id"] == "DORMANT")
        assert dormant["is_active"].to_list() == [False]

    def test_unknown_courier_skipped(self, plan, couriers):
        snapshot = build_snapshot(plan, [c for c in couriers if c.id != "FAST"])
        assert "FAST" not in snapshot["courier_id"].to_list()

    def test_empty_plan(self, couriers):
        snapshot = build_snapshot(plan_with(), couriers)
        assert snapshot.is_empty()
        assert snapshot.columns == list(SNAPSHOT_SCHEMA)
