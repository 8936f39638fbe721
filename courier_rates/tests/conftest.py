"""
Shared fixtures for rate engine tests.

A small pincode table and a four-courier plan:
    FAST     - air, active, prices every zone, pickup 14:00
    CHEAP    - surface, active, no North-East pricing, separate RTO in WITHIN_STATE
    RETURNS  - return-only, not forward-applicable
    DORMANT  - inactive, cheapest on paper
"""

from datetime import time

import polars as pl
import pytest

from courier_rates.models import (
    Courier,
    CourierPricing,
    PricingPlan,
    RateRequest,
    ServiceType,
    Zone,
    ZonePricing,
)
from courier_rates.pipeline.zones import PincodeDirectory


@pytest.fixture
def pincodes() -> pl.DataFrame:
    return pl.DataFrame({
        "pincode": ["560001", "560002", "570001", "400001", "110001", "781001", "302001", "800001"],
        "city": ["Bangalore", "Bangalore", "Mysore", "Mumbai", "Delhi", "Guwahati", "Jaipur", "Patna"],
        "state": ["Karnataka", "Karnataka", "Karnataka", "Maharashtra", "Delhi", "Assam", "Rajasthan", "Bihar"],
    })


@pytest.fixture
def directory(pincodes) -> PincodeDirectory:
    return PincodeDirectory(pincodes)


@pytest.fixture
def couriers() -> list[Courier]:
    return [
        Courier("FAST", "Fast Air", service_type=ServiceType.AIR, pickup_time=time(14, 0)),
        Courier("CHEAP", "Cheap Surface", pickup_time=time(16, 0)),
        Courier("RETURNS", "Returns Only", is_return_only=True, pickup_time=time(12, 0)),
        Courier("DORMANT", "Dormant Surface", is_active=False),
    ]


@pytest.fixture
def plan() -> PricingPlan:
    return PricingPlan(
        id="TEST",
        name="Test Plan",
        is_default=True,
        courier_pricing=(
            CourierPricing(
                courier_id="FAST",
                weight_slab=0.5,
                increment_weight=0.5,
                increment_price=30.0,
                cod_charge_fixed=45.0,
                cod_charge_percent=2.0,
                zone_pricing=(
                    ZonePricing(Zone.WITHIN_CITY, 40.0, 25.0),
                    ZonePricing(Zone.WITHIN_STATE, 50.0, 30.0),
                    ZonePricing(Zone.WITHIN_METRO, 60.0, 35.0),
                    ZonePricing(Zone.WITHIN_ROI, 70.0, 40.0),
                    ZonePricing(Zone.NORTH_EAST, 90.0, 50.0),
                ),
            ),
            CourierPricing(
                courier_id="CHEAP",
                weight_slab=0.5,
                increment_weight=0.5,
                increment_price=20.0,
                cod_charge_fixed=30.0,
                cod_charge_percent=1.5,
                zone_pricing=(
                    ZonePricing(Zone.WITHIN_CITY, 30.0),  # Courier-level increment price
                    ZonePricing(
                        Zone.WITHIN_STATE, 35.0, 20.0,
                        is_rto_same_as_forward=False,
                        rto_base_price=30.0,
                        rto_increment_price=15.0,
                        flat_rto_charge=5.0,
                    ),
                    ZonePricing(Zone.WITHIN_METRO, 45.0, 25.0),
                    ZonePricing(Zone.WITHIN_ROI, 50.0, 28.0),
                ),
            ),
            CourierPricing(
                courier_id="RETURNS",
                weight_slab=0.5,
                increment_weight=0.5,
                increment_price=15.0,
                is_fw_applicable=False,
                is_cod_applicable=False,
                zone_pricing=(
                    ZonePricing(Zone.WITHIN_CITY, 25.0, 15.0),
                    ZonePricing(Zone.WITHIN_STATE, 30.0, 15.0),
                ),
            ),
            CourierPricing(
                courier_id="DORMANT",
                weight_slab=0.5,
                increment_weight=0.5,
                increment_price=5.0,
                zone_pricing=(
                    ZonePricing(Zone.WITHIN_CITY, 10.0, 5.0),
                ),
            ),
        ),
    )


def make_request(**overrides) -> RateRequest:
    """560001 -> 560002 (same city), 0.6 kg, 10x10x10 cm, prepaid."""
    fields = {
        "pickup_pincode": "560001",
        "delivery_pincode": "560002",
        "weight": 0.6,
        "length": 10.0,
        "width": 10.0,
        "height": 10.0,
    }
    fields.update(overrides)
    return RateRequest(**fields)


def single_courier_plan(
    courier_id: str = "C1",
    base_price: float = 30.0,
    increment_price: float = 10.0,
    zone: Zone = Zone.WITHIN_CITY,
    **pricing_overrides
) -> PricingPlan:
    """Plan with one courier priced in one zone (slab 0.5 kg, increment 0.5 kg)."""
    pricing = {
        "courier_id": courier_id,
        "weight_slab": 0.5,
        "increment_weight": 0.5,
        "zone_pricing": (ZonePricing(zone, base_price, increment_price),),
    }
    pricing.update(pricing_overrides)
    return PricingPlan(id="P1", name="Single", courier_pricing=(CourierPricing(**pricing),))
