"""
Plan Snapshot

Flattens a pricing plan and the courier master into one long-format frame,
one row per (courier, zone), ready for joining on zone. The snapshot is
built once per plan version and is read-only afterwards; callers may cache
it keyed by plan version.
"""

import logging

import polars as pl

from ..errors import InvalidPricingConfig
from ..models import Courier, CourierPricing, PricingPlan


logger = logging.getLogger(__name__)


SNAPSHOT_SCHEMA = {
    # Identity
    "plan_id": pl.Utf8,
    "courier_id": pl.Utf8,
    "courier_name": pl.Utf8,
    "service_type": pl.Utf8,
    # Courier attributes
    "is_active": pl.Boolean,
    "is_return_only": pl.Boolean,
    "pickup_time": pl.Time,
    "estimated_delivery_days": pl.Int64,
    "recommended": pl.Boolean,
    # Courier pricing
    "weight_slab": pl.Float64,
    "increment_weight": pl.Float64,
    "cod_charge_fixed": pl.Float64,
    "cod_charge_percent": pl.Float64,
    "is_fw_applicable": pl.Boolean,
    "is_rto_applicable": pl.Boolean,
    "is_cod_applicable": pl.Boolean,
    "is_cod_reversal_applicable": pl.Boolean,
    # Zone pricing
    "zone": pl.Utf8,
    "base_price": pl.Float64,
    "increment_price": pl.Float64,     # Zone price, courier-level fallback applied
    "is_rto_same_as_forward": pl.Boolean,
    "rto_base_price": pl.Float64,
    "rto_increment_price": pl.Float64,
    "flat_rto_charge": pl.Float64,
}


# =============================================================================
# VALIDATION
# =============================================================================

def validate_courier_pricing(pricing: CourierPricing) -> list[str]:
    """
    Check one CourierPricing against the plan invariants.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    prefix = pricing.courier_id

    if not pricing.increment_weight > 0:
        errors.append(f"{prefix}: increment_weight must be > 0, got {pricing.increment_weight}")
    if pricing.weight_slab < 0:
        errors.append(f"{prefix}: weight_slab must be >= 0, got {pricing.weight_slab}")

    for field in ("increment_price", "cod_charge_fixed", "cod_charge_percent"):
        value = getattr(pricing, field)
        if value < 0:
            errors.append(f"{prefix}: {field} must be >= 0, got {value}")

    seen_zones = set()
    for row in pricing.zone_pricing:
        if row.zone in seen_zones:
            errors.append(f"{prefix}: duplicate zone pricing for {row.zone.value}")
        seen_zones.add(row.zone)

        for field in ("base_price", "increment_price", "rto_base_price",
                      "rto_increment_price", "flat_rto_charge"):
            value = getattr(row, field)
            if value is not None and value < 0:
                errors.append(f"{prefix}/{row.zone.value}: {field} must be >= 0, got {value}")

    return errors


def validate_plan(plan: PricingPlan) -> None:
    """
    Validate every CourierPricing of a plan.

    Raises:
        InvalidPricingConfig: Listing every problem found
    """
    errors = []
    seen_couriers = set()

    for pricing in plan.courier_pricing:
        if pricing.courier_id in seen_couriers:
            errors.append(f"{pricing.courier_id}: duplicate courier pricing in plan {plan.id}")
        seen_couriers.add(pricing.courier_id)
        errors.extend(validate_courier_pricing(pricing))

    if errors:
        raise InvalidPricingConfig(errors)


# =============================================================================
# SNAPSHOT
# =============================================================================

def build_snapshot(plan: PricingPlan, couriers: list[Courier]) -> pl.DataFrame:
    """
    Build the plan snapshot frame.

    Pricing rows whose courier is not in the courier list are left out.
    Inactive couriers are kept (flagged is_active=False) and filtered by the
    aggregator, so the rate card can still show them.

    Args:
        plan: Pricing plan
        couriers: Courier master

    Returns:
        DataFrame with SNAPSHOT_SCHEMA columns, one row per (courier, zone)

    Raises:
        InvalidPricingConfig: If the plan violates its invariants
    """
    validate_plan(plan)

    by_id = {c.id: c for c in couriers}
    rows = []

    for pricing in plan.courier_pricing:
        courier = by_id.get(pricing.courier_id)
        if courier is None:
            logger.debug("Plan %s: courier %s not in courier list, skipped", plan.id, pricing.courier_id)
            continue

        for zone_row in pricing.zone_pricing:
            increment_price = (
                pricing.increment_price
                if zone_row.increment_price is None
                else zone_row.increment_price
            )
            rows.append({
                "plan_id": plan.id,
                "courier_id": courier.id,
                "courier_name": courier.name,
                "service_type": courier.service_type.value,
                "is_active": courier.is_active,
                "is_return_only": courier.is_return_only,
                "pickup_time": courier.pickup_time,
                "estimated_delivery_days": courier.estimated_delivery_days,
                "recommended": courier.recommended,
                "weight_slab": float(pricing.weight_slab),
                "increment_weight": float(pricing.increment_weight),
                "cod_charge_fixed": float(pricing.cod_charge_fixed),
                "cod_charge_percent": float(pricing.cod_charge_percent),
                "is_fw_applicable": pricing.is_fw_applicable,
                "is_rto_applicable": pricing.is_rto_applicable,
                "is_cod_applicable": pricing.is_cod_applicable,
                "is_cod_reversal_applicable": pricing.is_cod_reversal_applicable,
                "zone": zone_row.zone.value,
                "base_price": float(zone_row.base_price),
                "increment_price": float(increment_price),
                "is_rto_same_as_forward": zone_row.is_rto_same_as_forward,
                "rto_base_price": float(zone_row.rto_base_price),
                "rto_increment_price": float(zone_row.rto_increment_price),
                "flat_rto_charge": float(zone_row.flat_rto_charge),
            })

    logger.debug("Plan %s: snapshot built with %d courier-zone rows", plan.id, len(rows))
    return pl.from_dicts(rows, schema=SNAPSHOT_SCHEMA) if rows else pl.DataFrame(schema=SNAPSHOT_SCHEMA)
