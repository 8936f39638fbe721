"""
Pricing Evaluator

Applies a courier's zone price row to a number of increments.

    forward = base_price + increments * increment_price
    return  = forward calculation                                  if is_rto_same_as_forward
              rto_base_price + increments * rto_increment_price    otherwise
              (+ flat_rto_charge, once, in both cases)

Applicability (forward/RTO flags) is gated by the aggregator, not here.
"""

import math

import polars as pl

from ..data.reference.billable_weight import INCREMENT_PRECISION
from ..models import CourierPricing, ZonePricing


# =============================================================================
# SCALAR EVALUATION
# =============================================================================

def effective_increment_price(
    zone_pricing: ZonePricing,
    default_increment_price: float = 0.0
) -> float:
    """Zone forward increment price, falling back to the courier-level price."""
    if zone_pricing.increment_price is None:
        return default_increment_price
    return zone_pricing.increment_price


def evaluate_forward(
    zone_pricing: ZonePricing,
    increments: int,
    default_increment_price: float = 0.0
) -> float:
    """Forward charge for a zone price row."""
    increment_price = effective_increment_price(zone_pricing, default_increment_price)
    return zone_pricing.base_price + increments * increment_price


def evaluate_return(
    zone_pricing: ZonePricing,
    increments: int,
    default_increment_price: float = 0.0
) -> float:
    """Return-to-origin charge for a zone price row."""
    if zone_pricing.is_rto_same_as_forward:
        amount = evaluate_forward(zone_pricing, increments, default_increment_price)
    else:
        amount = zone_pricing.rto_base_price + increments * zone_pricing.rto_increment_price
    return amount + zone_pricing.flat_rto_charge


def compute_excess_charges(
    weight_diff_kg: float,
    courier_pricing: CourierPricing,
    zone_pricing: ZonePricing
) -> tuple[float, float]:
    """
    Extra forward and RTO charges for a weight discrepancy.

    Used when a courier reweighs a shipment heavier than declared: the
    difference is billed in whole increments at the zone's increment prices.

    Args:
        weight_diff_kg: Charged weight minus originally billed weight
        courier_pricing: Courier pricing the shipment was booked on
        zone_pricing: Zone price row of the shipment

    Returns:
        (forward_excess, rto_excess); both 0 when weight_diff_kg <= 0.
        rto_excess is 0 when the courier is not RTO-applicable.
    """
    if weight_diff_kg <= 0:
        return 0.0, 0.0

    increments = math.ceil(
        round(weight_diff_kg / courier_pricing.increment_weight, INCREMENT_PRECISION)
    )
    forward_excess = increments * effective_increment_price(
        zone_pricing, courier_pricing.increment_price
    )

    if not courier_pricing.is_rto_applicable:
        rto_excess = 0.0
    elif zone_pricing.is_rto_same_as_forward:
        rto_excess = forward_excess
    else:
        rto_excess = increments * zone_pricing.rto_increment_price

    return forward_excess, rto_excess


# =============================================================================
# EXPRESSIONS
# =============================================================================

def forward_charge_expr() -> pl.Expr:
    """Forward charge for rows joined with a plan snapshot (needs increments)."""
    return pl.col("base_price") + pl.col("increments") * pl.col("increment_price")


def return_charge_expr() -> pl.Expr:
    """Return-to-origin charge for rows joined with a plan snapshot (needs increments)."""
    return (
        pl.when(pl.col("is_rto_same_as_forward"))
        .then(forward_charge_expr())
        .otherwise(pl.col("rto_base_price") + pl.col("increments") * pl.col("rto_increment_price"))
        + pl.col("flat_rto_charge")
    )
