"""
Column Schema Definitions

Documents all columns at each pipeline stage and provides validation utilities.
"""

import polars as pl

from .snapshot import SNAPSHOT_SCHEMA


# =============================================================================
# REQUIRED INPUT COLUMNS (must be present in any shipment frame)
# =============================================================================

REQUIRED_INPUT_COLS = [
    "pickup_pincode",       # Origin pincode (6 digits)
    "delivery_pincode",     # Destination pincode (6 digits)
    "weight",               # Package weight
    "weight_unit",          # "kg" or "g"
    "length",               # Box length
    "width",                # Box width
    "height",               # Box height
    "size_unit",            # "cm" or "in"
    "payment_type",         # 0 = prepaid, 1 = COD
]

# Filled with defaults when absent
OPTIONAL_INPUT_COLS = {
    "shipment_id": None,            # Generated from row position when absent
    "collectable_amount": None,     # Required for COD rows
    "is_reverse_order": False,
}


# =============================================================================
# SUPPLEMENT COLUMNS (added by supplement_shipments)
# =============================================================================

SUPPLEMENT_COLS = [
    # Zone lookup
    "shipping_zone",            # Zone value (WITHIN_CITY .. NORTH_EAST)

    # Unit normalization
    "weight_kg",
    "length_cm",
    "width_cm",
    "height_cm",

    # Billable weight
    "volumetric_weight_kg",     # L x W x H (cm) / VOLUMETRIC_DIVISOR
    "uses_volumetric_weight",   # True if volumetric weight > actual weight
    "billable_weight_kg",       # Max of actual and volumetric weight
]


# =============================================================================
# SNAPSHOT COLUMNS (plan snapshot joined on zone)
# =============================================================================

SNAPSHOT_COLS = list(SNAPSHOT_SCHEMA)


# =============================================================================
# QUOTE COLUMNS (added by calculate)
# =============================================================================

QUOTE_COLS = [
    "increments",           # Increments above the courier weight slab
    "cost_forward",         # base_price + increments * increment_price
    "surcharge_rto",        # RTO quoted (reverse order)
    "cost_rto",
    "surcharge_cod",        # COD charged
    "cost_cod",
    "cost_total",           # cost_forward + cost_rto + cost_cod
    "quote_rank",           # 1 = best quote for the shipment
    "calculator_version",
]


# =============================================================================
# VALIDATION
# =============================================================================

def validate_columns(df: pl.DataFrame, required: list[str], stage: str) -> None:
    """
    Raise ValueError if any required column is missing.

    Args:
        df: DataFrame to check
        required: Column names that must be present
        stage: Pipeline stage name for the error message
    """
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{stage}: missing required columns {missing}")
