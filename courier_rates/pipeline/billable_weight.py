"""
Weight Billing Calculator

Converts physical weight and box dimensions into a billable weight (kg) and a
number of pricing increments above a courier's weight slab.

    volumetric_weight_kg = (length_cm * width_cm * height_cm) / VOLUMETRIC_DIVISOR
    billable_weight_kg   = max(weight_kg, volumetric_weight_kg)
    increments           = 0                                           if billable <= slab
                           ceil((billable - slab) / increment_weight)  otherwise

Partial increments always round up: 0.01 kg over a threshold consumes a full
increment. No intermediate value is rounded.
"""

import math

import polars as pl

from ..data.reference.billable_weight import (
    VOLUMETRIC_DIVISOR,
    GRAMS_PER_KG,
    CM_PER_INCH,
    WEIGHT_UNITS,
    SIZE_UNITS,
    INCREMENT_PRECISION,
)
from ..errors import InvalidRequest, InvalidWeight


# =============================================================================
# UNIT NORMALIZATION
# =============================================================================

def normalize_weight(weight: float, unit: str) -> float:
    """Convert a weight to kilograms."""
    if unit not in WEIGHT_UNITS:
        raise InvalidRequest(f"Unknown weight unit {unit!r}, expected one of {WEIGHT_UNITS}")
    return weight / GRAMS_PER_KG if unit == "g" else weight


def normalize_dimension(value: float, unit: str) -> float:
    """Convert a box dimension to centimeters."""
    if unit not in SIZE_UNITS:
        raise InvalidRequest(f"Unknown size unit {unit!r}, expected one of {SIZE_UNITS}")
    return value * CM_PER_INCH if unit in ("in", "inch") else value


# =============================================================================
# SCALAR CALCULATIONS
# =============================================================================

def compute_volumetric_weight(
    length: float,
    width: float,
    height: float,
    size_unit: str = "cm"
) -> float:
    """Volumetric weight in kg for a box."""
    length_cm = normalize_dimension(length, size_unit)
    width_cm = normalize_dimension(width, size_unit)
    height_cm = normalize_dimension(height, size_unit)
    return (length_cm * width_cm * height_cm) / VOLUMETRIC_DIVISOR


def compute_billed_weight(
    weight: float,
    weight_unit: str,
    length: float,
    width: float,
    height: float,
    size_unit: str
) -> float:
    """
    Billable weight in kg: the greater of actual and volumetric weight.

    Raises:
        InvalidWeight: If weight or any dimension is not positive
        InvalidRequest: If a unit is unknown
    """
    if not weight > 0:
        raise InvalidWeight(f"Weight must be greater than 0, got {weight}")
    if not all(dim > 0 for dim in (length, width, height)):
        raise InvalidWeight(
            f"Box dimensions must be greater than 0, got {length}x{width}x{height}"
        )

    weight_kg = normalize_weight(weight, weight_unit)
    volumetric_kg = compute_volumetric_weight(length, width, height, size_unit)
    return max(weight_kg, volumetric_kg)


def compute_increments(
    billed_weight: float,
    weight_slab: float,
    increment_weight: float
) -> int:
    """
    Number of increments billed above the weight slab.

    Raises:
        InvalidWeight: If billed_weight is not positive
    """
    if not billed_weight > 0:
        raise InvalidWeight(f"Billed weight must be greater than 0, got {billed_weight}")
    if billed_weight <= weight_slab:
        return 0
    return math.ceil(round((billed_weight - weight_slab) / increment_weight, INCREMENT_PRECISION))


# =============================================================================
# VECTORIZED CALCULATIONS
# =============================================================================

def add_billable_weight(df: pl.DataFrame) -> pl.DataFrame:
    """
    Normalize units and calculate volumetric and billable weight.

    Args:
        df: Shipments with weight, weight_unit, length, width, height, size_unit

    Returns:
        DataFrame with added columns:
            - weight_kg, length_cm, width_cm, height_cm
            - volumetric_weight_kg
            - uses_volumetric_weight
            - billable_weight_kg

    Raises:
        InvalidRequest: If any unit is unknown
        InvalidWeight: If any weight or dimension is not positive
    """
    _validate_units(df)
    _validate_positive(df)

    df = df.with_columns([
        pl.when(pl.col("weight_unit") == "g")
        .then(pl.col("weight") / GRAMS_PER_KG)
        .otherwise(pl.col("weight"))
        .cast(pl.Float64)
        .alias("weight_kg"),

        *[
            pl.when(pl.col("size_unit").is_in(["in", "inch"]))
            .then(pl.col(dim) * CM_PER_INCH)
            .otherwise(pl.col(dim))
            .cast(pl.Float64)
            .alias(f"{dim}_cm")
            for dim in ("length", "width", "height")
        ],
    ])

    df = df.with_columns(
        (pl.col("length_cm") * pl.col("width_cm") * pl.col("height_cm") / VOLUMETRIC_DIVISOR)
        .alias("volumetric_weight_kg")
    )

    return df.with_columns([
        (pl.col("volumetric_weight_kg") > pl.col("weight_kg")).alias("uses_volumetric_weight"),
        pl.max_horizontal("weight_kg", "volumetric_weight_kg").alias("billable_weight_kg"),
    ])


def increments_expr() -> pl.Expr:
    """Increments above the courier slab, for rows joined with a plan snapshot."""
    over_slab = pl.col("billable_weight_kg") - pl.col("weight_slab")
    return (
        pl.when(pl.col("billable_weight_kg") <= pl.col("weight_slab"))
        .then(pl.lit(0.0))
        .otherwise((over_slab / pl.col("increment_weight")).round(INCREMENT_PRECISION).ceil())
        .cast(pl.Int64)
    )


def _validate_units(df: pl.DataFrame) -> None:
    """Raise InvalidRequest listing unknown units."""
    bad_weight = df.filter(~pl.col("weight_unit").is_in(list(WEIGHT_UNITS)).fill_null(False))["weight_unit"].unique().to_list()
    bad_size = df.filter(~pl.col("size_unit").is_in(list(SIZE_UNITS)).fill_null(False))["size_unit"].unique().to_list()

    errors = []
    if bad_weight:
        errors.append(f"Unknown weight unit(s) {bad_weight}, expected one of {WEIGHT_UNITS}")
    if bad_size:
        errors.append(f"Unknown size unit(s) {bad_size}, expected one of {SIZE_UNITS}")
    if errors:
        raise InvalidRequest(errors)


def _validate_positive(df: pl.DataFrame) -> None:
    """Raise InvalidWeight if any weight or dimension is missing, NaN or not positive."""
    for col in ("weight", "length", "width", "height"):
        # polars orders NaN above every number, so NaN > 0 holds and needs its own check
        value = pl.col(col).cast(pl.Float64)
        bad = df.filter((value.is_nan() | ~(value > 0)).fill_null(True))
        if len(bad) > 0:
            raise InvalidWeight(
                f"{len(bad)} shipment(s) have non-positive {col}. "
                f"Weight and box dimensions must be greater than 0."
            )
