"""
Rate Engine Data

Loaders for the reference CSVs shipped with the package. These are the
caller side of the engine: scripts and tests load a pincode directory and a
plan snapshot here, then hand them to the engine, which never loads anything
itself.

Structure:
    - reference/: static configuration and sample CSVs
        pincodes.csv        - pincode, city, state[, is_metro]
        couriers.csv        - courier master
        courier_pricing.csv - one row per (plan, courier)
        zone_pricing.csv    - one row per (plan, courier, zone code)
"""

from datetime import time
from pathlib import Path

import polars as pl

from ..models import (
    Courier,
    CourierPricing,
    PricingPlan,
    ServiceType,
    Zone,
    ZonePricing,
)
from .pincodes import prepare_pincodes
from .reference import (
    VOLUMETRIC_DIVISOR,
    GRAMS_PER_KG,
    CM_PER_INCH,
    METRO_CITIES,
    NORTH_EAST_STATES,
)


REFERENCE_DIR = Path(__file__).parent / "reference"


def load_pincodes(path: Path | str | None = None) -> pl.DataFrame:
    """
    Load the pincode directory.

    Args:
        path: CSV file (defaults to reference/pincodes.csv)

    Returns:
        DataFrame with columns: pincode, city, state, is_metro
    """
    path = Path(path) if path is not None else REFERENCE_DIR / "pincodes.csv"
    df = pl.read_csv(
        path,
        schema_overrides={"pincode": pl.Utf8},  # Keep pincodes as strings
    )
    return prepare_pincodes(df)


def load_couriers(directory: Path | str | None = None) -> list[Courier]:
    """Load the courier master from couriers.csv."""
    directory = Path(directory) if directory is not None else REFERENCE_DIR
    df = pl.read_csv(
        directory / "couriers.csv",
        schema_overrides={
            "id": pl.Utf8,
            "pickup_time": pl.Utf8,
            "is_active": pl.Boolean,
            "is_return_only": pl.Boolean,
            "estimated_delivery_days": pl.Int64,
            "recommended": pl.Boolean,
        },
    )

    return [
        Courier(
            id=row["id"],
            name=row["name"],
            is_active=row["is_active"],
            service_type=ServiceType(row["service_type"]),
            is_return_only=row["is_return_only"],
            pickup_time=time.fromisoformat(row["pickup_time"]) if row["pickup_time"] else None,
            estimated_delivery_days=row["estimated_delivery_days"],
            recommended=bool(row["recommended"]),
        )
        for row in df.iter_rows(named=True)
    ]


def load_plan(
    plan_id: str | None = None,
    directory: Path | str | None = None
) -> PricingPlan:
    """
    Load one pricing plan with its courier and zone pricing.

    Args:
        plan_id: Plan to load (defaults to the plan flagged is_default)
        directory: Directory holding courier_pricing.csv and zone_pricing.csv

    Returns:
        PricingPlan snapshot

    Raises:
        ValueError: If the plan does not exist or no default plan is flagged
    """
    directory = Path(directory) if directory is not None else REFERENCE_DIR

    courier_pricing = pl.read_csv(
        directory / "courier_pricing.csv",
        schema_overrides={
            "plan_id": pl.Utf8,
            "courier_id": pl.Utf8,
            "is_default": pl.Boolean,
            "is_fw_applicable": pl.Boolean,
            "is_rto_applicable": pl.Boolean,
            "is_cod_applicable": pl.Boolean,
            "is_cod_reversal_applicable": pl.Boolean,
        },
    )
    zone_pricing = pl.read_csv(
        directory / "zone_pricing.csv",
        schema_overrides={
            "plan_id": pl.Utf8,
            "courier_id": pl.Utf8,
            "increment_price": pl.Float64,  # Empty means courier-level price
            "is_rto_same_as_forward": pl.Boolean,
        },
    )

    if plan_id is None:
        defaults = courier_pricing.filter(pl.col("is_default"))["plan_id"].unique()
        if len(defaults) != 1:
            raise ValueError(
                f"Expected exactly one default plan, found {len(defaults)}: "
                f"{defaults.to_list()}"
            )
        plan_id = defaults[0]

    plan_rows = courier_pricing.filter(pl.col("plan_id") == plan_id)
    if plan_rows.is_empty():
        raise ValueError(f"Pricing plan not found: {plan_id}")

    zone_rows = zone_pricing.filter(pl.col("plan_id") == plan_id)

    pricing = []
    for row in plan_rows.iter_rows(named=True):
        zones = tuple(
            ZonePricing(
                zone=Zone.from_code(z["zone_code"]),
                base_price=z["base_price"],
                increment_price=z["increment_price"],
                is_rto_same_as_forward=z["is_rto_same_as_forward"],
                rto_base_price=z["rto_base_price"] or 0.0,
                rto_increment_price=z["rto_increment_price"] or 0.0,
                flat_rto_charge=z["flat_rto_charge"] or 0.0,
            )
            for z in zone_rows.filter(pl.col("courier_id") == row["courier_id"]).iter_rows(named=True)
        )
        pricing.append(
            CourierPricing(
                courier_id=row["courier_id"],
                weight_slab=row["weight_slab"],
                increment_weight=row["increment_weight"],
                increment_price=row["increment_price"],
                cod_charge_fixed=row["cod_charge_fixed"],
                cod_charge_percent=row["cod_charge_percent"],
                is_fw_applicable=row["is_fw_applicable"],
                is_rto_applicable=row["is_rto_applicable"],
                is_cod_applicable=row["is_cod_applicable"],
                is_cod_reversal_applicable=row["is_cod_reversal_applicable"],
                zone_pricing=zones,
            )
        )

    first = plan_rows.row(0, named=True)
    return PricingPlan(
        id=plan_id,
        name=first["plan_name"],
        courier_pricing=tuple(pricing),
        is_default=first["is_default"],
    )


__all__ = [
    "load_pincodes",
    "load_couriers",
    "load_plan",
    "REFERENCE_DIR",
    # Configuration
    "VOLUMETRIC_DIVISOR",
    "GRAMS_PER_KG",
    "CM_PER_INCH",
    "METRO_CITIES",
    "NORTH_EAST_STATES",
]
