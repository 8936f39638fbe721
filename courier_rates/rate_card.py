"""
Rate Card

Admin view of a plan snapshot: one row per courier and zone with the prices a
seller on the plan pays. RTO columns show the effective return pricing, so a
zone with RTO same as forward lists its forward prices there.

Zones are ordered A..E (within city first), couriers by name.
"""

import polars as pl

from .models import Zone
from .pipeline.columns import validate_columns


ZONE_ORDER = pl.DataFrame({
    "zone": [z.value for z in Zone],
    "zone_code": [z.code for z in Zone],
    "zone_label": [z.label for z in Zone],
    "_zone_order": list(range(len(Zone))),
})

RATE_CARD_COLS = [
    "courier_id",
    "courier_name",
    "service_type",
    "is_active",
    "zone_code",
    "zone_label",
    "zone",
    "weight_slab",
    "increment_weight",
    "base_price",
    "increment_price",
    "rto_base_price",
    "rto_increment_price",
    "flat_rto_charge",
    "cod_charge_fixed",
    "cod_charge_percent",
]


def rate_card(snapshot: pl.DataFrame) -> pl.DataFrame:
    """
    Build the rate card for a plan snapshot.

    Args:
        snapshot: Output of build_snapshot

    Returns:
        DataFrame with RATE_CARD_COLS
    """
    validate_columns(snapshot, ["courier_id", "courier_name", "zone", "base_price"], "rate_card")

    same_as_forward = pl.col("is_rto_same_as_forward")

    return (
        snapshot
        .join(ZONE_ORDER, on="zone", how="left")
        .with_columns([
            pl.when(same_as_forward)
            .then(pl.col("base_price"))
            .otherwise(pl.col("rto_base_price"))
            .alias("rto_base_price"),
            pl.when(same_as_forward)
            .then(pl.col("increment_price"))
            .otherwise(pl.col("rto_increment_price"))
            .alias("rto_increment_price"),
        ])
        .sort(["courier_name", "courier_id", "_zone_order"])
        .select(RATE_CARD_COLS)
    )
