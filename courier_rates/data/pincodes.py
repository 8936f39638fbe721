"""
Pincode Directory Preparation

Normalizes a raw pincode table into the shape the zone resolver expects.
"""

import polars as pl

from .reference.zones import METRO_CITY_KEYS, PINCODE_LENGTH


PINCODE_COLS = ["pincode", "city", "state", "is_metro"]


def name_key(col: str) -> pl.Expr:
    """Comparison key for a city or state column (see reference.zones.normalize_name)."""
    return (
        pl.col(col)
        .str.strip_chars()
        .str.replace_all(r"\s+", " ")
        .str.to_lowercase()
    )


def prepare_pincodes(df: pl.DataFrame) -> pl.DataFrame:
    """
    Normalize a pincode table.

    - pincode cast to a zero-padded 6-character string
    - city/state stripped of surrounding whitespace
    - is_metro derived from the metro city list when the column is absent,
      and filled from it where null

    Args:
        df: DataFrame with columns pincode, city, state and optionally is_metro

    Returns:
        DataFrame with columns: pincode, city, state, is_metro
        (one row per pincode, first occurrence wins)
    """
    missing = [c for c in ["pincode", "city", "state"] if c not in df.columns]
    if missing:
        raise ValueError(f"Pincode table is missing columns: {missing}")

    derived_metro = name_key("city").is_in(list(METRO_CITY_KEYS))

    if "is_metro" not in df.columns:
        df = df.with_columns(pl.lit(None, dtype=pl.Boolean).alias("is_metro"))

    return (
        df
        .with_columns([
            pl.col("pincode").cast(pl.Utf8).str.strip_chars().str.zfill(PINCODE_LENGTH),
            pl.col("city").cast(pl.Utf8).str.strip_chars(),
            pl.col("state").cast(pl.Utf8).str.strip_chars(),
        ])
        .with_columns(
            pl.coalesce([pl.col("is_metro").cast(pl.Boolean), derived_metro])
            .alias("is_metro")
        )
        .unique(subset="pincode", keep="first", maintain_order=True)
        .select(PINCODE_COLS)
    )
