"""
Bulk Shipment Quoting
=====================

Quotes every courier of a pricing plan for a CSV of shipments and writes the
ranked quotes to CSV or parquet. Shipments no courier serves are reported and,
with --unquoted, written to a separate file.

Input columns (see courier_rates.calculate_quotes):
    pickup_pincode, delivery_pincode, weight, weight_unit, length, width,
    height, size_unit, payment_type [, shipment_id, collectable_amount,
    is_reverse_order]

Usage:
    python -m courier_rates.scripts.quote_csv shipments.csv quotes.csv
    python -m courier_rates.scripts.quote_csv shipments.csv quotes.parquet --best-only
    python -m courier_rates.scripts.quote_csv shipments.csv quotes.csv --plan BASIC --unquoted missing.csv
"""

import argparse
import logging
import sys
from pathlib import Path

import polars as pl

from courier_rates.calculate_quotes import calculate, supplement_shipments, unquoted_shipments
from courier_rates.data import load_couriers, load_pincodes, load_plan
from courier_rates.errors import RateEngineError
from courier_rates.pipeline.snapshot import build_snapshot


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

# Columns written to the output file
OUTPUT_COLUMNS = [
    # Shipment
    "shipment_id", "pickup_pincode", "delivery_pincode",
    "payment_type", "collectable_amount", "is_reverse_order",
    # Weight
    "weight_kg", "volumetric_weight_kg", "billable_weight_kg",
    # Quote
    "shipping_zone", "quote_rank", "courier_id", "courier_name", "service_type",
    "increments",
    "cost_forward", "cost_rto", "cost_cod", "cost_total",
    # Metadata
    "plan_id", "calculator_version",
]


# =============================================================================
# I/O
# =============================================================================

def read_shipments(path: Path) -> pl.DataFrame:
    """Read a shipment CSV, keeping pincodes and ids as strings."""
    df = pl.read_csv(path, infer_schema=False)

    casts = {
        "weight": pl.Float64,
        "length": pl.Float64,
        "width": pl.Float64,
        "height": pl.Float64,
        "payment_type": pl.Int64,
        "collectable_amount": pl.Float64,
    }
    df = df.with_columns([
        pl.col(c).str.strip_chars().cast(dtype) for c, dtype in casts.items() if c in df.columns
    ])
    if "is_reverse_order" in df.columns:
        df = df.with_columns(
            pl.col("is_reverse_order").str.strip_chars().str.to_lowercase()
            .is_in(["true", "1", "yes", "y"])
            .alias("is_reverse_order")
        )
    return df


def write_frame(df: pl.DataFrame, path: Path) -> None:
    """Write CSV or parquet depending on the file extension."""
    if path.suffix == ".parquet":
        df.write_parquet(path)
    else:
        df.write_csv(path)


# =============================================================================
# MAIN
# =============================================================================

def run(
    input_path: Path,
    output_path: Path,
    plan_id: str | None = None,
    data_dir: Path | None = None,
    best_only: bool = False,
    unquoted_path: Path | None = None
) -> pl.DataFrame:
    """
    Quote a shipment file and write the results.

    Returns:
        The quotes written
    """
    pincodes = load_pincodes(data_dir / "pincodes.csv" if data_dir else None)
    snapshot = build_snapshot(load_plan(plan_id, data_dir), load_couriers(data_dir))

    shipments = read_shipments(input_path)
    print(f"Loaded {len(shipments):,} shipments from {input_path}")

    shipments = supplement_shipments(shipments, pincodes)
    quotes = calculate(shipments, snapshot)

    if best_only:
        quotes = quotes.filter(pl.col("quote_rank") == 1)

    quotes = quotes.select(OUTPUT_COLUMNS)
    write_frame(quotes, output_path)
    print(f"Wrote {len(quotes):,} quotes to {output_path}")

    missing = unquoted_shipments(shipments, quotes)
    if len(missing) > 0:
        print(f"Warning: {len(missing):,} shipment(s) have no eligible courier")
        if unquoted_path is not None:
            write_frame(missing, unquoted_path)
            print(f"Wrote unquoted shipments to {unquoted_path}")

    return quotes


def main():
    parser = argparse.ArgumentParser(
        description="Quote courier rates for a CSV of shipments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m courier_rates.scripts.quote_csv shipments.csv quotes.csv
  python -m courier_rates.scripts.quote_csv shipments.csv quotes.parquet --best-only
        """
    )
    parser.add_argument("input", type=Path, help="Shipment CSV")
    parser.add_argument("output", type=Path, help="Output file (.csv or .parquet)")
    parser.add_argument(
        "--plan",
        default=None,
        help="Pricing plan id (default: the plan flagged as default)"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with pincodes.csv, couriers.csv and pricing CSVs (default: bundled reference data)"
    )
    parser.add_argument(
        "--best-only",
        action="store_true",
        help="Keep only the top-ranked quote per shipment"
    )
    parser.add_argument(
        "--unquoted",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write shipments without an eligible courier to PATH"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(
            input_path=args.input,
            output_path=args.output,
            plan_id=args.plan,
            data_dir=args.data_dir,
            best_only=args.best_only,
            unquoted_path=args.unquoted,
        )
    except KeyboardInterrupt:
        print("\n\nCancelled.")
        sys.exit(1)
    except RateEngineError as e:
        logger.error("Quoting failed: %s", e)
        print(f"\n{e.user_message}\n  {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
