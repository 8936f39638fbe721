"""
Courier Rate Calculator

Ranks courier quotes for shipments against a seller's pricing plan.

Two entry points share one pipeline:
    calculate_quotes()  - one RateRequest in, ranked list of RateQuote out
    quote_shipments()   - shipment DataFrame in, quote DataFrame out (bulk)

A single request runs as a one-row frame, so the rate calculator, order
creation and bulk shipping all price through the same expressions.

REQUIRED INPUT COLUMNS
----------------------
    pickup_pincode      - Origin pincode (6 digits)
    delivery_pincode    - Destination pincode (6 digits)
    weight, weight_unit - Package weight in "kg" or "g"
    length, width, height, size_unit
                        - Box dimensions in "cm" or "in"
    payment_type        - 0 = prepaid, 1 = COD
    collectable_amount  - Required for COD rows (optional column)
    is_reverse_order    - Reverse shipment flag (optional column, default False)
    shipment_id         - Optional, generated from row position when absent

OUTPUT COLUMNS ADDED
--------------------
    supplement_shipments() adds:
        - shipping_zone
        - weight_kg, length_cm, width_cm, height_cm
        - volumetric_weight_kg, uses_volumetric_weight, billable_weight_kg

    calculate() joins the plan snapshot on zone (one row per eligible
    courier) and adds:
        - increments
        - cost_forward
        - surcharge_* flags and cost_* amounts (rto, cod)
        - cost_total, quote_rank
        - calculator_version

USAGE
-----
    from courier_rates.calculate_quotes import calculate_quotes
    quotes = calculate_quotes(request, pincodes, plan, couriers)
"""

import logging

import polars as pl

from .version import VERSION
from .errors import InvalidRequest, NoCourierAvailable
from .models import (
    Courier,
    PaymentType,
    PricingPlan,
    RateQuote,
    RateRequest,
    ServiceType,
    Zone,
)
from .data.reference.zones import PINCODE_LENGTH
from .pipeline.billable_weight import add_billable_weight, increments_expr
from .pipeline.columns import (
    REQUIRED_INPUT_COLS,
    OPTIONAL_INPUT_COLS,
    SUPPLEMENT_COLS,
    validate_columns,
)
from .pipeline.pricing import forward_charge_expr
from .pipeline.snapshot import build_snapshot
from .pipeline.zones import PincodeDirectory, lookup_zones, resolve_zone
from .surcharges import ALL


logger = logging.getLogger(__name__)


COST_COLS = ["cost_forward"] + [s.cost_col() for s in ALL]


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================

def calculate_quotes(
    request: RateRequest,
    pincodes: PincodeDirectory | pl.DataFrame,
    plan: PricingPlan,
    couriers: list[Courier]
) -> list[RateQuote]:
    """
    Calculate ranked courier quotes for one request.

    Args:
        request: Rate request
        pincodes: Pincode directory (or a pincode DataFrame)
        plan: Seller's pricing plan
        couriers: Courier master

    Returns:
        Quotes sorted best first; empty when no courier serves the request

    Raises:
        InvalidRequest: Malformed request
        PincodeNotFound: Either pincode unresolvable
        InvalidWeight: Non-positive weight or dimension
        InvalidPricingConfig: Malformed plan
    """
    validate_request(request)
    if isinstance(pincodes, pl.DataFrame):
        pincodes = PincodeDirectory(pincodes)
    zone = resolve_zone(request.pickup_pincode, request.delivery_pincode, pincodes)
    return rank(request, zone, plan, couriers)


def rank(
    request: RateRequest,
    resolved_zone: Zone,
    plan: PricingPlan,
    couriers: list[Courier]
) -> list[RateQuote]:
    """
    Rank courier quotes for a request whose zone is already resolved.

    Couriers are skipped (not errors) when inactive, not applicable for the
    leg being quoted, or without a price row for the zone.

    Returns:
        Quotes sorted by total, then earlier pickup time, then courier id
    """
    snapshot = build_snapshot(plan, couriers)

    shipment = _prepare_shipments(request_frame(request))
    shipment = shipment.with_columns(pl.lit(Zone(resolved_zone).value).alias("shipping_zone"))
    shipment = add_billable_weight(shipment)

    return to_quotes(calculate(shipment, snapshot))


def quote_shipments(
    df: pl.DataFrame,
    pincodes: pl.DataFrame,
    snapshot: pl.DataFrame
) -> pl.DataFrame:
    """
    Calculate ranked quotes for a shipment DataFrame.

    Args:
        df: Shipments with required input columns (see module docstring)
        pincodes: Pincode directory DataFrame
        snapshot: Plan snapshot from build_snapshot

    Returns:
        One row per (shipment, eligible courier), ranked within each shipment.
        Shipments no courier serves have no rows (see unquoted_shipments).
    """
    df = supplement_shipments(df, pincodes)
    df = calculate(df, snapshot)
    return df


def best_quote(quotes: list[RateQuote]) -> RateQuote:
    """
    Return the top-ranked quote.

    Raises:
        NoCourierAvailable: If there are no quotes
    """
    if not quotes:
        raise NoCourierAvailable("No courier available for this shipment")
    return quotes[0]


def unquoted_shipments(shipments: pl.DataFrame, quotes: pl.DataFrame) -> pl.DataFrame:
    """
    Shipments with no eligible courier.

    Args:
        shipments: Output of supplement_shipments (has shipment_id)
        quotes: Output of calculate / quote_shipments
    """
    return shipments.join(quotes.select("shipment_id").unique(), on="shipment_id", how="anti")


# =============================================================================
# REQUEST HANDLING
# =============================================================================

def validate_request(request: RateRequest) -> None:
    """
    Check a request for malformed fields, collecting every problem.

    Weights and dimensions are checked by the weight calculator (InvalidWeight).

    Raises:
        InvalidRequest: Listing every problem found
    """
    errors = []

    for field in ("pickup_pincode", "delivery_pincode"):
        value = str(getattr(request, field) or "").strip()
        if len(value) != PINCODE_LENGTH or not value.isdigit():
            errors.append(f"{field} must be a {PINCODE_LENGTH}-digit pincode, got {value!r}")

    if request.payment_type not in (PaymentType.PREPAID, PaymentType.COD):
        errors.append(f"payment_type must be 0 (prepaid) or 1 (COD), got {request.payment_type!r}")
    elif request.payment_type == PaymentType.COD:
        if request.collectable_amount is None or request.collectable_amount < 0:
            errors.append("collectable_amount is required and must be >= 0 for COD")

    if errors:
        raise InvalidRequest(errors)


def request_frame(request: RateRequest) -> pl.DataFrame:
    """Single-row shipment frame for a request."""
    return pl.DataFrame(
        [{
            "shipment_id": 0,
            "pickup_pincode": str(request.pickup_pincode).strip(),
            "delivery_pincode": str(request.delivery_pincode).strip(),
            "weight": float(request.weight),
            "weight_unit": request.weight_unit,
            "length": float(request.length),
            "width": float(request.width),
            "height": float(request.height),
            "size_unit": request.size_unit,
            "payment_type": int(request.payment_type),
            "collectable_amount": (
                float(request.collectable_amount)
                if request.collectable_amount is not None else None
            ),
            "is_reverse_order": bool(request.is_reverse_order),
        }],
        schema={
            "shipment_id": pl.Int64,
            "pickup_pincode": pl.Utf8,
            "delivery_pincode": pl.Utf8,
            "weight": pl.Float64,
            "weight_unit": pl.Utf8,
            "length": pl.Float64,
            "width": pl.Float64,
            "height": pl.Float64,
            "size_unit": pl.Utf8,
            "payment_type": pl.Int64,
            "collectable_amount": pl.Float64,
            "is_reverse_order": pl.Boolean,
        },
    )


def to_quotes(df: pl.DataFrame) -> list[RateQuote]:
    """Convert calculate() output rows to RateQuote objects, keeping rank order."""
    return [
        RateQuote(
            courier_id=row["courier_id"],
            courier_name=row["courier_name"],
            service_type=ServiceType(row["service_type"]),
            zone=Zone(row["shipping_zone"]),
            billed_weight=row["billable_weight_kg"],
            volumetric_weight=row["volumetric_weight_kg"],
            increments=row["increments"],
            forward_charge=row["cost_forward"],
            rto_charge=row["cost_rto"],
            cod_charge=row["cost_cod"],
            total_charge=row["cost_total"],
            cod_supported=row["is_cod_applicable"],
            rto_supported=row["is_rto_applicable"],
            pickup_time=row["pickup_time"],
            estimated_delivery_days=row["estimated_delivery_days"],
            recommended=row["recommended"],
        )
        for row in df.iter_rows(named=True)
    ]


# =============================================================================
# SUPPLEMENT SHIPMENTS
# =============================================================================

def supplement_shipments(df: pl.DataFrame, pincodes: pl.DataFrame) -> pl.DataFrame:
    """
    Supplement shipment data with zone and billable weight.

    Zone is resolved first: every downstream price depends on it, so an
    unknown pincode aborts the batch before anything else is checked.

    Args:
        df: Raw shipment DataFrame
        pincodes: Pincode directory DataFrame

    Returns:
        DataFrame with SUPPLEMENT_COLS added (and optional inputs filled)
    """
    validate_columns(df, REQUIRED_INPUT_COLS, "supplement_shipments")

    df = _prepare_shipments(df)
    df = lookup_zones(df, pincodes)
    df = add_billable_weight(df)

    return df


def _prepare_shipments(df: pl.DataFrame) -> pl.DataFrame:
    """Fill optional input columns and validate payment fields."""
    if "shipment_id" not in df.columns:
        df = df.with_row_index("shipment_id")
    if "collectable_amount" not in df.columns:
        df = df.with_columns(pl.lit(None, dtype=pl.Float64).alias("collectable_amount"))
    if "is_reverse_order" not in df.columns:
        df = df.with_columns(pl.lit(OPTIONAL_INPUT_COLS["is_reverse_order"]).alias("is_reverse_order"))

    df = df.with_columns([
        pl.col("collectable_amount").cast(pl.Float64),
        pl.col("is_reverse_order").cast(pl.Boolean).fill_null(False),
    ])

    _validate_payment(df)
    return df


def _validate_payment(df: pl.DataFrame) -> None:
    """Raise InvalidRequest for bad payment types or COD rows without an amount."""
    errors = []

    bad_type = df.filter(~pl.col("payment_type").is_in([0, 1]).fill_null(False))
    if len(bad_type) > 0:
        errors.append(
            f"{len(bad_type)} shipment(s) have payment_type other than 0 (prepaid) or 1 (COD)"
        )

    bad_cod = df.filter(
        (pl.col("payment_type") == int(PaymentType.COD)) &
        (pl.col("collectable_amount").is_null() | (pl.col("collectable_amount") < 0))
    )
    if len(bad_cod) > 0:
        errors.append(
            f"{len(bad_cod)} COD shipment(s) have a missing or negative collectable_amount"
        )

    if errors:
        raise InvalidRequest(errors)


# =============================================================================
# CALCULATE QUOTES
# =============================================================================

def calculate(df: pl.DataFrame, snapshot: pl.DataFrame) -> pl.DataFrame:
    """
    Calculate and rank quotes for supplemented shipments.

    Args:
        df: Supplemented shipment DataFrame from supplement_shipments
        snapshot: Plan snapshot from build_snapshot

    Returns:
        One row per (shipment, eligible courier) with costs and quote_rank

    Processing order:
        1. Candidates  - join snapshot on zone (couriers without the zone drop out)
        2. Eligibility - active, and forward/RTO applicable for the leg quoted
        3. Increments  - per courier slab and increment weight
        4. Forward     - base price plus increments
        5. Surcharges  - RTO (reverse orders), COD
        6. Totals      - rounded to 2 decimals
        7. Rank        - total, pickup time, courier id
    """
    validate_columns(
        df,
        ["shipment_id", "payment_type", "collectable_amount", "is_reverse_order"] + SUPPLEMENT_COLS,
        "calculate",
    )

    # Phase 1: Candidate couriers serving the shipment zone
    df = df.with_row_index("_shipment_order")
    df = df.join(snapshot, left_on="shipping_zone", right_on="zone", how="inner")
    candidate_count = len(df)

    # Phase 2: Drop couriers not applicable for the leg being quoted
    df = df.filter(_eligible())
    logger.debug("Quote candidates: %d courier-zone rows, %d eligible", candidate_count, len(df))

    # Phase 3: Increments above each courier's slab
    df = df.with_columns(increments_expr().alias("increments"))

    # Phase 4: Forward charge
    df = df.with_columns(forward_charge_expr().alias("cost_forward"))

    # Phase 5: Surcharges
    df = _apply_surcharges(df, ALL)

    # Phase 6: Totals
    df = _calculate_total(df)

    # Phase 7: Rank within each shipment
    df = _rank(df)

    # Phase 8: Stamp version
    df = _stamp_version(df)

    return df


def _eligible() -> pl.Expr:
    """
    Courier eligibility for the leg being quoted.

    Reverse orders need an RTO-applicable courier. Forward orders need a
    forward-applicable courier that is not dedicated to returns.
    """
    return pl.col("is_active") & (
        pl.when(pl.col("is_reverse_order"))
        .then(pl.col("is_rto_applicable"))
        .otherwise(pl.col("is_fw_applicable") & ~pl.col("is_return_only"))
    )


def _apply_surcharges(df: pl.DataFrame, surcharges: list) -> pl.DataFrame:
    """Apply each surcharge: flag column, then cost column (0 when not triggered)."""
    for surcharge in surcharges:
        flag_col = surcharge.flag_col()
        cost_col = surcharge.cost_col()

        df = df.with_columns(surcharge.conditions().fill_null(False).alias(flag_col))
        df = df.with_columns(
            pl.when(pl.col(flag_col))
            .then(surcharge.cost())
            .otherwise(pl.lit(0.0))
            .cast(pl.Float64)
            .alias(cost_col)
        )

    return df


def _calculate_total(df: pl.DataFrame) -> pl.DataFrame:
    """Round each charge to 2 decimals, then total the rounded charges."""
    df = df.with_columns([pl.col(c).cast(pl.Float64).round(2) for c in COST_COLS])
    return df.with_columns(pl.sum_horizontal(COST_COLS).round(2).alias("cost_total"))


def _rank(df: pl.DataFrame) -> pl.DataFrame:
    """
    Sort quotes best first within each shipment and number them from 1.

    Shipments keep their input order (not shipment_id order).
    """
    df = df.sort(
        ["_shipment_order", "cost_total", "pickup_time", "courier_id"],
        nulls_last=True,
    )
    return df.with_columns(
        (pl.int_range(pl.len()).over("_shipment_order") + 1).alias("quote_rank")
    ).drop("_shipment_order")


def _stamp_version(df: pl.DataFrame) -> pl.DataFrame:
    """Stamp calculator version on output."""
    return df.with_columns(pl.lit(VERSION).alias("calculator_version"))


__all__ = [
    "calculate_quotes",
    "rank",
    "quote_shipments",
    "supplement_shipments",
    "calculate",
    "best_quote",
    "unquoted_shipments",
    "validate_request",
    "request_frame",
    "to_quotes",
]
