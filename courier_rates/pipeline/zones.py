"""
Zone Resolver

Classifies an origin/destination pincode pair into a shipping zone.
Evaluated in priority order, first match wins:

    1. Same pincode, or same city and state  -> WITHIN_CITY
    2. Same state, different city            -> WITHIN_STATE
    3. Both endpoints metro                  -> WITHIN_METRO
    4. Either endpoint in a North-East state -> NORTH_EAST
    5. Otherwise                             -> WITHIN_ROI

WITHIN_STATE is a strict state match; adjoining states are not special-cased.
Unlike the carrier zone tables there is no fallback zone: an unknown pincode
aborts the request with PincodeNotFound.
"""

import polars as pl

from ..data.pincodes import name_key, prepare_pincodes
from ..data.reference.zones import NORTH_EAST_STATE_KEYS, normalize_name
from ..errors import PincodeNotFound
from ..models import PincodeDetails, Zone


# =============================================================================
# PINCODE DIRECTORY
# =============================================================================

class PincodeDirectory:
    """Read-only pincode lookup backed by a prepared pincode DataFrame."""

    def __init__(self, pincodes: pl.DataFrame):
        self.frame = prepare_pincodes(pincodes)
        self._details = {
            row["pincode"]: PincodeDetails(**row)
            for row in self.frame.iter_rows(named=True)
        }

    def __len__(self) -> int:
        return len(self._details)

    def __contains__(self, pincode) -> bool:
        return str(pincode).strip() in self._details

    def lookup(self, pincode) -> PincodeDetails:
        """
        Return city, state and metro flag for a pincode.

        Raises:
            PincodeNotFound: If the pincode is not in the directory
        """
        details = self._details.get(str(pincode).strip())
        if details is None:
            raise PincodeNotFound(str(pincode))
        return details


# =============================================================================
# SCALAR RESOLUTION
# =============================================================================

def resolve_zone(
    origin_pincode: str,
    destination_pincode: str,
    pincodes: PincodeDirectory
) -> Zone:
    """
    Resolve the shipping zone between two pincodes.

    Args:
        origin_pincode: Pickup pincode (6 digits)
        destination_pincode: Delivery pincode (6 digits)
        pincodes: Lookup providing city, state and metro flag per pincode

    Returns:
        Zone

    Raises:
        PincodeNotFound: If either pincode is unresolvable (both are reported)
    """
    missing = [p for p in (origin_pincode, destination_pincode) if p not in pincodes]
    if missing:
        raise PincodeNotFound(list(dict.fromkeys(str(p) for p in missing)))

    origin = pincodes.lookup(origin_pincode)
    destination = pincodes.lookup(destination_pincode)
    return classify_zone(origin, destination)


def classify_zone(origin: PincodeDetails, destination: PincodeDetails) -> Zone:
    """Apply the zone rules to two resolved pincodes."""
    same_city = normalize_name(origin.city) == normalize_name(destination.city)
    same_state = normalize_name(origin.state) == normalize_name(destination.state)

    if origin.pincode == destination.pincode or (same_city and same_state):
        return Zone.WITHIN_CITY
    if same_state:
        return Zone.WITHIN_STATE
    if origin.is_metro and destination.is_metro:
        return Zone.WITHIN_METRO
    if (
        normalize_name(origin.state) in NORTH_EAST_STATE_KEYS or
        normalize_name(destination.state) in NORTH_EAST_STATE_KEYS
    ):
        return Zone.NORTH_EAST
    return Zone.WITHIN_ROI


# =============================================================================
# VECTORIZED RESOLUTION
# =============================================================================

def lookup_zones(df: pl.DataFrame, pincodes: pl.DataFrame) -> pl.DataFrame:
    """
    Add shipping_zone to shipments based on pickup and delivery pincodes.

    Same rules as classify_zone, evaluated as one polars expression.

    Args:
        df: Shipments with pickup_pincode and delivery_pincode
        pincodes: Pincode directory DataFrame (pincode, city, state[, is_metro])

    Returns:
        DataFrame with shipping_zone (Zone value) added

    Raises:
        PincodeNotFound: If any shipment references an unknown pincode
    """
    pincodes = prepare_pincodes(pincodes).with_columns([
        name_key("city").alias("_city_key"),
        name_key("state").alias("_state_key"),
    ])

    df = df.with_row_index("_row_id").with_columns([
        pl.col("pickup_pincode").cast(pl.Utf8).str.strip_chars(),
        pl.col("delivery_pincode").cast(pl.Utf8).str.strip_chars(),
    ])

    for side in ("pickup", "delivery"):
        df = df.join(
            pincodes.select([
                pl.col("pincode").alias(f"{side}_pincode"),
                pl.col("_city_key").alias(f"_{side}_city"),
                pl.col("_state_key").alias(f"_{side}_state"),
                pl.col("is_metro").alias(f"_{side}_metro"),
            ]),
            on=f"{side}_pincode",
            how="left",
        )

    unresolved = (
        pl.concat([
            df.filter(pl.col("_pickup_city").is_null()).select(pl.col("pickup_pincode").alias("pincode")),
            df.filter(pl.col("_delivery_city").is_null()).select(pl.col("delivery_pincode").alias("pincode")),
        ])
        .unique(maintain_order=True)
        ["pincode"]
        .to_list()
    )
    if unresolved:
        raise PincodeNotFound([str(p) for p in unresolved])

    df = df.with_columns(zone_expr().alias("shipping_zone"))

    return df.sort("_row_id").drop([
        "_row_id",
        "_pickup_city", "_pickup_state", "_pickup_metro",
        "_delivery_city", "_delivery_state", "_delivery_metro",
    ])


def zone_expr() -> pl.Expr:
    """Polars expression for the zone rules over the joined pincode columns."""
    same_state = pl.col("_pickup_state") == pl.col("_delivery_state")
    same_city = (pl.col("_pickup_city") == pl.col("_delivery_city")) & same_state
    ne_states = list(NORTH_EAST_STATE_KEYS)

    return (
        pl.when((pl.col("pickup_pincode") == pl.col("delivery_pincode")) | same_city)
        .then(pl.lit(Zone.WITHIN_CITY.value))
        .when(same_state)
        .then(pl.lit(Zone.WITHIN_STATE.value))
        .when(pl.col("_pickup_metro") & pl.col("_delivery_metro"))
        .then(pl.lit(Zone.WITHIN_METRO.value))
        .when(
            pl.col("_pickup_state").is_in(ne_states) |
            pl.col("_delivery_state").is_in(ne_states)
        )
        .then(pl.lit(Zone.NORTH_EAST.value))
        .otherwise(pl.lit(Zone.WITHIN_ROI.value))
    )
