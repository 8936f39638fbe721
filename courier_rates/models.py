"""
Rate Engine Models

Immutable value objects passed into the engine. Plans, couriers and zone
tables are read-only snapshots owned by the caller for the duration of one
computation; the engine never mutates them.
"""

from dataclasses import dataclass
from datetime import time
from enum import Enum, IntEnum


# =============================================================================
# ENUMS
# =============================================================================

class Zone(str, Enum):
    """Coarse geographic bucket used to select a zone price row."""

    WITHIN_CITY = "WITHIN_CITY"
    WITHIN_STATE = "WITHIN_STATE"
    WITHIN_METRO = "WITHIN_METRO"
    WITHIN_ROI = "WITHIN_ROI"
    NORTH_EAST = "NORTH_EAST"

    @property
    def code(self) -> str:
        """Legacy zone code (Z_A .. Z_E) used on rate cards and orders."""
        return _ZONE_CODES[self]

    @property
    def label(self) -> str:
        return _ZONE_LABELS[self.code]

    @classmethod
    def from_code(cls, code: str) -> "Zone":
        for zone, zone_code in _ZONE_CODES.items():
            if zone_code == code:
                return zone
        raise ValueError(f"Unknown zone code: {code!r}")


_ZONE_CODES = {
    Zone.WITHIN_CITY: "Z_A",
    Zone.WITHIN_STATE: "Z_B",
    Zone.WITHIN_METRO: "Z_C",
    Zone.WITHIN_ROI: "Z_D",
    Zone.NORTH_EAST: "Z_E",
}

_ZONE_LABELS = {
    "Z_A": "Zone A",
    "Z_B": "Zone B",
    "Z_C": "Zone C",
    "Z_D": "Zone D",
    "Z_E": "Zone E",
}


class PaymentType(IntEnum):
    PREPAID = 0
    COD = 1


class ServiceType(str, Enum):
    EXPRESS = "EXPRESS"
    SURFACE = "SURFACE"
    AIR = "AIR"


# =============================================================================
# REFERENCE DATA
# =============================================================================

@dataclass(frozen=True)
class PincodeDetails:
    pincode: str
    city: str
    state: str
    is_metro: bool = False


@dataclass(frozen=True)
class Courier:
    """A shippable courier service."""

    id: str
    name: str
    is_active: bool = True
    service_type: ServiceType = ServiceType.SURFACE
    is_return_only: bool = False
    pickup_time: time | None = None  # Ranking tie-break only
    estimated_delivery_days: int | None = None
    recommended: bool = False  # Promoted by sort_by_recommended_and_price


@dataclass(frozen=True)
class ZonePricing:
    """
    Price row for one zone of one CourierPricing.

    increment_price of None falls back to the courier-level increment_price.
    RTO base/increment are ignored when is_rto_same_as_forward is set;
    flat_rto_charge is added once in both cases.
    """

    zone: Zone
    base_price: float
    increment_price: float | None = None
    is_rto_same_as_forward: bool = True
    rto_base_price: float = 0.0
    rto_increment_price: float = 0.0
    flat_rto_charge: float = 0.0


@dataclass(frozen=True)
class CourierPricing:
    """Pricing of one courier within one plan."""

    courier_id: str
    weight_slab: float
    increment_weight: float
    increment_price: float = 0.0
    cod_charge_fixed: float = 0.0
    cod_charge_percent: float = 0.0
    is_fw_applicable: bool = True
    is_rto_applicable: bool = True
    is_cod_applicable: bool = True
    is_cod_reversal_applicable: bool = False
    zone_pricing: tuple[ZonePricing, ...] = ()

    def zone_price(self, zone: Zone) -> ZonePricing | None:
        """Return the price row for a zone, or None if the zone is not served."""
        for row in self.zone_pricing:
            if row.zone == zone:
                return row
        return None


@dataclass(frozen=True)
class PricingPlan:
    id: str
    name: str
    courier_pricing: tuple[CourierPricing, ...] = ()
    is_default: bool = False


# =============================================================================
# REQUEST / QUOTE
# =============================================================================

@dataclass(frozen=True)
class RateRequest:
    """Caller-constructed rate request for one shipment."""

    pickup_pincode: str
    delivery_pincode: str
    weight: float
    length: float
    width: float
    height: float
    weight_unit: str = "kg"
    size_unit: str = "cm"
    payment_type: PaymentType = PaymentType.PREPAID
    collectable_amount: float | None = None
    is_reverse_order: bool = False


@dataclass(frozen=True)
class RateQuote:
    """Price of one courier for one request. Money is rounded to 2 decimals."""

    courier_id: str
    courier_name: str
    service_type: ServiceType
    zone: Zone
    billed_weight: float
    volumetric_weight: float
    increments: int
    forward_charge: float
    rto_charge: float
    cod_charge: float
    total_charge: float
    cod_supported: bool = True
    rto_supported: bool = True
    pickup_time: time | None = None
    estimated_delivery_days: int | None = None
    recommended: bool = False
