"""
Reference Configuration

Static configuration for the rate engine plus the sample reference CSVs
(pincodes, couriers, courier pricing, zone pricing).
"""

from .billable_weight import (
    VOLUMETRIC_DIVISOR,
    GRAMS_PER_KG,
    CM_PER_INCH,
    WEIGHT_UNITS,
    SIZE_UNITS,
)
from .zones import (
    METRO_CITIES,
    NORTH_EAST_STATES,
    METRO_CITY_KEYS,
    NORTH_EAST_STATE_KEYS,
    PINCODE_LENGTH,
    normalize_name,
)

__all__ = [
    "VOLUMETRIC_DIVISOR",
    "GRAMS_PER_KG",
    "CM_PER_INCH",
    "WEIGHT_UNITS",
    "SIZE_UNITS",
    "INCREMENT_PRECISION",
    "METRO_CITIES",
    "NORTH_EAST_STATES",
    "METRO_CITY_KEYS",
    "NORTH_EAST_STATE_KEYS",
    "PINCODE_LENGTH",
    "normalize_name",
]
