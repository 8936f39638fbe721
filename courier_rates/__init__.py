"""
Courier Rates

Courier rate engine: resolves the shipping zone between two pincodes, computes
billable weight, and prices every eligible courier of a seller's plan into a
ranked quote list.
"""

from .calculate_quotes import (
    calculate_quotes,
    rank,
    quote_shipments,
    supplement_shipments,
    calculate,
    best_quote,
    unquoted_shipments,
    validate_request,
)
from .errors import (
    RateEngineError,
    PincodeNotFound,
    InvalidWeight,
    InvalidPricingConfig,
    InvalidRequest,
    NoCourierAvailable,
)
from .models import (
    Zone,
    PaymentType,
    ServiceType,
    PincodeDetails,
    Courier,
    ZonePricing,
    CourierPricing,
    PricingPlan,
    RateRequest,
    RateQuote,
)
from .pipeline import PincodeDirectory, resolve_zone, build_snapshot
from .rate_card import rate_card
from .version import VERSION

__all__ = [
    # Entry points
    "calculate_quotes",
    "rank",
    "quote_shipments",
    "supplement_shipments",
    "calculate",
    "best_quote",
    "unquoted_shipments",
    "validate_request",
    "resolve_zone",
    "build_snapshot",
    "rate_card",
    "PincodeDirectory",
    # Errors
    "RateEngineError",
    "PincodeNotFound",
    "InvalidWeight",
    "InvalidPricingConfig",
    "InvalidRequest",
    "NoCourierAvailable",
    # Models
    "Zone",
    "PaymentType",
    "ServiceType",
    "PincodeDetails",
    "Courier",
    "ZonePricing",
    "CourierPricing",
    "PricingPlan",
    "RateRequest",
    "RateQuote",
    "VERSION",
]
