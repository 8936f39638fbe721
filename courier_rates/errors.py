"""
Rate Engine Errors

Fatal errors abort the whole quote computation. Couriers skipped during
aggregation (inactive, not applicable, zone not served) are never errors.

    RateEngineError
        PincodeNotFound         - either endpoint unresolvable
        InvalidWeight           - non-positive weight or dimension
        InvalidPricingConfig    - malformed plan (increment_weight <= 0, negative money)
        InvalidRequest          - malformed request (units, payment type, COD amount)
        NoCourierAvailable      - empty result, raised only on request by callers

Each error carries a user_message the calling layer can show as-is.
"""


class RateEngineError(Exception):
    """Base class for all rate engine errors."""

    user_message = "Unable to calculate shipping rates."


class PincodeNotFound(RateEngineError):
    """Pickup or delivery pincode is not in the pincode directory."""

    user_message = "Service unavailable to this pincode."

    def __init__(self, pincodes):
        if isinstance(pincodes, str):
            pincodes = [pincodes]
        self.pincodes = list(pincodes)
        super().__init__(f"Pincode(s) not found: {', '.join(self.pincodes)}")


class InvalidWeight(RateEngineError, ValueError):
    """Weight or a box dimension is not positive."""

    user_message = "Package weight and dimensions must be greater than zero."


class InvalidPricingConfig(RateEngineError, ValueError):
    """Pricing plan violates its invariants."""

    user_message = "Shipping rates are temporarily unavailable."

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("Pricing configuration errors:\n  " + "\n  ".join(self.errors))


class InvalidRequest(RateEngineError, ValueError):
    """Rate request is malformed."""

    user_message = "Please check the shipment details and try again."

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NoCourierAvailable(RateEngineError):
    """No courier can serve the request."""

    user_message = "No courier service available to this pincode."
