"""
Surcharges Package

Exports all surcharge classes in application order. Every surcharge adds to
the forward charge; none ever subtracts.
"""

from .base import Surcharge
from .rto import RTO
from .cod import COD, compute_cod


# All surcharges
ALL = [RTO, COD]


# =============================================================================
# VALIDATION
# =============================================================================

def validate_surcharges() -> None:
    """
    Validate surcharge configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []
    seen = set()

    for s in ALL:
        if not getattr(s, "name", None):
            errors.append(f"{s.__name__}: missing name")
            continue
        if s.name in seen:
            errors.append(f"{s.name}: duplicate surcharge name")
        seen.add(s.name)

    if errors:
        raise ValueError("Surcharge configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_surcharges()

__all__ = [
    # Base
    "Surcharge",
    # Surcharge classes
    "RTO",
    "COD",
    # Scalar calculator
    "compute_cod",
    # Lists
    "ALL",
]
