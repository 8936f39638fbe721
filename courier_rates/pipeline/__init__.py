"""
Pipeline Package

Leaf stages of the rate engine (source-agnostic, no I/O):
- zones: resolve origin/destination pincodes to a zone
- billable_weight: billable weight and pricing increments
- pricing: forward and return charges from a zone price row
- snapshot: flatten a plan and couriers into a joinable frame
- columns: column sets at each stage
"""

from .zones import PincodeDirectory, resolve_zone, classify_zone, lookup_zones
from .billable_weight import (
    compute_billed_weight,
    compute_increments,
    compute_volumetric_weight,
    add_billable_weight,
)
from .pricing import evaluate_forward, evaluate_return, compute_excess_charges
from .snapshot import build_snapshot, validate_courier_pricing, validate_plan
