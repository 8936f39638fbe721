"""
Return-to-Origin Surcharge (RTO)

Quoted only for reverse orders. The aggregator has already excluded couriers
that are not RTO-applicable for those orders, so the condition is the
reverse flag alone.
"""

import polars as pl

from ..pipeline.pricing import return_charge_expr
from .base import Surcharge


class RTO(Surcharge):
    """Return to origin - reverse leg charge from the zone's RTO pricing."""

    name = "RTO"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return pl.col("is_reverse_order")

    @classmethod
    def cost(cls) -> pl.Expr:
        return return_charge_expr()
