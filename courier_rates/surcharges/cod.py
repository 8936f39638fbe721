"""
Cash-on-Delivery Surcharge (COD)

Charged on COD orders by couriers with COD enabled. The charge is the greater
of the courier's fixed COD fee and its percentage of the collectable amount:

    cost = max(cod_charge_fixed, collectable_amount * cod_charge_percent / 100)
"""

import polars as pl

from ..models import PaymentType
from .base import Surcharge


def compute_cod(
    payment_type: PaymentType | int,
    collectable_amount: float | None,
    cod_fixed: float,
    cod_percent: float,
    is_cod_applicable: bool
) -> float:
    """
    COD charge for one courier.

    Returns 0 for prepaid orders and for couriers without COD.
    """
    if payment_type != PaymentType.COD or not is_cod_applicable:
        return 0.0
    amount = collectable_amount or 0.0
    return max(cod_fixed, amount * cod_percent / 100)


class COD(Surcharge):
    """Cash on delivery - fixed fee or percentage, whichever is higher."""

    name = "COD"

    @classmethod
    def conditions(cls) -> pl.Expr:
        return (
            (pl.col("payment_type") == int(PaymentType.COD)) &
            pl.col("is_cod_applicable")
        )

    @classmethod
    def cost(cls) -> pl.Expr:
        return pl.max_horizontal(
            pl.col("cod_charge_fixed"),
            pl.col("collectable_amount").fill_null(0.0) * pl.col("cod_charge_percent") / 100,
        )
