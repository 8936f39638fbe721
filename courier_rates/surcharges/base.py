"""
Surcharge Base Class

Base class for charges added on top of the forward charge of a quote.
"""

from abc import ABC, abstractmethod

import polars as pl


class Surcharge(ABC):
    """
    Base class for all surcharges.

    Attributes:
        name - Short code (e.g., "RTO", "COD"); names the output columns
               surcharge_<name> (flag) and cost_<name> (amount)

    Surcharges are evaluated on quote rows: shipments joined with a plan
    snapshot, after increments and the forward charge have been added.
    """

    name: str

    @classmethod
    def flag_col(cls) -> str:
        return f"surcharge_{cls.name.lower()}"

    @classmethod
    def cost_col(cls) -> str:
        return f"cost_{cls.name.lower()}"

    @classmethod
    def conditions(cls) -> pl.Expr:
        """
        Polars expression for when this surcharge triggers.

        Default returns True. Override for conditional surcharges.
        """
        return pl.lit(True)

    @classmethod
    @abstractmethod
    def cost(cls) -> pl.Expr:
        """Polars expression for the amount charged when triggered."""
