"""
Quote Utilities

Post-processing of ranked quotes for the seller rate calculator and order
creation screens: filtering, re-sorting, grouping, summary statistics and
pickup/delivery labels. Functions taking a quote list never mutate it.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta

from .models import RateQuote, ServiceType, Zone


@dataclass(frozen=True)
class QuoteFilters:
    """Criteria for filter_quotes. None means "do not filter on this"."""

    max_price: float | None = None
    min_price: float | None = None
    service_type: ServiceType | None = None
    cod_supported: bool | None = None
    rto_supported: bool | None = None
    zone: Zone | None = None
    exclude_courier_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class QuoteSummary:
    count: int
    cheapest: RateQuote | None
    most_expensive: RateQuote | None
    average_price: float
    min_price: float
    max_price: float


# =============================================================================
# FILTERING / ORDERING
# =============================================================================

def filter_quotes(quotes: list[RateQuote], filters: QuoteFilters) -> list[RateQuote]:
    """Return the quotes matching every set criterion, in their original order."""

    def keep(quote: RateQuote) -> bool:
        if filters.max_price is not None and quote.total_charge > filters.max_price:
            return False
        if filters.min_price is not None and quote.total_charge < filters.min_price:
            return False
        if filters.service_type is not None and quote.service_type != filters.service_type:
            return False
        if filters.cod_supported is not None and quote.cod_supported != filters.cod_supported:
            return False
        if filters.rto_supported is not None and quote.rto_supported != filters.rto_supported:
            return False
        if filters.zone is not None and quote.zone != filters.zone:
            return False
        return quote.courier_id not in filters.exclude_courier_ids

    return [q for q in quotes if keep(q)]


def cheapest_quote(quotes: list[RateQuote]) -> RateQuote | None:
    """Lowest total; the first one wins ties."""
    if not quotes:
        return None
    return min(quotes, key=lambda q: q.total_charge)


def most_expensive_quote(quotes: list[RateQuote]) -> RateQuote | None:
    """Highest total; the first one wins ties."""
    if not quotes:
        return None
    return max(quotes, key=lambda q: q.total_charge)


def sort_by_price(quotes: list[RateQuote], order: str = "asc") -> list[RateQuote]:
    """
    Sort by total charge. The sort is stable, so equal totals keep their rank order.

    Raises:
        ValueError: If order is not "asc" or "desc"
    """
    if order not in ("asc", "desc"):
        raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")
    return sorted(quotes, key=lambda q: q.total_charge, reverse=(order == "desc"))


def group_by_zone(quotes: list[RateQuote]) -> dict[Zone, list[RateQuote]]:
    groups: dict[Zone, list[RateQuote]] = {}
    for quote in quotes:
        groups.setdefault(quote.zone, []).append(quote)
    return groups


# =============================================================================
# SUMMARY
# =============================================================================

def summarize_quotes(quotes: list[RateQuote]) -> QuoteSummary:
    """Price statistics for a quote list (all zeros when empty)."""
    if not quotes:
        return QuoteSummary(
            count=0,
            cheapest=None,
            most_expensive=None,
            average_price=0.0,
            min_price=0.0,
            max_price=0.0,
        )

    prices = [q.total_charge for q in quotes]
    return QuoteSummary(
        count=len(quotes),
        cheapest=cheapest_quote(quotes),
        most_expensive=most_expensive_quote(quotes),
        average_price=round(sum(prices) / len(prices), 2),
        min_price=min(prices),
        max_price=max(prices),
    )


# =============================================================================
# PICKUP / DELIVERY
# =============================================================================

def expected_pickup(pickup_time: time | None, now: datetime | None = None) -> str:
    """
    "Today" if the courier's daily pickup cutoff has not passed yet, else "Tomorrow".

    Couriers without a pickup time are shown as "Today".
    """
    if pickup_time is None:
        return "Today"
    now = now or datetime.now()
    return "Tomorrow" if pickup_time < now.time() else "Today"


def estimated_delivery(days: int, now: datetime | None = None) -> str:
    """Delivery date `days` from now, e.g. "Friday, October 23"."""
    delivered = (now or datetime.now()) + timedelta(days=days)
    return f"{delivered:%A, %B} {delivered.day}"


def sort_by_pickup_time(quotes: list[RateQuote], now: datetime | None = None) -> list[RateQuote]:
    """Quotes picked up today before those picked up tomorrow, otherwise in rank order."""
    now = now or datetime.now()
    return sorted(quotes, key=lambda q: expected_pickup(q.pickup_time, now) == "Tomorrow")


def sort_by_recommended_and_price(quotes: list[RateQuote]) -> list[RateQuote]:
    """Recommended couriers first, each group by ascending total charge."""
    return sorted(quotes, key=lambda q: (not q.recommended, q.total_charge))


__all__ = [
    "QuoteFilters",
    "QuoteSummary",
    "filter_quotes",
    "cheapest_quote",
    "most_expensive_quote",
    "sort_by_price",
    "group_by_zone",
    "summarize_quotes",
    "expected_pickup",
    "estimated_delivery",
    "sort_by_pickup_time",
    "sort_by_recommended_and_price",
]
