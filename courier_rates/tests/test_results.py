"""
Unit Tests for Quote Utilities

Tests filtering, sorting, grouping, summaries and pickup/delivery labels
over quote lists.
"""

from datetime import datetime, time

import pytest

from conftest import make_request, single_courier_plan
from courier_rates.calculate_quotes import calculate_quotes
from courier_rates.models import Courier, RateQuote, ServiceType, Zone
from courier_rates.results import (
    QuoteFilters,
    cheapest_quote,
    estimated_delivery,
    expected_pickup,
    filter_quotes,
    group_by_zone,
    most_expensive_quote,
    sort_by_pickup_time,
    sort_by_price,
    sort_by_recommended_and_price,
    summarize_quotes,
)


def quote(courier_id, total, zone=Zone.WITHIN_CITY, service_type=ServiceType.SURFACE,
          cod_supported=True, rto_supported=True, **extra) -> RateQuote:
    return RateQuote(
        courier_id=courier_id,
        courier_name=courier_id.title(),
        service_type=service_type,
        zone=zone,
        billed_weight=0.5,
        volumetric_weight=0.2,
        increments=0,
        forward_charge=total,
        rto_charge=0.0,
        cod_charge=0.0,
        total_charge=total,
        cod_supported=cod_supported,
        rto_supported=rto_supported,
        **extra,
    )


@pytest.fixture
def quotes():
    return [
        quote("a", 50.0),
        quote("b", 65.0, service_type=ServiceType.AIR, cod_supported=False),
        quote("c", 80.0, zone=Zone.WITHIN_METRO, rto_supported=False),
        quote("d", 50.0, zone=Zone.WITHIN_METRO),
    ]


# =============================================================================
# FILTERING / ORDERING
# =============================================================================

class TestFilterQuotes:

    def test_no_filters(self, quotes):
        assert filter_quotes(quotes, QuoteFilters()) == quotes

    def test_price_range(self, quotes):
        result = filter_quotes(quotes, QuoteFilters(min_price=60.0, max_price=70.0))
        assert [q.courier_id for q in result] == ["b"]

    def test_service_type(self, quotes):
        result = filter_quotes(quotes, QuoteFilters(service_type=ServiceType.AIR))
        assert [q.courier_id for q in result] == ["b"]

    def test_cod_supported(self, quotes):
        result = filter_quotes(quotes, QuoteFilters(cod_supported=True))
        assert [q.courier_id for q in result] == ["a", "c", "d"]

    def test_rto_not_supported(self, quotes):
        result = filter_quotes(quotes, QuoteFilters(rto_supported=False))
        assert [q.courier_id for q in result] == ["c"]

    def test_zone_and_exclusion(self, quotes):
        result = filter_quotes(
            quotes,
            QuoteFilters(zone=Zone.WITHIN_METRO, exclude_courier_ids=("c",)),
        )
        assert [q.courier_id for q in result] == ["d"]


class TestOrdering:

    def test_cheapest_first_on_tie(self, quotes):
        assert cheapest_quote(quotes).courier_id == "a"

    def test_most_expensive(self, quotes):
        assert most_expensive_quote(quotes).courier_id == "c"

    def test_empty(self):
        assert cheapest_quote([]) is None
        assert most_expensive_quote([]) is None

    def test_sort_ascending_is_stable(self, quotes):
        assert [q.courier_id for q in sort_by_price(quotes)] == ["a", "d", "b", "c"]

    def test_sort_descending(self, quotes):
        assert [q.courier_id for q in sort_by_price(quotes, "desc")] == ["c", "b", "a", "d"]

    def test_sort_bad_order(self, quotes):
        with pytest.raises(ValueError):
            sort_by_price(quotes, "up")

    def test_group_by_zone(self, quotes):
        groups = group_by_zone(quotes)
        assert list(groups) == [Zone.WITHIN_CITY, Zone.WITHIN_METRO]
        assert [q.courier_id for q in groups[Zone.WITHIN_METRO]] == ["c", "d"]


# =============================================================================
# SUMMARY
# =============================================================================

class TestSummary:

    def test_summary(self, quotes):
        summary = summarize_quotes(quotes)
        assert summary.count == 4
        assert summary.cheapest.courier_id == "a"
        assert summary.most_expensive.courier_id == "c"
        assert summary.average_price == pytest.approx(61.25)
        assert summary.min_price == 50.0
        assert summary.max_price == 80.0

    def test_empty_summary(self):
        summary = summarize_quotes([])
        assert summary.count == 0
        assert summary.cheapest is None
        assert summary.average_price == 0.0


class TestExpectedPickup:

    def test_before_cutoff(self):
        assert expected_pickup(time(14, 0), now=datetime(2026, 3, 2, 10, 30)) == "Today"

    def test_after_cutoff(self):
        assert expected_pickup(time(14, 0), now=datetime(2026, 3, 2, 15, 0)) == "Tomorrow"

    def test_no_pickup_time(self):
        assert expected_pickup(None, now=datetime(2026, 3, 2, 23, 0)) == "Today"

    def test_quote_carries_courier_pickup_time(self, directory, couriers):
        quotes = calculate_quotes(make_request(), directory, single_courier_plan("FAST"), couriers)
        assert quotes[0].pickup_time == time(14, 0)
        assert expected_pickup(quotes[0].pickup_time, now=datetime(2026, 3, 2, 15, 0)) == "Tomorrow"


class TestEstimatedDelivery:

    def test_days_from_now(self):
        # Monday 2 March 2026 + 3 days
        assert estimated_delivery(3, now=datetime(2026, 3, 2, 10, 30)) == "Thursday, March 5"

    def test_crosses_month(self):
        assert estimated_delivery(2, now=datetime(2026, 3, 30, 18, 0)) == "Wednesday, April 1"

    def test_same_day(self):
        assert estimated_delivery(0, now=datetime(2026, 3, 2, 10, 30)) == "Monday, March 2"


class TestPickupAndRecommendedOrdering:

    @pytest.fixture
    def ranked(self):
        return [
            quote("late", 40.0, pickup_time=time(12, 0)),
            quote("open", 45.0),
            quote("evening", 50.0, pickup_time=time(18, 0), recommended=True),
            quote("noon", 55.0, pickup_time=time(11, 0), recommended=True),
        ]

    def test_today_before_tomorrow(self, ranked):
        result = sort_by_pickup_time(ranked, now=datetime(2026, 3, 2, 13, 0))
        assert [q.courier_id for q in result] == ["open", "evening", "late", "noon"]

    def test_all_today_keeps_rank_order(self, ranked):
        result = sort_by_pickup_time(ranked, now=datetime(2026, 3, 2, 9, 0))
        assert result == ranked

    def test_recommended_first_then_price(self, ranked):
        result = sort_by_recommended_and_price(list(reversed(ranked)))
        assert [q.courier_id for q in result] == ["evening", "noon", "late", "open"]

    def test_input_not_mutated(self, ranked):
        before = list(ranked)
        sort_by_recommended_and_price(ranked)
        sort_by_pickup_time(ranked, now=datetime(2026, 3, 2, 13, 0))
        assert ranked == before

    def test_quote_carries_courier_flags(self, directory):
        couriers = [Courier("C1", "Courier One", estimated_delivery_days=4, recommended=True)]
        quote_ = calculate_quotes(make_request(), directory, single_courier_plan(), couriers)[0]
        assert quote_.estimated_delivery_days == 4
        assert quote_.recommended is True
