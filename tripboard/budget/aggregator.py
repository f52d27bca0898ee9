"""Budget and stats aggregation - derived, read-only views over a Trip."""

from tripboard.models.budget import BudgetSummary
from tripboard.models.common import Stats
from tripboard.models.itinerary import Day, Trip
from tripboard.timeline.geo import route_distance_km


def day_cost(day: Day) -> float:
    """Accommodation nightly price (or 0) plus every activity's cost estimate."""
    lodging = day.accommodation.price_per_night if day.accommodation else 0.0
    return lodging + sum(activity.cost_estimate for activity in day.activities)


def total_cost(trip: Trip) -> float:
    """Whole-trip cost, recomputed from current state on every call."""
    return sum(day_cost(day) for day in trip.days)


def day_stats(day: Day) -> Stats:
    """Derived statistics for one day."""
    return Stats(
        total_cost=day_cost(day),
        total_distance_km=round(route_distance_km(day.activities), 2),
        activity_count=len(day.activities),
    )


def trip_stats(trip: Trip) -> dict[str, Stats]:
    """Derived statistics keyed by day id."""
    return {day.id: day_stats(day) for day in trip.days}


def budget_summary(trip: Trip, budget: float) -> BudgetSummary:
    """Compare trip spend against a budget goal.

    Args:
        trip: Trip to aggregate
        budget: User's budget goal in the trip currency

    Returns:
        BudgetSummary; percentage is None when budget is not positive
    """
    spent = total_cost(trip)
    percentage = round(spent / budget * 100) if budget > 0 else None
    return BudgetSummary(
        total_cost=spent,
        budget=budget,
        percentage=percentage,
        remaining=budget - spent,
        over_budget=spent > budget,
    )
