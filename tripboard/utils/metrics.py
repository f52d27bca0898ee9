"""Prometheus metrics for itinerary mutations, trash and drag sessions."""

from prometheus_client import Counter

itinerary_mutations_total = Counter(
    "itinerary_mutations_total",
    "Total itinerary engine operations",
    ["op", "outcome"],
)

trash_events_total = Counter(
    "trash_events_total",
    "Total trash bin events",
    ["event", "item_type"],
)

drag_sessions_total = Counter(
    "drag_sessions_total",
    "Total finished drag sessions",
    ["kind", "outcome"],
)


class PrometheusBoardMetrics:
    """Prometheus-based board metrics implementation."""

    def inc_mutation(self, op: str, outcome: str) -> None:
        """Increment mutation counter."""
        itinerary_mutations_total.labels(op=op, outcome=outcome).inc()

    def inc_trash(self, event: str, item_type: str) -> None:
        """Increment trash event counter (recorded, restored, purged)."""
        trash_events_total.labels(event=event, item_type=item_type).inc()

    def inc_drag(self, kind: str, outcome: str) -> None:
        """Increment drag session counter."""
        drag_sessions_total.labels(kind=kind, outcome=outcome).inc()
