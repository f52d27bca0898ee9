"""Structured logging for itinerary mutations and drag sessions."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredMutationLogger:
    """Structured logger for engine operations."""

    def log_mutation(
        self,
        trip_id: str,
        op: str,
        outcome: str,
        **ids: str | int | None,
    ) -> None:
        """Log one engine operation with structured data.

        Applied mutations go to INFO; no-ops (stale ids, invalid indices) are
        expected and go to DEBUG.
        """
        log_data: dict[str, Any] = {
            "trip_id": trip_id,
            "op": op,
            "outcome": outcome,
        }
        log_data.update({k: v for k, v in ids.items() if v is not None})

        log_msg = f"Itinerary mutation: {op} - {outcome}"

        if outcome == "applied":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.debug(log_msg, extra={"structured": log_data})

    def log_drag(self, kind: str | None, outcome: str, operation: str | None = None) -> None:
        """Log the end of a drag session."""
        log_data: dict[str, Any] = {"kind": kind, "outcome": outcome}
        if operation:
            log_data["operation"] = operation

        logger.info(f"Drag session: {kind} - {outcome}", extra={"structured": log_data})
