"""Structured logging for pricing runs."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredPricingLogger:
    """Structured logger for builder pricing runs."""

    def log_run(
        self,
        tour_code: str,
        generation: int,
        outcome: str,
        latency_ms: float,
        grand_total: float | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a pricing run with structured data."""
        log_data: dict[str, Any] = {
            "tour_code": tour_code,
            "generation": generation,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if grand_total is not None:
            log_data["grand_total"] = grand_total
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Pricing run: {tour_code or '<draft>'} - {outcome}"

        if outcome in ("ready", "skipped"):
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
