"""Prometheus metrics for builder pricing runs."""

from prometheus_client import Counter, Histogram

# Pricing metrics
pricing_latency_ms = Histogram(
    "pricing_latency_ms",
    "Itinerary cost computation latency in milliseconds",
    ["outcome"],
    buckets=[0.5, 1, 2, 5, 10, 25, 50, 100, 250],
)

pricing_runs_total = Counter(
    "pricing_runs_total",
    "Total pricing runs by outcome",
    ["outcome"],
)

pricing_superseded_total = Counter(
    "pricing_superseded_total",
    "Total scheduled pricing runs replaced by a newer edit before firing",
)


class PrometheusPricingMetrics:
    """Prometheus-based pricing metrics implementation."""

    def record_run(self, outcome: str, latency_ms: float) -> None:
        """Record a finished pricing run."""
        pricing_latency_ms.labels(outcome=outcome).observe(latency_ms)
        pricing_runs_total.labels(outcome=outcome).inc()

    def inc_superseded(self) -> None:
        """Increment superseded counter."""
        pricing_superseded_total.inc()
