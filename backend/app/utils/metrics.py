"""Prometheus metrics for query resolution and activity logging."""

from prometheus_client import Counter, Histogram

# Query resolution metrics
query_resolutions_total = Counter(
    "query_resolutions_total",
    "Total resolved queries by the tier that produced the answer",
    ["tier"],
)

query_latency_ms = Histogram(
    "query_latency_ms",
    "Query resolution latency in milliseconds",
    ["tier"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000, 2500],
)

catalog_errors_total = Counter(
    "catalog_errors_total",
    "Total catalog failures during query resolution",
)

# Activity metrics
activity_events_total = Counter(
    "activity_events_total",
    "Total logged document interactions",
    ["action"],
)


class PrometheusQueryMetrics:
    """Prometheus-based query metrics implementation."""

    def record_resolution(self, tier: str, latency_ms: float) -> None:
        """Record which tier answered and how long it took."""
        query_resolutions_total.labels(tier=tier).inc()
        query_latency_ms.labels(tier=tier).observe(latency_ms)

    def inc_catalog_error(self) -> None:
        """Increment catalog failure counter."""
        catalog_errors_total.inc()

    def inc_activity(self, action: str) -> None:
        """Increment activity counter."""
        activity_events_total.labels(action=action).inc()
