"""Prometheus metrics for base URL resolution."""

from prometheus_client import Counter

LOOKUP_COUNT = Counter(
    "slotmanager_lookup_total",
    "Remote slot-manager lookups by outcome",
    labelnames=["outcome"],
)

STALE_FALLBACK_COUNT = Counter(
    "slotmanager_stale_fallback_total",
    "Times a cached base URL was kept after a failed remote lookup",
    labelnames=["operation"],
)

STORAGE_FAILURE_COUNT = Counter(
    "slotmanager_storage_failure_total",
    "Persistence failures by operation",
    labelnames=["operation"],
)

_enabled = True


def set_metrics_enabled(enabled: bool) -> None:
    """Enable or disable metric recording process-wide."""
    global _enabled
    _enabled = enabled


def record_lookup(outcome: str) -> None:
    """Record a remote lookup outcome (success, transport_error, http_error, invalid_body)."""
    if _enabled:
        LOOKUP_COUNT.labels(outcome=outcome).inc()


def record_stale_fallback(operation: str) -> None:
    """Record that a stale cached value kept serving after a failed lookup."""
    if _enabled:
        STALE_FALLBACK_COUNT.labels(operation=operation).inc()


def record_storage_failure(operation: str) -> None:
    """Record a failed store get/set/delete."""
    if _enabled:
        STORAGE_FAILURE_COUNT.labels(operation=operation).inc()
