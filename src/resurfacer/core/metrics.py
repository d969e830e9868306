"""
Observability Metrics
=====================
Central definition of Prometheus metrics for scheduling and feed insertion.
"""

import functools
import time

from prometheus_client import Counter, Gauge, Histogram

# --- Metrics Definitions ---
# Feed insertion
QUEUE_INSERTIONS = Counter(
    "resurfacer_queue_insertions_total",
    "Resurfaced items mounted into the feed",
)
QUEUE_SKIPS = Counter(
    "resurfacer_queue_skips_total",
    "Pending items not inserted",
    ["reason"],
)
QUEUE_RETIREMENTS = Counter(
    "resurfacer_queue_retirements_total",
    "Mounted items removed from the feed",
    ["reason"],
)
QUEUE_PENDING = Gauge(
    "resurfacer_queue_pending",
    "Due items waiting for an insertion slot",
)

# Scheduling
DUE_ITEMS = Gauge(
    "resurfacer_due_items",
    "Due items found by the last scan",
)
REVIEW_OUTCOMES = Counter(
    "resurfacer_review_outcomes_total",
    "Review outcomes recorded",
    ["outcome"],
)

# Store
STORE_OPERATION_LATENCY = Histogram(
    "resurfacer_store_latency_seconds",
    "Item store operation latency",
    ["backend", "operation"],
)
STORE_ERRORS = Counter(
    "resurfacer_store_errors_total",
    "Item store failures",
    ["backend", "operation"],
)


# --- Decorators ---

def track_async_latency(metric: Histogram, labels: dict = None):
    """Decorator to track async function execution time."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                duration = time.time() - start_time
                if labels:
                    metric.labels(**labels).observe(duration)
                else:
                    metric.observe(duration)
        return wrapper
    return decorator
