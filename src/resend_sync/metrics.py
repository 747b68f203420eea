"""
Prometheus metrics definitions for resend-sync.

Counters and a histogram for list pagination runs, pages fetched and
rate limiter waits. Naming follows snake_case with the resend_ prefix.
"""

from prometheus_client import Counter, Histogram

# ==============================================================================
# COUNTERS - Monotonically increasing values
# ==============================================================================

list_requests_total = Counter(
    "resend_list_requests_total",
    "Total list pagination runs",
    ["status"],
    # status: success, invalid, failed
)

list_pages_total = Counter(
    "resend_list_pages_total",
    "Total pages fetched across all list runs",
)

list_items_total = Counter(
    "resend_list_items_total",
    "Total items returned to callers after truncation",
)

rate_limit_waits_total = Counter(
    "resend_rate_limit_waits_total",
    "Total inter-request waits applied by the rate limiter",
)

# ==============================================================================
# HISTOGRAMS - Distribution of values
# ==============================================================================

list_duration_seconds = Histogram(
    "resend_list_duration_seconds",
    "Wall-clock duration of a full list pagination run",
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)
