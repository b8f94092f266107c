# astrocal/utils/metrics.py
from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge, Histogram

# Keep names stable; dashboards key on them.
MET_REQUESTS: Final = Counter("astrocal_api_requests_total", "API requests", ["route"])
MET_VALIDATION_ERRORS: Final = Counter(
    "astrocal_validation_errors_total", "Requests rejected by validators", ["route", "type"]
)
MET_GAP_SHIFTS: Final = Counter(
    "astrocal_reform_gap_shifts_total", "Day offsets pushed past the calendar-reform gap"
)
GAUGE_APP_UP: Final = Gauge("astrocal_app_up", "1 if app is running")
REQ_LATENCY: Final = Histogram("astrocal_request_seconds", "API request latency", ["route"])


def seed_routes(routes) -> None:
    """Pre-create label sets so series exist before the first request."""
    for route in routes:
        MET_REQUESTS.labels(route=route).inc(0)
        REQ_LATENCY.labels(route=route).observe(0.0)
