"""Prometheus metrics for the STK Gateway service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- stk_charge_total: Charges by final outcome
- stk_charge_amount_kes_total: Sum of KES requested, by outcome

Technical Metrics (for Engineering/SRE):
- stk_charge_confirmation_seconds: Time from submission to outcome
- stk_status_poll_total: Status queries by result
- stk_provider_latency_seconds: PayHero call latency by operation
- stk_provider_failures_total: PayHero failures by operation and type
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

charge_total = Counter(
    "stk_charge_total",
    "Total number of STK charges by outcome",
    ["outcome"],  # completed, failed, timed_out, abandoned, submission_failed
)

charge_amount_total = Counter(
    "stk_charge_amount_kes_total",
    "Total KES requested across charges by outcome",
    ["outcome"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

charge_confirmation_latency = Histogram(
    "stk_charge_confirmation_seconds",
    "Time spent waiting for a charge to resolve",
    buckets=[1.0, 5.0, 10.0, 15.0, 20.0, 25.0, 30.0, 45.0],
)

status_poll_total = Counter(
    "stk_status_poll_total",
    "Total number of transaction status queries",
    ["result"],  # ok, error
)

provider_latency = Histogram(
    "stk_provider_latency_seconds",
    "PayHero API latency in seconds",
    ["operation"],  # charge, status, balance
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

provider_failures = Counter(
    "stk_provider_failures_total",
    "Total number of PayHero API failures",
    ["operation", "error_type"],  # timeout, error
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_charge(outcome: str, amount: float) -> None:
    """Record a finished charge attempt."""
    charge_total.labels(outcome=outcome).inc()
    charge_amount_total.labels(outcome=outcome).inc(max(amount, 0))


@contextmanager
def track_charge_confirmation() -> Generator[None, None, None]:
    """Context manager to track how long a charge took to resolve."""
    start = time.perf_counter()
    try:
        yield
    finally:
        charge_confirmation_latency.observe(time.perf_counter() - start)


@contextmanager
def track_provider_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track PayHero API latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        provider_latency.labels(operation=operation).observe(duration)


def record_status_poll(ok: bool) -> None:
    """Record a single status query."""
    status_poll_total.labels(result="ok" if ok else "error").inc()


def record_provider_failure(operation: str, error_type: str) -> None:
    """Record a PayHero API failure."""
    provider_failures.labels(operation=operation, error_type=error_type).inc()


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
