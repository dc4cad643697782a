"""Prometheus metrics for the Qabum Risk Engine.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- qabum_split_total: Transaction splits by cap outcome
- qabum_split_gross_amount: Gross amounts of split transactions
- qabum_advance_decision_total: Advance decisions by band and outcome
- qabum_advance_approved_amount: Approved advance amounts
- qabum_risk_config_updates_total: Stored configuration revisions

Technical Metrics (for Engineering/SRE):
- qabum_split_latency_seconds: Split request latency
- qabum_advance_latency_seconds: Eligibility request latency
- qabum_inconsistent_rate_config_total: Splits rejected by the rate check
- qabum_audit_write_failures_total: Audit records that could not be written
- qabum_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

split_total = Counter(
    "qabum_split_total",
    "Total number of transaction splits computed",
    ["cap_exceeded"],  # true, false
)

split_gross_amount = Histogram(
    "qabum_split_gross_amount",
    "Gross transaction amount of computed splits (store currency)",
    buckets=[10, 50, 100, 500, 1000, 5000, 10000, 50000],
)

advance_decision_total = Counter(
    "qabum_advance_decision_total",
    "Total number of advance eligibility decisions",
    ["risk_band", "outcome"],  # LOW/MEDIUM/HIGH, approved/rejected
)

advance_approved_amount = Histogram(
    "qabum_advance_approved_amount",
    "Approved advance amounts (store currency)",
    buckets=[100, 500, 1000, 2500, 5000, 10000, 25000, 50000],
)

config_updates_total = Counter(
    "qabum_risk_config_updates_total",
    "Total number of stored risk configuration revisions",
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

split_latency = Histogram(
    "qabum_split_latency_seconds",
    "Split request latency in seconds",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

advance_latency = Histogram(
    "qabum_advance_latency_seconds",
    "Advance eligibility request latency in seconds",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

inconsistent_rate_config_total = Counter(
    "qabum_inconsistent_rate_config_total",
    "Splits rejected because MDR + margin exceed the ethical cap",
    ["sector"],
)

audit_write_failures = Counter(
    "qabum_audit_write_failures_total",
    "Total number of risk config audit records that could not be written",
)

http_requests_total = Counter(
    "qabum_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "qabum_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_split(cap_exceeded: bool, gross_amount: float) -> None:
    """Record a computed split in metrics."""
    split_total.labels(cap_exceeded=str(cap_exceeded).lower()).inc()
    split_gross_amount.observe(gross_amount)


def record_inconsistent_rate_config(sector: str) -> None:
    """Record a split rejected by the rate-consistency check."""
    inconsistent_rate_config_total.labels(sector=sector).inc()


def record_advance_decision(risk_band: str, is_eligible: bool, approved_amount: int) -> None:
    """Record an advance decision in metrics."""
    outcome = "approved" if is_eligible else "rejected"
    advance_decision_total.labels(risk_band=risk_band, outcome=outcome).inc()
    if is_eligible:
        advance_approved_amount.observe(approved_amount)


def record_config_update() -> None:
    """Record a stored configuration revision."""
    config_updates_total.inc()


def record_audit_write_failure() -> None:
    """Record an audit record that could not be written."""
    audit_write_failures.inc()


@contextmanager
def track_split_latency() -> Generator[None, None, None]:
    """Context manager to track split latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        split_latency.observe(duration)


@contextmanager
def track_advance_latency() -> Generator[None, None, None]:
    """Context manager to track eligibility latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        advance_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
