"""Prometheus metrics for ledger operations and HTTP traffic"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Ledger metrics
ledger_operation_counter = Counter(
    "ledger_operations_total",
    "Ledger operations by outcome",
    ["operation", "outcome"],  # deposit|withdraw|transfer|register x success|rejected|error
)

ledger_amount_counter = Counter(
    "ledger_amount_total",
    "Sum of amounts moved by successful operations",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_operation(operation: str, outcome: str, amount: Decimal | None = None) -> None:
    """Count an operation and, on success, the amount it moved"""
    ledger_operation_counter.labels(operation=operation, outcome=outcome).inc()
    if outcome == "success" and amount is not None:
        ledger_amount_counter.labels(operation=operation).inc(float(amount))
