"""Prometheus metrics for monitoring score distribution and transaction source health"""

from prometheus_client import Counter, Histogram

from fin_health.domain.models import FinancialScore

# Score metrics
score_counter = Counter(
    "fin_health_score_total",
    "Total financial scores computed",
    ["status"],  # Critical | Attention | Healthy | Excellent
)

score_histogram = Histogram(
    "fin_health_overall_score",
    "Distribution of overall scores for users with data",
    buckets=[20, 40, 60, 80, 100],
)

no_data_counter = Counter(
    "fin_health_no_data_total",
    "Scores requested for a month without transactions",
)

# Transaction source metrics
transaction_fetch_failures_counter = Counter(
    "transaction_fetch_failures_total",
    "Failed transaction storage API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_score(score: FinancialScore) -> None:
    """Record score metrics; no-data reports are counted apart from the distribution"""
    score_counter.labels(status=score.status).inc()

    if not score.has_data:
        no_data_counter.inc()
        return

    score_histogram.observe(score.overall)
