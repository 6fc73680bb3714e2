"""Monitoring configuration for the vocabulary core."""
from prometheus_client import Counter, start_http_server

# Review metrics
review_outcomes = Counter(
    "ieltsprep_review_outcomes_total",
    "Total number of review outcomes recorded",
    ["outcome"],
)

words_learned = Counter(
    "ieltsprep_words_learned_total",
    "Total number of words promoted to learned",
)

# Rotation metrics
daily_selections = Counter(
    "ieltsprep_daily_selections_total",
    "Total number of daily word selections served",
)

# Persistence metrics
persistence_errors = Counter(
    "ieltsprep_persistence_errors_total",
    "Total number of store errors",
    ["operation_type"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
