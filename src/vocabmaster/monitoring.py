"""Monitoring configuration for the trainer."""
from prometheus_client import Counter, Histogram, start_http_server

# Learning metrics
answers_recorded = Counter(
    "vocabmaster_answers_total",
    "Total number of answers recorded by the scheduler",
    ["kind", "result"],
)

words_learned = Counter(
    "vocabmaster_words_learned_total",
    "Total number of words that reached the learned streak",
)

practice_sessions = Counter(
    "vocabmaster_sessions_total",
    "Total number of practice sessions by lifecycle stage",
    ["stage"],
)

session_duration = Histogram(
    "vocabmaster_session_duration_seconds",
    "Duration of practice sessions in seconds",
    buckets=[60, 300, 600, 1800, 3600],  # 1min, 5min, 10min, 30min, 1hour
)

pairing_duration = Histogram(
    "vocabmaster_pairing_batch_seconds",
    "Time taken to match all pairs of a pairing batch",
    buckets=[5, 10, 20, 40, 80],
)

# Word management metrics
words_added = Counter(
    "vocabmaster_words_added_total",
    "Total number of words added to the vocabulary",
)

# Progress metrics
badges_unlocked = Counter(
    "vocabmaster_badges_unlocked_total",
    "Total number of badges unlocked",
    ["badge"],
)

# Error metrics
persistence_errors = Counter(
    "vocabmaster_persistence_errors_total",
    "Total number of failed persistence calls",
    ["operation"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
