"""Prometheus metrics for checker verdicts, entity lifecycle and request latency"""

from prometheus_client import Counter, Histogram

# Checker metrics
checker_verdict_counter = Counter(
    "fintech_checker_verdict_total",
    "Checker predicate evaluations",
    ["check", "result"],  # result: true | false | not_found
)

# Entity lifecycle metrics
entity_created_counter = Counter(
    "fintech_entity_created_total",
    "Entities created in the in-memory store",
    ["resource"],
)

status_transition_counter = Counter(
    "fintech_status_transition_total",
    "Status changes applied to entities",
    ["resource", "status"],
)

# Deferred tasks
deferred_task_counter = Counter(
    "fintech_deferred_task_total",
    "Deferred task lifecycle events",
    ["outcome"],  # scheduled | fired | cancelled
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_check(check: str, result: bool, found: bool = True) -> None:
    """Record a checker verdict, keeping "absent" apart from a plain false"""
    if not found:
        outcome = "not_found"
    else:
        outcome = "true" if result else "false"
    checker_verdict_counter.labels(check=check, result=outcome).inc()


def record_created(resource: str, count: int = 1) -> None:
    entity_created_counter.labels(resource=resource).inc(count)


def record_transition(resource: str, status: str) -> None:
    status_transition_counter.labels(resource=resource, status=status).inc()
