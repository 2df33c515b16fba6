# registration/metrics.py
from prometheus_client import Counter, Histogram, CollectorRegistry

# Dedicated registry to avoid conflicts (reload, multiple imports, test apps)
REGISTRY = CollectorRegistry(auto_describe=True)

TEAM_OPERATIONS = Counter(
    "team_operations_total",
    "Number of team registration operations",
    ["operation", "outcome"],
    registry=REGISTRY,
)

STORE_WRITE_LATENCY = Histogram(
    "team_store_write_seconds",
    "Time spent writing the team collection to disk",
    registry=REGISTRY,
)

STORE_LOCK_WAIT = Histogram(
    "team_store_lock_wait_seconds",
    "Time spent waiting for the team store write lock",
    registry=REGISTRY,
)
