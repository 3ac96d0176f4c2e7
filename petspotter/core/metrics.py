"""
Prometheus counters for the auth and listing paths. Exposed through the /metrics ASGI app.
"""

from prometheus_client import Counter

AUTH_EVENTS = Counter(
    "petspotter_auth_events_total",
    "Registration and login outcomes",
    ["event"],
)

LISTING_QUERIES = Counter(
    "petspotter_listing_queries_total",
    "Listing queries by dialect and filter dimension",
    ["dialect", "filter"],
)
