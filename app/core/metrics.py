"""Application metrics using the Prometheus client library.

Every metric the service exposes is declared here, in one place.  Route
handlers import the metric they own and increment it at the point of
action.

The metrics live in the library's process-wide default registry
(``prometheus_client.REGISTRY``).  Importing ``prometheus_client`` also
registers its default collectors on that registry, so a scrape reports
process CPU/memory/file-descriptor stats, Python GC stats and platform
info alongside our own counter.  Those are the library's business; we
don't reimplement or configure them.

COUNTER SEMANTICS
------------------
A counter only goes UP.  Prometheus derives rates from it:

  rate(http_requests_total[5m]) → average greetings/sec over 5 minutes

The text exposition for it looks like:

  # HELP http_requests_total Total number of HTTP requests
  # TYPE http_requests_total counter
  http_requests_total 3.0
  http_requests_created 1.7e+09
"""

from __future__ import annotations

from prometheus_client import REGISTRY, Counter

# Incremented once per GET / in app/api/greeting.py.
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    registry=REGISTRY,
)
