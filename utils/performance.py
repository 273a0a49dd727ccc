"""Performance monitoring utilities using Prometheus metrics."""

from __future__ import annotations

import time
from contextlib import contextmanager

import psutil
from prometheus_client import Counter, Gauge, Histogram


draws_total = Counter("raffle_draws_total", "Completed prize draws")
draw_duration = Histogram("raffle_draw_duration_seconds", "Duration of the draw action")
broadcast_failures = Counter(
    "raffle_broadcast_failures_total",
    "Draw events that could not be published",
    labelnames=("event",),
)
raffle_joins = Counter("raffle_joins_total", "New raffle participations")
db_connections = Gauge("db_connection_pool_size", "DB connection pool size")


class PerformanceMonitor:
    def __init__(self) -> None:
        self.metrics = {
            "draws_total": draws_total,
            "draw_duration": draw_duration,
            "broadcast_failures": broadcast_failures,
            "raffle_joins": raffle_joins,
            "db_connections": db_connections,
        }

    @contextmanager
    def track_draw(self):
        start = time.perf_counter()
        try:
            yield
        finally:
            draw_duration.observe(time.perf_counter() - start)

    def record_draw(self) -> None:
        draws_total.inc()

    def record_join(self) -> None:
        raffle_joins.inc()

    def record_broadcast_failure(self, event: str) -> None:
        broadcast_failures.labels(event=event).inc()

    def record_db_pool(self, pool_size: int) -> None:
        db_connections.set(pool_size)

    def gather_host_metrics(self) -> dict:
        process = psutil.Process()
        memory_info = process.memory_info()
        return {
            "memory_rss": memory_info.rss,
            "cpu_percent": process.cpu_percent(interval=None),
        }


monitor = PerformanceMonitor()
