from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from typing import Dict, Any
from datetime import datetime
import time
import threading
from collections import defaultdict
from app.auth.rate_limiter import rate_limiter

router = APIRouter()


class MetricsCollector:
    """Thread-safe request metrics collector."""

    def __init__(self):
        self._lock = threading.Lock()
        self._route_timings = defaultdict(list)  # "METHOD route" -> [duration_ms, ...]
        self._status_counts = defaultdict(int)   # status_code -> count
        self._requests = 0
        self._start_time = time.time()

        # Keep only recent data (last 1000 entries per route)
        self._max_entries = 1000

    def record_request(self, method: str, route: str, status_code: int, duration_ms: float):
        """Record one completed request."""
        with self._lock:
            self._requests += 1
            self._status_counts[status_code] += 1
            timings = self._route_timings[f"{method} {route}"]
            timings.append(duration_ms)
            if len(timings) > self._max_entries:
                timings.pop(0)

    def reset(self):
        with self._lock:
            self._route_timings.clear()
            self._status_counts.clear()
            self._requests = 0
            self._start_time = time.time()

    def get_metrics(self) -> Dict[str, Any]:
        """Get current metrics snapshot."""
        with self._lock:
            uptime_seconds = time.time() - self._start_time

            route_stats = {}
            for route, timings in self._route_timings.items():
                if timings:
                    route_stats[route] = {
                        "count": len(timings),
                        "avg_ms": sum(timings) / len(timings),
                        "min_ms": min(timings),
                        "max_ms": max(timings),
                        "p95_ms": self._percentile(timings, 95),
                        "p99_ms": self._percentile(timings, 99)
                    }

            return {
                "timestamp": datetime.now().isoformat(),
                "uptime_seconds": uptime_seconds,
                "requests_total": self._requests,
                "status_codes": {str(code): count for code, count in sorted(self._status_counts.items())},
                "routes": route_stats,
                "rate_limiter": rate_limiter.get_stats()
            }

    def _percentile(self, data: list, percentile: int) -> float:
        """Calculate percentile of a list."""
        if not data:
            return 0
        sorted_data = sorted(data)
        index = int((percentile / 100) * len(sorted_data))
        return sorted_data[min(index, len(sorted_data) - 1)]


# Global metrics collector instance
metrics_collector = MetricsCollector()


@router.get("/metrics")
async def get_metrics():
    """
    Get application metrics in JSON format.
    Includes per-route timings, status code counts and rate limiter state.
    """
    return metrics_collector.get_metrics()


@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def get_prometheus_metrics():
    """
    Get metrics in Prometheus format.
    """
    metrics = metrics_collector.get_metrics()

    prometheus_lines = [
        "# HELP destinations_api_uptime_seconds Application uptime in seconds",
        "# TYPE destinations_api_uptime_seconds counter",
        f"destinations_api_uptime_seconds {metrics['uptime_seconds']}",
        "",
        "# HELP destinations_api_requests_total Total number of handled requests",
        "# TYPE destinations_api_requests_total counter",
        f"destinations_api_requests_total {metrics['requests_total']}",
        "",
        "# HELP destinations_api_responses_total Responses by status code",
        "# TYPE destinations_api_responses_total counter",
    ]

    for status_code, count in metrics['status_codes'].items():
        prometheus_lines.append(f"destinations_api_responses_total{{status=\"{status_code}\"}} {count}")

    prometheus_lines.extend([
        "",
        "# HELP destinations_api_request_duration_ms Request duration in milliseconds",
        "# TYPE destinations_api_request_duration_ms summary"
    ])

    for route, stats in metrics['routes'].items():
        method, path = route.split(" ", 1)
        labels = f"method=\"{method}\",route=\"{path}\""
        prometheus_lines.extend([
            f"destinations_api_request_duration_ms_count{{{labels}}} {stats['count']}",
            f"destinations_api_request_duration_ms_sum{{{labels}}} {stats['avg_ms'] * stats['count']}",
            f"destinations_api_request_duration_ms{{{labels},quantile=\"0.95\"}} {stats['p95_ms']}",
            f"destinations_api_request_duration_ms{{{labels},quantile=\"0.99\"}} {stats['p99_ms']}",
        ])

    prometheus_lines.append("")

    return "\n".join(prometheus_lines)
