"""
Metrics endpoint for observability and monitoring.
Request counts, error rates and latency percentiles per route, plus phrase query timings.
"""

from fastapi import APIRouter
from typing import Dict, Any
import threading
import time
import logging
from dataclasses import dataclass, field
from collections import defaultdict, deque
import statistics

from app.core.metrics import snapshot_metrics as phrase_query_metrics

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/metrics", tags=["metrics"])


@dataclass
class EndpointMetrics:
    """Metrics tracking for a single endpoint."""
    request_count: int = 0
    error_count: int = 0
    status_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    latencies: deque = field(default_factory=lambda: deque(maxlen=1000))

    def add_request(self, latency: float, status_code: int):
        """Record a request with its latency."""
        self.request_count += 1
        if status_code >= 400:
            self.error_count += 1
        self.status_counts[str(status_code)] += 1
        self.latencies.append(latency)

    def get_stats(self) -> Dict[str, Any]:
        """Calculate statistics from recorded latencies."""
        if not self.latencies:
            return {
                "request_count": self.request_count,
                "error_count": self.error_count,
                "status_codes": dict(self.status_counts),
                "error_rate": 0.0,
                "latency_p50": 0.0,
                "latency_p95": 0.0,
                "latency_p99": 0.0,
                "latency_mean": 0.0
            }

        latencies_list = list(self.latencies)
        error_rate = (
            self.error_count / self.request_count * 100
            if self.request_count > 0
            else 0.0
        )

        latency_p50 = statistics.median(latencies_list) * 1000
        if len(latencies_list) >= 20:
            latency_p95 = statistics.quantiles(latencies_list, n=20)[18] * 1000
        else:
            latency_p95 = max(latencies_list) * 1000
        if len(latencies_list) >= 100:
            latency_p99 = statistics.quantiles(latencies_list, n=100)[98] * 1000
        else:
            latency_p99 = max(latencies_list) * 1000
        return {
            "request_count": self.request_count,
            "error_count": self.error_count,
            "status_codes": dict(self.status_counts),
            "error_rate": round(error_rate, 2),
            "latency_p50": round(latency_p50, 2),  # ms
            "latency_p95": round(latency_p95, 2),
            "latency_p99": round(latency_p99, 2),
            "latency_mean": round(statistics.mean(latencies_list) * 1000, 2),
        }


class MetricsCollector:
    """Global metrics collector singleton."""

    def __init__(self):
        self.endpoint_metrics: Dict[str, EndpointMetrics] = defaultdict(
            EndpointMetrics
        )
        self.start_time = time.time()
        self._lock = threading.Lock()

    def record_request(self, endpoint: str, latency: float, status_code: int):
        """Record a request for an endpoint."""
        with self._lock:
            self.endpoint_metrics[endpoint].add_request(latency, status_code)

    def get_all_metrics(self) -> Dict[str, Any]:
        """Get comprehensive metrics summary."""
        uptime_seconds = int(time.time() - self.start_time)

        with self._lock:
            endpoints = {
                endpoint: metrics.get_stats()
                for endpoint, metrics in self.endpoint_metrics.items()
            }
            total_requests = sum(
                m.request_count for m in self.endpoint_metrics.values()
            )
            total_errors = sum(
                m.error_count for m in self.endpoint_metrics.values()
            )

        overall_error_rate = (
            total_errors / total_requests * 100
            if total_requests > 0
            else 0.0
        )

        return {
            "system": {
                "uptime_seconds": uptime_seconds,
                "total_requests": total_requests,
                "total_errors": total_errors,
                "error_rate": round(overall_error_rate, 2)
            },
            "endpoints": endpoints,
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self.endpoint_metrics.clear()
            self.start_time = time.time()


# Global metrics collector instance
metrics_collector = MetricsCollector()


@router.get("")
async def get_metrics() -> Dict[str, Any]:
    """
    Get system metrics for observability.

    Returns:
        {
            "system": {...},
            "endpoints": {"GET /phrase/{term}": {...}, ...},
            "phrase_queries": {"get_by_term": {...}, ...}
        }
    """
    metrics_data = metrics_collector.get_all_metrics()
    metrics_data["phrase_queries"] = phrase_query_metrics()
    return metrics_data
