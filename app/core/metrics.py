"""Phrase query latency metrics.

Collects per-operation latency for phrase index queries.
"""
import threading
import time
from collections import defaultdict, deque
from contextlib import contextmanager

# Most recent timings kept per operation
MAX_SAMPLES = 1000

_phrase_timings_ms: dict[str, deque] = defaultdict(lambda: deque(maxlen=MAX_SAMPLES))
_lock = threading.Lock()


@contextmanager
def record_phrase_latency(operation: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        with _lock:
            _phrase_timings_ms[operation].append(elapsed_ms)


def _percentiles(values: list[float]) -> dict:
    if not values:
        return {"count": 0, "p95_ms": None, "p99_ms": None}
    vals = sorted(values)
    count = len(vals)

    def _p(p: float) -> float:
        idx = int(round(p * (count - 1)))
        return vals[idx]
    return {"count": count, "p95_ms": _p(0.95), "p99_ms": _p(0.99)}


def snapshot_metrics() -> dict:
    with _lock:
        timings = {op: list(values) for op, values in _phrase_timings_ms.items()}
    return {op: _percentiles(values) for op, values in timings.items()}


def reset_metrics() -> None:
    """Clear recorded timings (for testing)."""
    with _lock:
        _phrase_timings_ms.clear()
