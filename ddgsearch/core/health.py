"""
Backend Health
Attempt/success/failure counters per backend, kept for dashboards and the CLI
"""
import threading
import time
from dataclasses import dataclass
from typing import Dict


@dataclass
class BackendHealthState:
    attempts: int = 0
    successes: int = 0
    failures: int = 0
    avg_latency_ms: float = 0.0
    last_error: str = ""
    last_success_at: float = 0.0


class HealthTracker:
    """Thread-safe health registry shared by the backends of one client"""

    def __init__(self):
        self._lock = threading.RLock()
        self._health: Dict[str, BackendHealthState] = {}

    def record(self, backend: str, ok: bool, latency_ms: float, error: str = ""):
        with self._lock:
            state = self._health.get(backend, BackendHealthState())
            state.attempts += 1
            if ok:
                state.successes += 1
                state.last_error = ""
                state.last_success_at = time.time()
            else:
                state.failures += 1
                state.last_error = error
            if latency_ms > 0:
                if state.avg_latency_ms <= 0:
                    state.avg_latency_ms = latency_ms
                else:
                    state.avg_latency_ms = (state.avg_latency_ms * 0.8) + (latency_ms * 0.2)
            self._health[backend] = state

    def snapshot(self) -> dict:
        with self._lock:
            return {
                k: {
                    "attempts": v.attempts,
                    "successes": v.successes,
                    "failures": v.failures,
                    "avg_latency_ms": round(v.avg_latency_ms, 2),
                    "last_error": v.last_error,
                    "last_success_at": v.last_success_at,
                }
                for k, v in self._health.items()
            }
