"""Resilience patterns for fault-isolated source fetching."""

from .fallback import FallbackChain, with_fallback
from .health import HealthMonitor
from .timeout import SourceTimeoutError, run_with_timeout

__all__ = [
    "FallbackChain",
    "with_fallback",
    "HealthMonitor",
    "SourceTimeoutError",
    "run_with_timeout",
]
