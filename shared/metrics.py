"""
Prometheus metrics for SDK calls.
"""

from typing import Dict, Any, Optional
import threading

from prometheus_client import Counter, Histogram, CollectorRegistry, REGISTRY


class MetricsCollector:
    """Per-registry collector for request metrics."""

    def __init__(self, namespace: str = "scs_client", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry if registry is not None else REGISTRY
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up request metrics."""
        self._metrics["requests_total"] = Counter(
            f"{self.namespace}_requests_total",
            "Total SDK requests by outcome",
            ["operation", "outcome"],
            registry=self.registry
        )

        self._metrics["request_duration_seconds"] = Histogram(
            f"{self.namespace}_request_duration_seconds",
            "SDK request duration in seconds",
            ["operation"],
            registry=self.registry
        )

        self._metrics["errors_total"] = Counter(
            f"{self.namespace}_errors_total",
            "Total SDK errors by error code",
            ["operation", "error_code"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_request(self, operation: str, outcome: str, duration: float):
        """Record one completed call."""
        self._metrics["requests_total"].labels(operation=operation, outcome=outcome).inc()
        self._metrics["request_duration_seconds"].labels(operation=operation).observe(duration)

    def record_error(self, operation: str, error_code: str):
        """Record an Error result."""
        self._metrics["errors_total"].labels(operation=operation, error_code=error_code).inc()


_collectors: Dict[int, MetricsCollector] = {}
_collectors_lock = threading.Lock()


def get_metrics_collector(registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get the collector for a registry, creating it once."""
    target = registry if registry is not None else REGISTRY
    with _collectors_lock:
        collector = _collectors.get(id(target))
        if collector is None:
            collector = MetricsCollector(registry=target)
            _collectors[id(target)] = collector
        return collector
