"""
Shared metrics configuration for the currency conversion service.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, REGISTRY
from typing import Dict, Any, Optional
import threading


class MetricsCollector:
    """Centralized metrics collector for a service."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry if registry is not None else REGISTRY
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        # Service info
        self._metrics["service_info"] = Info(
            "service",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        # Health check metrics
        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )

        # Error metrics
        self._metrics["errors_total"] = Counter(
            "errors_total",
            "Total errors",
            ["error_type", "service"],
            registry=self.registry
        )

        if self.service_name == "currency":
            self._setup_currency_metrics()

    def _setup_currency_metrics(self):
        """Set up currency-specific metrics."""
        self._metrics["cache_hits_total"] = Counter(
            "cache_hits_total",
            "Total cache hits",
            ["cache_type"],
            registry=self.registry
        )

        self._metrics["cache_misses_total"] = Counter(
            "cache_misses_total",
            "Total cache misses",
            ["cache_type"],
            registry=self.registry
        )

        self._metrics["cache_write_failures_total"] = Counter(
            "cache_write_failures_total",
            "Total failed cache writes",
            ["cache_type"],
            registry=self.registry
        )

        self._metrics["provider_requests_total"] = Counter(
            "provider_requests_total",
            "Total upstream provider requests",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["provider_request_duration_seconds"] = Histogram(
            "provider_request_duration_seconds",
            "Upstream provider request duration in seconds",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()

    def record_error(self, error_type: str, service: Optional[str] = None):
        """Record error metrics."""
        service_name = service or self.service_name
        self._metrics["errors_total"].labels(error_type=error_type, service=service_name).inc()

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        if metric_name in self._metrics:
            self._metrics[metric_name].labels(**labels).inc()

    def observe_histogram(self, metric_name: str, value: float, **labels):
        """Observe a histogram metric."""
        if metric_name in self._metrics:
            metric = self._metrics[metric_name]
            (metric.labels(**labels) if labels else metric).observe(value)


_collectors: Dict[str, MetricsCollector] = {}
_collectors_lock = threading.Lock()


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get the metrics collector for a service.

    Collectors bound to the default registry are created once per service
    name, since prometheus_client rejects duplicate registrations.
    """
    if registry is not None:
        return MetricsCollector(service_name, registry)

    with _collectors_lock:
        if service_name not in _collectors:
            _collectors[service_name] = MetricsCollector(service_name)
        return _collectors[service_name]
