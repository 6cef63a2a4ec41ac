from .base import BaseCollector
from .metrics_collector import MetricsCollector
from .sampler import MetricSampler

__all__ = [
    "BaseCollector",
    "MetricsCollector",
    "MetricSampler",
]
