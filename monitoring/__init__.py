"""
Monitoring and observability module for the restaurant storefront.
"""

from monitoring.logger import get_logger, setup_logging
from monitoring.metrics import MetricsCollector, Metrics, get_metrics_collector

__all__ = [
    "get_logger",
    "setup_logging",
    "MetricsCollector",
    "Metrics",
    "get_metrics_collector",
]
