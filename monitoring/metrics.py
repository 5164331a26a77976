"""
Metrics collection for storefront activity.
"""

import threading
from typing import Dict, Any, Optional, List
from collections import defaultdict
from datetime import datetime
from monitoring.logger import get_logger

logger = get_logger(__name__)

HISTOGRAM_WINDOW = 1000


class MetricsCollector:
    """Collects counters and value histograms in process memory."""

    def __init__(self):
        self.counters: Dict[str, int] = defaultdict(int)
        self.histograms: Dict[str, List[float]] = defaultdict(list)
        self._lock = threading.Lock()

        logger.info("Metrics collector initialized")

    def increment_counter(self, name: str, value: int = 1, labels: Optional[Dict[str, str]] = None) -> None:
        """
        Increment a counter metric.

        Args:
            name: Metric name
            value: Amount to increment by
            labels: Optional metric labels
        """
        key = self._make_key(name, labels)
        with self._lock:
            self.counters[key] += value

    def record_histogram(self, name: str, value: float, labels: Optional[Dict[str, str]] = None) -> None:
        """
        Record a value in a histogram, keeping the most recent values only.

        Args:
            name: Metric name
            value: Value to record
            labels: Optional metric labels
        """
        key = self._make_key(name, labels)
        with self._lock:
            values = self.histograms[key]
            values.append(value)
            if len(values) > HISTOGRAM_WINDOW:
                del values[:-HISTOGRAM_WINDOW]

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get all metrics as a dictionary.

        Returns:
            Counters, histogram statistics and a timestamp
        """
        with self._lock:
            metrics = {
                "counters": dict(self.counters),
                "histograms": {},
                "timestamp": datetime.now().isoformat(),
            }

            for name, values in self.histograms.items():
                if values:
                    metrics["histograms"][name] = {
                        "count": len(values),
                        "sum": sum(values),
                        "min": min(values),
                        "max": max(values),
                        "avg": sum(values) / len(values),
                    }

        return metrics

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self.counters.clear()
            self.histograms.clear()
        logger.info("Metrics reset")

    @staticmethod
    def _make_key(name: str, labels: Optional[Dict[str, str]]) -> str:
        """Create a metric key from name and labels."""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


_metrics_collector: Optional[MetricsCollector] = None


def get_metrics_collector() -> MetricsCollector:
    """
    Get or create the global metrics collector instance.

    Returns:
        Global MetricsCollector instance
    """
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


class Metrics:
    """Metric name constants."""

    # Page metrics
    PAGE_VIEWS = "page_views"
    ITEM_VIEWS = "item_views"

    # Cart metrics
    CART_ADDS = "cart_adds"
    CART_REMOVALS = "cart_removals"
    CART_CLEARS = "cart_clears"

    # Handoff metrics
    ORDER_HANDOFFS = "order_handoffs"
    ORDER_VALUE = "order_value"
    ORDER_ITEMS = "order_items"

    # Errors
    REQUEST_ERRORS = "request_errors"
