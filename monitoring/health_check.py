"""
Health check endpoint for monitoring storefront status.
"""

import os
import psutil
from typing import Dict, Any
from fastapi import APIRouter
from datetime import datetime

from monitoring.metrics import get_metrics_collector
from monitoring.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

DEGRADED_PERCENT = 90


@router.get("")
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Health status, process and system figures, and collected metrics
    """
    try:
        metrics = get_metrics_collector().get_metrics()

        # interval=None compares against the previous call instead of blocking
        cpu_percent = psutil.cpu_percent(interval=None)
        memory = psutil.virtual_memory()
        process = psutil.Process(os.getpid())

        health_data = {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": "1.0.0",
            "environment": os.getenv("ENVIRONMENT", "development"),
            "system": {
                "cpu_percent": cpu_percent,
                "memory_percent": memory.percent,
                "process_rss_mb": round(process.memory_info().rss / (1024**2), 2),
            },
            "metrics": metrics,
        }

        warnings = []
        if cpu_percent > DEGRADED_PERCENT:
            warnings.append("High CPU usage")
        if memory.percent > DEGRADED_PERCENT:
            warnings.append("High memory usage")
        if warnings:
            health_data["status"] = "degraded"
            health_data["warnings"] = warnings

        return health_data

    except psutil.Error as e:
        logger.error(f"Health check failed: {e}", exc_info=True)
        return {
            "status": "unhealthy",
            "error": str(e),
            "timestamp": datetime.now().isoformat(),
        }
