"""
Task Scheduler Health Check Module
Liveness and readiness endpoints
"""

import os
import time
from datetime import datetime, timezone
from typing import Dict, Any
from fastapi import APIRouter, Depends

from constants import APP_VERSION
from dependencies import get_store
from errors import StorageError
from models.tasks import TaskStore

router = APIRouter(tags=["Health"])

# Track application start time
_start_time = time.time()


def get_uptime_seconds() -> float:
    """Get application uptime in seconds"""
    return time.time() - _start_time


def format_uptime(seconds: float) -> str:
    """Format uptime as human-readable string"""
    days, remainder = divmod(int(seconds), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")

    return " ".join(parts)


async def check_storage_health(store: TaskStore) -> Dict[str, Any]:
    """Check that the tasks file exists and parses"""
    if not os.path.exists(store.path):
        return {"status": "unhealthy", "error": "tasks file not found", "path": store.path}
    try:
        count = len(await store.list_tasks())
    except StorageError as e:
        return {"status": "unhealthy", "error": e.message, "path": store.path}
    return {"status": "healthy", "tasks": count}


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint for load balancers.
    Returns 200 if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": format_uptime(get_uptime_seconds()),
        "version": APP_VERSION,
    }


@router.get("/health/live")
async def liveness_check():
    """Returns 200 if the process is alive."""
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(store: TaskStore = Depends(get_store)):
    """
    Checks if the service is ready to accept traffic.
    """
    storage = await check_storage_health(store)
    return {
        "status": "ready" if storage["status"] == "healthy" else "not_ready",
        "checks": {"storage": storage},
    }
