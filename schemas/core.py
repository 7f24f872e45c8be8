"""
Task Scheduler - Pydantic Schemas
Service-level response models
"""

from pydantic import BaseModel, Field
from typing import Optional

from constants import APP_NAME, APP_VERSION


# ============ Health Check ============

class HealthCheck(BaseModel):
    """Health check response"""
    status: str = Field("healthy", description="Service status: online or degraded")
    timestamp: Optional[float] = Field(None, description="Unix timestamp of health check")
    storage: str = Field("healthy", description="Tasks file status: healthy or unhealthy")
    version: str = Field(APP_VERSION, description="API version")
    service: str = Field(APP_NAME, description="Service name")
