"""
Task Scheduler - FastAPI Backend
Personal task scheduler API backed by a JSON file
"""

import os
import time
from contextlib import asynccontextmanager
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logging_config import setup_logging, get_logger

setup_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)

from constants import APP_NAME, APP_VERSION, APP_DESCRIPTION
from dependencies import get_store
from errors import register_error_handlers
from health_check import check_storage_health, router as health_router
from middleware import PerformanceMiddleware, SecurityHeadersMiddleware
from models.tasks import TaskStore, get_task_store
from rate_limiting import setup_rate_limiting
from request_logging import setup_request_logging
from routes import tasks_router
from schemas import HealthCheck
from security_config import get_allowed_origins


# ============ App Lifecycle ============

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tasks file on startup"""
    store = get_task_store()
    try:
        store.init_file()
    except Exception as e:
        logger.error(f"Failed to initialize tasks file: {e}", exc_info=True)
        raise
    logger.info(f"{APP_NAME} API ready, tasks file: {store.path}")
    yield
    logger.info(f"Shutting down {APP_NAME} API...")


# ============ Create App ============

app = FastAPI(
    title=f"{APP_NAME} API",
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "System", "description": "Service banner"},
        {"name": "Health", "description": "Liveness and readiness probes"},
        {"name": "Tasks", "description": "Create, list, update, toggle and delete tasks"},
    ]
)

register_error_handlers(app)

# Rate Limiting
setup_rate_limiting(app)

# Performance & Security Middleware (Order matters!)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(PerformanceMiddleware)
setup_request_logging(app)

# CORS for the browser UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tasks_router)
app.include_router(health_router)


# ============ Public Routes ============

@app.get("/", response_model=HealthCheck, tags=["System"])
async def root(store: TaskStore = Depends(get_store)):
    """Service banner with the tasks file status"""
    storage = await check_storage_health(store)
    return HealthCheck(
        status="online" if storage["status"] == "healthy" else "degraded",
        timestamp=time.time(),
        storage=storage["status"],
    )


# ============ Run Server ============

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3001")),
        reload=os.getenv("RELOAD", "0") == "1",
    )
