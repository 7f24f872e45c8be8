"""
Task Scheduler Security Configuration
CORS origins and response security headers
"""

import os
from typing import List


# ============ CORS Configuration ============

def get_allowed_origins() -> List[str]:
    """
    Get list of allowed CORS origins.
    Configurable via CORS_ORIGINS environment variable.
    """
    # Get from environment (comma-separated)
    env_origins = os.getenv("CORS_ORIGINS", "")
    if env_origins:
        return [o.strip() for o in env_origins.split(",") if o.strip()]

    # Default origins for local development of the browser UI
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    frontend_url = os.getenv("FRONTEND_URL", "").rstrip("/")
    if frontend_url and frontend_url not in origins:
        origins.append(frontend_url)

    return origins


# ============ Security Headers ============

SECURITY_HEADERS = {
    # Prevent clickjacking
    "X-Frame-Options": "DENY",

    # Prevent MIME type sniffing
    "X-Content-Type-Options": "nosniff",

    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}
