# backend/phoneshop/routes/system.py
"""
System health and version endpoints.
"""

import sys
from flask import Blueprint, current_app

from ..time_utils import now_iso

API_VERSION = "2.0"

system_bp = Blueprint("system", __name__)


@system_bp.get("/health")
def health():
    """Liveness probe. Does not reveal which key-value backend is in use."""
    return {"status": "ok", "version": API_VERSION}


@system_bp.get("/version")
def version():
    """
    Version endpoint for deployment debugging.

    Returns non-sensitive information about the deployment:
    - API version
    - Environment (development/production)
    - Python version
    - Server timestamp
    """
    # Determine environment from Flask config
    env = "production" if not current_app.debug else "development"

    return {
        "api_version": API_VERSION,
        "environment": env,
        "python_version": sys.version.split()[0],
        "server_time": now_iso(),
    }
