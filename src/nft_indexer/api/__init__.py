"""HTTP API"""

from .app import app, get_service

__all__ = ["app", "get_service"]
