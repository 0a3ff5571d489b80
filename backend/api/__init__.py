"""
Tradedesk API package.

Provides the FastAPI application that serves tier access decisions to the
trading dashboard.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
