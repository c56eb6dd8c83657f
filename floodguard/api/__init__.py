"""
HTTP API for FloodGuard.

This module contains the FastAPI router exposing the risk,
road and routing operations.
"""

from .routes import build_router

__all__ = ["build_router"]
