"""
Backend API package initialization.

This package contains FastAPI router modules for the campaign dashboard:
- spend_optimization: Spend optimization engine (ad-hoc, per campaign, batch)
"""

from campaign_backend.api.spend_optimization import router as spend_optimization_router

__all__ = [
    "spend_optimization_router",
]
