"""
API v1 package.

Contains versioned API routes for the Vestra authentication API.
"""

from vestra.api.v1.routes import router

__all__ = ["router"]
