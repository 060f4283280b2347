"""
Diagrams router package.

Exports the router for diagram management endpoints.
"""

from .diagrams_router import router

__all__ = ["router"]
