"""HTTP API for the trip plan service."""
from .routes import router

__all__ = ["router"]
