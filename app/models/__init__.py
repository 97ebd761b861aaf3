"""Data models for the trip plan service."""
from .trip import TripRequest, PlanResponse, ErrorResponse, REQUIRED_FIELDS

__all__ = [
    "TripRequest",
    "PlanResponse",
    "ErrorResponse",
    "REQUIRED_FIELDS",
]
