"""
Error taxonomy for plan generation.
Each error knows the HTTP status and message it is reported with.
"""
from typing import Optional


class TripPlannerError(Exception):
    """Base class for every failure surfaced by the planner."""

    status_code: int = 500
    default_message: str = "Server error."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(TripPlannerError):
    """The provider credential is not configured."""

    default_message = "API key missing on server."


class ValidationError(TripPlannerError):
    """A required trip field is missing or empty."""

    status_code = 400
    default_message = "Missing required fields."


class ServiceError(TripPlannerError):
    """Provider or network failure that is not worth retrying."""

    def __init__(self, message: Optional[str] = None, provider_status: Optional[int] = None):
        super().__init__(message)
        self.provider_status = provider_status


class TransientProviderError(ServiceError):
    """Provider reported temporary overload (HTTP 503)."""


class ContentBlockedError(TripPlannerError):
    """Provider declined the prompt on safety grounds."""

    status_code = 400
    default_message = "Blocked by safety filter."


class EmptyResponseError(TripPlannerError):
    """Provider answered without text and without a block reason."""

    default_message = "Model returned empty response."
