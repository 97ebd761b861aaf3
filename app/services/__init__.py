"""Services for the trip plan service."""
from .llm_client import GeminiClient, GenerationResult
from .normalizer import clean_output
from .planner import TripPlanner, build_prompt

__all__ = [
    "GeminiClient",
    "GenerationResult",
    "clean_output",
    "TripPlanner",
    "build_prompt",
]
