"""
Trip Planner - Request orchestration.
Validates the trip, renders the prompt, calls the generator with
bounded retry and turns the reply into a clean plan.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .errors import (
    ConfigurationError,
    ContentBlockedError,
    EmptyResponseError,
    TransientProviderError,
    ValidationError,
)
from .llm_client import GenerationClient, GenerationResult, get_llm_client
from .normalizer import clean_output
from ..config import settings
from ..models.trip import TripRequest

logger = logging.getLogger(__name__)


PLANNER_PROMPT_TEMPLATE = """
Create a detailed {days}-day travel plan.

TRAVEL DETAILS:
- From: {origin}
- To: {destination}
- Transport Mode: {transport}
- Group Type: {group_type}
- Budget: ₹{budget}
- Days: {days}

REQUIREMENTS:
1. Day-wise full itinerary (morning, afternoon, evening).
2. Best transport suggestions based on mode: {transport}.
3. Include approximate travel cost from {origin} to {destination}.
4. Food recommendations (cheap + famous options).
5. Must follow the group type ({group_type}) for stay, food, and activities.
6. Very detailed cost breakdown for:
   - Travel
   - Food
   - Accommodation
   - Local transport
   - Extras
7. Make it realistic and easy to follow.
8. Keep recommendations low-cost to fit within ₹{budget} budget.
"""


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))  # 15000.0 -> "15000"
    return str(value)


def build_prompt(trip: TripRequest) -> str:
    """Render the trip into the fixed planning prompt."""
    return PLANNER_PROMPT_TEMPLATE.format(
        days=_text(trip.number_of_days),
        origin=_text(trip.origin_city),
        destination=_text(trip.destination),
        transport=_text(trip.transport_mode),
        group_type=_text(trip.group_type),
        budget=_text(trip.budget_amount),
    )


class TripPlanner:
    """Turns a TripRequest into a cleaned plan text."""

    def __init__(
        self,
        client: GenerationClient,
        api_key: Optional[str],
        max_attempts: int = 3,
        retry_delay_ms: int = 1000,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.client = client
        self.api_key = api_key
        self.max_attempts = max(1, max_attempts)
        self.retry_delay_ms = retry_delay_ms
        self._sleep = sleep

    async def generate(self, trip: TripRequest) -> str:
        """
        Generate a plan for the trip.

        Args:
            trip: The caller's trip parameters

        Returns:
            The plan text with markdown removed

        Raises:
            ConfigurationError: no API key configured
            ValidationError: a required field is missing
            ContentBlockedError: the provider refused on safety grounds
            EmptyResponseError: the provider returned nothing usable
            ServiceError: any other provider failure, including 503s
                that outlived every retry
        """
        if not self.api_key:
            logger.error("GOOGLE_API_KEY missing")
            raise ConfigurationError()

        missing = trip.get_missing_fields()
        if missing:
            logger.info(f"Rejecting trip request, missing: {', '.join(missing)}")
            raise ValidationError()

        prompt = build_prompt(trip)
        result = await self._generate_with_retry(prompt)
        return self._classify(result)

    async def _generate_with_retry(self, prompt: str) -> GenerationResult:
        """Call the client, retrying only on transient provider errors."""
        attempt = 1
        while True:
            try:
                return await self.client.generate(prompt)
            except TransientProviderError as e:
                if attempt >= self.max_attempts:
                    logger.error(f"FINAL ERROR after {attempt} attempts: {e.message}")
                    raise
                delay_ms = self.retry_delay_ms * attempt
                logger.warning(f"Retry {attempt} after 503. Waiting {delay_ms}ms")
                await self._sleep(delay_ms / 1000)
                attempt += 1

    def _classify(self, result: GenerationResult) -> str:
        if result.text:
            return clean_output(result.text)

        if result.is_blocked:
            logger.warning("Generation blocked by safety filter")
            raise ContentBlockedError()

        logger.warning(f"Model returned no text (finish_reason={result.finish_reason})")
        raise EmptyResponseError()


# Global planner instance
planner: Optional[TripPlanner] = None


def get_planner() -> TripPlanner:
    """Get or create the global planner."""
    global planner
    if planner is None:
        api_key = settings.google_api_key
        if settings.llm_provider == "mock":
            api_key = api_key or "mock"
        planner = TripPlanner(
            client=get_llm_client(),
            api_key=api_key,
            max_attempts=settings.max_retries,
            retry_delay_ms=settings.retry_delay_ms
        )
    return planner
