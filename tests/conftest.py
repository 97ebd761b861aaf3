import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.services.llm_client import GenerationResult
from app.services.planner import TripPlanner, get_planner


class FakeGenerationClient:
    """Replays a scripted list of results or exceptions, one per call."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.prompts = []

    async def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.prompts)


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def make_planner(recording_sleep):
    """Build a planner around scripted provider outcomes."""
    def _make(*outcomes, api_key="test-key", **options):
        client = FakeGenerationClient(*outcomes)
        planner = TripPlanner(client=client, api_key=api_key, sleep=recording_sleep, **options)
        return planner, client
    return _make


@pytest.fixture
async def api_client():
    """Async client for the app; tests install a planner via `use_planner`."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def use_planner():
    def _use(planner: TripPlanner):
        app.dependency_overrides[get_planner] = lambda: planner
    return _use
