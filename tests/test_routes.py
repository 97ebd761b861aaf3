"""End-to-end tests for the HTTP API."""
import httpx
import pytest
from app.services.errors import ServiceError, TransientProviderError
from app.services.llm_client import GeminiClient, GenerationResult
from app.services.planner import TripPlanner


VALID_BODY = {
    "fromCity": "Delhi",
    "destination": "Goa",
    "budget": 15000,
    "days": 3,
    "groupType": "friends",
    "transport": "train",
}

MARKDOWN_PLAN = """## Day 1
**Morning:** Baga Beach
* Lunch at a shack

---

> Carry sunscreen"""


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, api_client):
        response = await api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestGenerate:
    """POST /generate status codes and bodies."""

    @pytest.mark.asyncio
    async def test_success_strips_markup(self, api_client, use_planner, make_planner):
        planner, client = make_planner(GenerationResult(text=MARKDOWN_PLAN, finish_reason="STOP"))
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 200
        plan = response.json()["plan"]
        assert plan == "Day 1\nMorning: Baga Beach\n Lunch at a shack\n\nCarry sunscreen"
        assert client.calls == 1
        assert "Delhi" in client.prompts[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["fromCity", "destination", "budget", "days"])
    async def test_missing_required_field(self, api_client, use_planner, make_planner, field):
        planner, client = make_planner(GenerationResult(text="plan"))
        use_planner(planner)
        body = {k: v for k, v in VALID_BODY.items() if k != field}

        response = await api_client.post("/generate", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields."}
        assert client.calls == 0

    @pytest.mark.asyncio
    async def test_empty_string_field(self, api_client, use_planner, make_planner):
        planner, client = make_planner(GenerationResult(text="plan"))
        use_planner(planner)

        response = await api_client.post("/generate", json={**VALID_BODY, "fromCity": ""})

        assert response.status_code == 400
        assert client.calls == 0

    @pytest.mark.asyncio
    async def test_malformed_body(self, api_client, use_planner, make_planner):
        planner, client = make_planner(GenerationResult(text="plan"))
        use_planner(planner)

        response = await api_client.post("/generate", json=["Delhi", "Goa"])

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields."}
        assert client.calls == 0

    @pytest.mark.asyncio
    async def test_missing_api_key(self, api_client, use_planner, make_planner):
        planner, client = make_planner(GenerationResult(text="plan"), api_key=None)
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "API key missing on server."}
        assert client.calls == 0

    @pytest.mark.asyncio
    async def test_safety_block(self, api_client, use_planner, make_planner):
        planner, _ = make_planner(GenerationResult(finish_reason="SAFETY"))
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 400
        assert response.json() == {"error": "Blocked by safety filter."}

    @pytest.mark.asyncio
    async def test_empty_response(self, api_client, use_planner, make_planner):
        planner, _ = make_planner(GenerationResult(finish_reason="STOP"))
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "Model returned empty response."}

    @pytest.mark.asyncio
    async def test_provider_error_message(self, api_client, use_planner, make_planner):
        planner, _ = make_planner(ServiceError("API key not valid.", provider_status=400))
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "API key not valid."}

    @pytest.mark.asyncio
    async def test_generic_server_error(self, api_client, use_planner, make_planner):
        planner, _ = make_planner(ServiceError())
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "Server error."}

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, api_client, use_planner, make_planner, recording_sleep):
        planner, client = make_planner(TransientProviderError("The model is overloaded.", provider_status=503))
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "The model is overloaded."}
        assert client.calls == 3
        assert recording_sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self, api_client, use_planner, make_planner, recording_sleep):
        planner, client = make_planner(
            TransientProviderError(provider_status=503),
            TransientProviderError(provider_status=503),
            GenerationResult(text="**Goa** plan"),
        )
        use_planner(planner)

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"plan": "Goa plan"}
        assert client.calls == 3
        assert recording_sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_provider_error_with_structured_message(self, api_client, use_planner, recording_sleep):
        """An error body whose message is not text still yields a JSON error."""
        body = {"error": {"code": 400, "message": {"detail": "bad"}}}
        client = GeminiClient(api_key="k", transport=httpx.MockTransport(lambda r: httpx.Response(400, json=body)))
        use_planner(TripPlanner(client=client, api_key="k", sleep=recording_sleep))

        response = await api_client.post("/generate", json=VALID_BODY)

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Server error."}
