"""
Mock LLM Client - Offline stand-in for the Gemini API.
Builds a markdown-formatted plan from the prompt so the full
pipeline (including cleanup) runs without network access or a key.
"""
import re
import logging

from .llm_client import GenerationResult

logger = logging.getLogger(__name__)

SLOTS = ["Morning", "Afternoon", "Evening"]
CATEGORIES = ["Travel", "Food", "Accommodation", "Local transport", "Extras"]


class MockGenerationClient:
    """Deterministic plan generator driven by the prompt text."""

    def __init__(self):
        self.model = "mock-plan"

    async def generate(self, prompt: str) -> GenerationResult:
        info = self._extract_trip_info(prompt)
        logger.info(f"Mock plan for {info['destination']} ({info['days']} days)")
        return GenerationResult(text=self._render_plan(info), finish_reason="STOP")

    def _extract_trip_info(self, prompt: str) -> dict:
        """Pull the fields back out of the rendered prompt."""
        res = {"days": 1, "destination": "your destination", "origin": "home", "budget": None}

        d_match = re.search(r"(\d+)-day", prompt)
        if d_match:
            res["days"] = max(1, min(int(d_match.group(1)), 14))

        for key, label in (("destination", "To"), ("origin", "From"), ("budget", "Budget")):
            match = re.search(rf"^- {label}: (.+)$", prompt, re.MULTILINE)
            if match and match.group(1).strip():
                res[key] = match.group(1).strip()

        return res

    def _render_plan(self, info: dict) -> str:
        lines = [f"# {info['days']}-Day Plan: {info['origin']} to {info['destination']}", ""]

        for day in range(1, info["days"] + 1):
            lines.append(f"## Day {day}")
            for slot in SLOTS:
                lines.append(f"- **{slot}:** Explore {info['destination']}")
            lines.append("")

        lines.append("---")
        lines.append("## Cost Breakdown")
        for category in CATEGORIES:
            lines.append(f"* {category}: see local prices")
        if info["budget"]:
            lines.append(f"> Keep the total within {info['budget']}.")

        return "\n".join(lines)
