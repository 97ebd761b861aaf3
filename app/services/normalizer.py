"""
Output Normalizer - strips lightweight markdown from generated plans.
"""
import re
from typing import Optional


_HEADING = re.compile(r"^#{1,6}\s?", re.MULTILINE)
_UNDERLINE = re.compile(r"_{1,2}")
_RULE = re.compile(r"-{3,}")
_QUOTE = re.compile(r">\s?")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")


def _clean_once(text: str) -> str:
    text = text.replace("**", "")           # bold
    text = text.replace("*", "")            # bullets / italics
    text = _UNDERLINE.sub("", text)
    text = _HEADING.sub("", text)           # "## Morning"
    text = _RULE.sub("", text)              # "---"
    text = _QUOTE.sub("", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    return text.strip()


def clean_output(text: Optional[str]) -> str:
    """
    Remove markdown artifacts from model output.

    Every step only deletes characters, so repeating the pass until nothing
    changes terminates and makes the result stable under re-application.

    Args:
        text: Raw generated text, possibly None or empty

    Returns:
        Cleaned plain text ("" for empty input)
    """
    if not text:
        return ""

    cleaned = _clean_once(text)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again
