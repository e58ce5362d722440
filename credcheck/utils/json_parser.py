"""
JSON Parser utility for extracting JSON from LLM responses.
"""
import json
import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)

_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_OBJECT_SPAN_RE = re.compile(r"\{.*\}", re.DOTALL)


def _loads_object(candidate: str) -> Dict[str, Any] | None:
    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        return None
    return value if isinstance(value, dict) else None


class JSONParser:
    """Helper class to extract clean JSON from LLM responses."""

    @staticmethod
    def extract_object(text: str | None) -> Dict[str, Any] | None:
        """Return the JSON object carried by a model reply, or None.

        Tries the whole text, then a fenced code block, then the widest
        ``{...}`` span. Arrays and scalars do not count as objects.
        """
        if not text or not text.strip():
            return None

        parsed = _loads_object(text)
        if parsed is not None:
            return parsed

        match = _CODE_BLOCK_RE.search(text)
        if match:
            parsed = _loads_object(match.group(1))
            if parsed is not None:
                return parsed

        match = _OBJECT_SPAN_RE.search(text)
        if match:
            parsed = _loads_object(match.group(0))
            if parsed is not None:
                return parsed

        logger.warning("JSONParser: Could not extract a JSON object from text (%d chars)", len(text))
        return None
