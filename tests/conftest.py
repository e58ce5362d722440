"""Pytest configuration and fixtures."""

import copy
from typing import Any

import pytest

from credcheck.config.settings import Settings

_ANALYSIS: dict[str, Any] = {
    "score": 72,
    "analysisType": "pro",
    "confidence": "medium",
    "inputType": "text",
    "summary": "The article makes a verifiable claim about vaccine trials.",
    "articleSummary": "A report on phase 3 trial results.",
    "disclaimer": "This score reflects credibility signals, not truth.",
    "breakdown": {
        "factual": {"points": 18, "reason": "Claims match public records."},
        "tone": {"points": 9, "reason": "Neutral wording."},
        "webCorroboration": {"points": 25, "weight": "30%", "reason": "Several outlets agree."},
    },
    "webPresence": {"level": "strong", "observation": "Widely reported."},
    "corroboration": {
        "outcome": "corroborated",
        "sourcesConsulted": 7,
        "sourceTypes": ["media", "official"],
        "summary": "Three independent outlets report the same figures.",
        "sources": {
            "corroborated": ["https://www.reuters.com/health/trial"],
            "contradicting": [],
            "neutral": [],
        },
    },
    "imageSignals": {
        "disclaimer": "Image analysis is indicative only.",
        "origin": {"classification": "likely_original", "confidence": 0.8, "indicators": ["EXIF present", "No splicing"]},
        "metadata": {"exif": "present", "gps": "absent"},
        "coherence": {"classification": "coherent", "explanation": "Caption matches the scene."},
        "scoring": {
            "severity": 2,
            "penalty": -3,
            "reasoning": "Minor compression artifacts.",
            "severityConditionsMet": ["compression"],
        },
    },
    "result": {
        "score": 72,
        "riskLevel": "low",
        "summary": "Corroborated by wire services.",
        "bestLinks": [
            {
                "title": "Trial results",
                "publisher": "Reuters",
                "url": "https://www.reuters.com/health/trial",
                "trustTier": "high",
                "stance": "corroborating",
                "whyItMatters": "Reports the same efficacy figures.",
            }
        ],
        "sources": [
            {
                "title": f"Source {i}",
                "publisher": f"Publisher {i}",
                "url": f"https://outlet{i}.example.org/story-{i}",
                "trustTier": "medium",
                "stance": "neutral",
                "whyItMatters": f"Context item {i}.",
            }
            for i in range(5)
        ],
    },
}


@pytest.fixture
def settings():
    """Provide settings fixture isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def analysis():
    """A fresh, fully populated analysis document."""
    return copy.deepcopy(_ANALYSIS)
