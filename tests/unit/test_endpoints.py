"""Tests for the HTTP endpoints."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from credcheck.api.dependencies import (
    get_link_verifier,
    get_outbound_checker,
    get_translation_service,
)
from credcheck.app import app
from credcheck.config.settings import Settings
from credcheck.services.links import LinkVerifier, OutboundLinkChecker
from credcheck.services.translation import TranslationService


def _ok(request: httpx.Request) -> httpx.Response:
    if request.url.host == "dead.example.com":
        return httpx.Response(404)
    return httpx.Response(200)


def _chat_client(content):
    reply = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    create = AsyncMock(return_value=reply)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_link_verifier] = lambda: LinkVerifier(
        settings, transport=httpx.MockTransport(_ok)
    )
    app.dependency_overrides[get_outbound_checker] = lambda: OutboundLinkChecker(
        settings,
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, html='<a href="http://bit.ly/x">x</a>')
        ),
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_translation(service: TranslationService) -> None:
    app.dependency_overrides[get_translation_service] = lambda: service


# ==========================================
#  HEALTH & CORS
# ==========================================


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_cors_preflight(client):
    response = client.options(
        "/api/verify-urls",
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert response.text == "OK"


def test_cors_header_on_error_response(client):
    response = client.post("/api/verify-urls", json={}, headers={"Origin": "https://app.example.com"})
    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"


# ==========================================
#  VERIFY URLS
# ==========================================


def test_verify_urls(client):
    payload = {
        "urls": [
            {"url": "https://ok.example.com/story/one", "name": "Ok", "snippet": "A story"},
            {"url": "https://dead.example.com/story/two"},
        ]
    }
    response = client.post("/api/verify-urls", json=payload)
    assert response.status_code == 200

    results = response.json()["results"]
    assert results[0] == {
        "url": "https://ok.example.com/story/one",
        "originalUrl": "https://ok.example.com/story/one",
        "isValid": True,
        "finalUrl": "https://ok.example.com/story/one",
        "status": 200,
    }
    assert results[1]["isValid"] is False
    assert results[1]["status"] == 404
    assert results[1]["reason"] == "HTTP 404"


def test_verify_urls_truncates_to_twenty(client):
    payload = {"urls": [{"url": f"https://s{i}.example.com/story/{i}"} for i in range(25)]}
    response = client.post("/api/verify-urls", json=payload)
    assert response.status_code == 200
    assert len(response.json()["results"]) == 20


def test_verify_urls_empty_list(client):
    response = client.post("/api/verify-urls", json={"urls": []})
    assert response.status_code == 200
    assert response.json() == {"results": []}


@pytest.mark.parametrize("payload", [{}, {"urls": "https://example.com"}, {"urls": [{"name": "no url"}]}])
def test_verify_urls_invalid_body(client, payload):
    response = client.post("/api/verify-urls", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid 'urls'"}


def test_verify_urls_unexpected_error(client):
    failing = AsyncMock()
    failing.verify_batch.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_link_verifier] = lambda: failing
    response = client.post("/api/verify-urls", json={"urls": [{"url": "https://a.example.com/x/y"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


# ==========================================
#  OUTBOUND LINKS
# ==========================================


def test_check_outbound_links(client):
    response = client.post("/api/check-outbound-links", json={"url": "https://news.example.com/a"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["totalFound"] == 1
    assert body["links"][0]["domain"] == "bit.ly"
    assert body["links"][0]["riskScore"] == 25
    assert body["links"][0]["label"] == "Unknown"
    assert "proMessage" not in body


def test_check_outbound_links_private_target(client):
    response = client.post("/api/check-outbound-links", json={"url": "http://localhost:8080/"})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"] == "Invalid URL"


def test_check_outbound_links_missing_url(client):
    response = client.post("/api/check-outbound-links", json={"language": "fr"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid 'url'"}


# ==========================================
#  TRANSLATION
# ==========================================


def test_translate_analysis_merges(client, settings, analysis):
    translated = dict(analysis, summary="Résumé traduit.", score=0)
    _use_translation(TranslationService(settings, client=_chat_client(json.dumps(translated))))

    response = client.post(
        "/api/translate-analysis",
        json={"analysisData": analysis, "targetLanguage": "fr"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["summary"] == "Résumé traduit."
    assert body["score"] == 72
    assert body["corroboration"] == analysis["corroboration"]


def test_translate_analysis_malformed_reply_returns_original(client, settings, analysis):
    _use_translation(TranslationService(settings, client=_chat_client("I cannot do that.")))
    response = client.post(
        "/api/translate-analysis",
        json={"analysisData": analysis, "targetLanguage": "fr"},
    )
    assert response.status_code == 200
    assert response.json() == analysis


def test_translate_analysis_missing_document(client):
    response = client.post("/api/translate-analysis", json={"targetLanguage": "fr"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid 'analysisData'"}


def test_translate_analysis_without_api_key(client, analysis):
    _use_translation(TranslationService(Settings(_env_file=None, translation_api_key=None)))
    response = client.post(
        "/api/translate-analysis",
        json={"analysisData": analysis, "targetLanguage": "fr"},
    )
    assert response.status_code == 500
    assert "error" in response.json()


# ==========================================
#  SOURCE COVERAGE
# ==========================================


def test_source_coverage(client):
    payload = {
        "sources": [
            {"url": "https://www.reuters.com/a", "title": "Reuters", "stance": "corroborating"},
            {"url": "https://blog.example.com/b", "title": "Blog", "stance": "contradicting"},
            {"url": "https://other.example.org/c", "stance": "neutral", "trustTier": "low"},
        ],
        "sourcesConsulted": 4,
    }
    response = client.post("/api/source-coverage", json=payload)
    assert response.status_code == 200

    body = response.json()
    assert body["webCoverage"] == "moderate"
    assert body["sourceDiversity"] == "medium"
    assert body["contradictionCheck"] == "clear"
    assert body["totalSources"] == 4
    assert [s["trustTier"] for s in body["sources"]] == ["high", "medium", "low"]
