"""Outbound HTTP client helpers."""

import logging

import httpx

from credcheck.config.constants import BROWSER_HEADERS

logger = logging.getLogger(__name__)


def create_probe_client(
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
    headers: dict[str, str] | None = None,
    follow_redirects: bool = True,
) -> httpx.AsyncClient:
    """
    Create an AsyncClient for probing third-party URLs.

    Redirects are followed by default so that ``response.url`` is the final
    URL. Callers that must vet every hop pass ``follow_redirects=False``.
    Browser-like headers are sent by default because many hosts block
    requests without them.

    Args:
        timeout: Per-request timeout in seconds
        transport: Optional transport (tests pass ``httpx.MockTransport``)
        headers: Headers overriding the browser defaults
        follow_redirects: Whether httpx follows redirects itself
    """
    return httpx.AsyncClient(
        follow_redirects=follow_redirects,
        timeout=httpx.Timeout(timeout),
        headers=headers or BROWSER_HEADERS,
        transport=transport,
    )
