"""Outbound link liveness and relevance verifier."""

import asyncio
import dataclasses
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import httpx

from credcheck.config.constants import HEAD_REJECTED_STATUSES, InvalidReason
from credcheck.config.settings import Settings
from credcheck.infrastructure.http.client import create_probe_client
from credcheck.infrastructure.logging.logger import StructuredLogger
from credcheck.services.links.models import UrlCandidate, VerificationResult
from credcheck.services.links.policy import (
    destination_key,
    encoded_path,
    has_keyword_overlap,
    is_generic_path,
    status_rejection,
)

logger = logging.getLogger(__name__)

# Failures of a single request that trigger the HEAD -> GET fallback.
_REQUEST_ERRORS: tuple[type[Exception], ...] = (httpx.HTTPError, httpx.InvalidURL)


class ProbeState(str, Enum):
    """States of the per-URL fetch-with-fallback machine."""

    TRY_HEAD = "try_head"
    FALLBACK_GET = "fallback_get"
    DONE = "done"
    FAILED = "failed"


def next_probe_state(
    state: ProbeState,
    status_code: int | None = None,
    error: BaseException | None = None,
) -> ProbeState:
    """
    Transition after one request.

    HEAD falls back to GET when it raises or is answered with 403/405.
    GET is the last attempt: it either completes or fails.
    """
    if state is ProbeState.TRY_HEAD:
        if error is not None or status_code in HEAD_REJECTED_STATUSES:
            return ProbeState.FALLBACK_GET
        return ProbeState.DONE
    if state is ProbeState.FALLBACK_GET:
        return ProbeState.FAILED if error is not None else ProbeState.DONE
    return state


@dataclass(frozen=True)
class ProbeOutcome:
    """Status and post-redirect URL of the response that ended a probe."""

    status: int
    final_url: str
    method: str


def deduplicate_results(results: Sequence[VerificationResult]) -> list[VerificationResult]:
    """
    Downgrade valid results whose destination was already seen.

    The key is the lowercased host + path of ``final_url``; the first
    occurrence wins. Invalid results and URLs that do not parse pass
    through untouched.
    """
    seen: set[str] = set()
    deduped: list[VerificationResult] = []
    for result in results:
        if not result.is_valid:
            deduped.append(result)
            continue
        key = destination_key(result.final_url)
        if key is None:
            deduped.append(result)
            continue
        if key in seen:
            deduped.append(
                dataclasses.replace(result, is_valid=False, reason=InvalidReason.DUPLICATE.value)
            )
            continue
        seen.add(key)
        deduped.append(result)
    return deduped


class LinkVerifier:
    """Verifies that candidate outbound links are alive and point at relevant pages."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize link verifier.

        Args:
            settings: Application settings (limits and timeout)
            transport: Optional httpx transport, used by tests to stub the network
        """
        self.settings = settings
        self.timeout = settings.link_verify_timeout
        self.batch_size = settings.link_verify_batch_size
        self.max_count = settings.link_verify_max_urls
        self._transport = transport
        self._structured = StructuredLogger(__name__)

    def _client(self) -> httpx.AsyncClient:
        return create_probe_client(self.timeout, transport=self._transport)

    async def verify_batch(
        self,
        candidates: Sequence[UrlCandidate],
        max_count: int | None = None,
    ) -> list[VerificationResult]:
        """
        Verify up to ``max_count`` candidates, preserving input order.

        Candidates run in groups of ``batch_size``: probes inside a group run
        concurrently and the next group starts only after every probe of the
        current one has resolved. Results are deduplicated by destination.
        Never raises for per-URL failures.
        """
        limit = self.max_count if max_count is None else max_count
        selected = list(candidates[: max(limit, 0)])
        if not selected:
            return []

        start = time.perf_counter()
        results: list[VerificationResult] = []
        async with self._client() as client:
            for offset in range(0, len(selected), self.batch_size):
                group = selected[offset : offset + self.batch_size]
                results.extend(
                    await asyncio.gather(*(self.verify_one(item, client) for item in group))
                )

        deduped = deduplicate_results(results)
        self._structured.log_step(
            "verify_batch",
            {
                "requested": len(candidates),
                "verified": len(deduped),
                "valid": sum(1 for r in deduped if r.is_valid),
                "duplicates": sum(
                    1 for r in deduped if r.reason == InvalidReason.DUPLICATE.value
                ),
            },
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return deduped

    async def verify_one(
        self,
        candidate: UrlCandidate,
        client: httpx.AsyncClient | None = None,
    ) -> VerificationResult:
        """
        Probe and classify one candidate.

        Any failure (malformed URL, DNS, connection reset, timeout) yields an
        invalid result with ``status=0`` and the error message as reason.
        """
        if client is None:
            async with self._client() as own_client:
                return await self.verify_one(candidate, own_client)

        result = VerificationResult.pending(candidate.url)
        try:
            outcome = await asyncio.wait_for(self._probe(client, candidate.url), self.timeout)
        except (TimeoutError, asyncio.TimeoutError):
            result.reason = f"Timed out after {self.timeout:g}s"
            logger.debug("Probe timed out: %s", candidate.url)
            return result
        except Exception as e:
            result.reason = str(e) or InvalidReason.NETWORK_ERROR.value
            logger.debug("Probe failed for %s: %s", candidate.url, result.reason)
            return result

        result.status = outcome.status
        result.final_url = outcome.final_url or candidate.url
        return self._classify(candidate, result)

    async def _probe(self, client: httpx.AsyncClient, url: str) -> ProbeOutcome:
        """Run the HEAD -> GET machine and return the response that ended it."""
        parsed = httpx.URL(url)
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise httpx.UnsupportedProtocol(f"Unsupported URL: {url}")

        state = ProbeState.TRY_HEAD
        while True:
            if state is ProbeState.TRY_HEAD:
                try:
                    response = await client.head(url)
                except _REQUEST_ERRORS as e:
                    logger.debug("HEAD failed for %s (%s), falling back to GET", url, e)
                    state = next_probe_state(state, error=e)
                    continue
                state = next_probe_state(state, status_code=response.status_code)
                if state is ProbeState.DONE:
                    return ProbeOutcome(response.status_code, str(response.url), "HEAD")
                logger.debug("HEAD returned %s for %s, retrying with GET", response.status_code, url)
                continue

            # The body is never read: status and final URL are all that matter.
            async with client.stream("GET", url) as response:
                return ProbeOutcome(response.status_code, str(response.url), "GET")

    def _classify(self, candidate: UrlCandidate, result: VerificationResult) -> VerificationResult:
        """Apply status policy, then the generic-redirect relevance check."""
        try:
            hostname = httpx.URL(candidate.url).host
        except (httpx.InvalidURL, TypeError, ValueError):
            hostname = ""

        rejection = status_rejection(result.status, hostname)
        if rejection:
            result.reason = rejection
            return result

        try:
            final_path = encoded_path(httpx.URL(result.final_url))
        except (httpx.InvalidURL, TypeError, ValueError):
            final_path = None

        if final_path is not None and is_generic_path(final_path):
            if not has_keyword_overlap(candidate.snippet, result.final_url):
                result.reason = InvalidReason.GENERIC_PAGE.value
                return result

        result.is_valid = True
        return result
